"""Helpers for stripping invisible control characters from untrusted text."""

from __future__ import annotations

import logging
import re
from typing import AnyStr

logger = logging.getLogger("sitekit.sanitization")

# Every control character except tab (0x09), newline (0x0A) and carriage return (0x0D).
_URL_ENCODED_PATTERNS = (
    r"%0[0-8bcef]",  # url encoded 00-08, 11, 12, 14, 15
    r"%1[0-9a-f]",  # url encoded 16-31
)
_RAW_CONTROL_PATTERN = r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]+"

_TEXT_URL_ENCODED = tuple(re.compile(pattern, re.IGNORECASE) for pattern in _URL_ENCODED_PATTERNS)
_TEXT_RAW = re.compile(_RAW_CONTROL_PATTERN)
_BYTES_URL_ENCODED = tuple(
    re.compile(pattern.encode("ascii"), re.IGNORECASE) for pattern in _URL_ENCODED_PATTERNS
)
_BYTES_RAW = re.compile(_RAW_CONTROL_PATTERN.encode("ascii"))


def _active_patterns(value: str | bytes, url_encoded: bool) -> list[re.Pattern]:
    if isinstance(value, bytes):
        encoded, raw = _BYTES_URL_ENCODED, _BYTES_RAW
    else:
        encoded, raw = _TEXT_URL_ENCODED, _TEXT_RAW
    patterns: list[re.Pattern] = list(encoded) if url_encoded else []
    patterns.append(raw)
    return patterns


def remove_invisible_characters(
    value: AnyStr,
    url_encoded: bool = True,
    *,
    max_passes: int | None = None,
) -> AnyStr:
    """
    Remove invisible control characters such as the NUL in ``java\\0script``.

    With ``url_encoded`` the percent-encoded forms of the same characters are
    removed too. Passes repeat until one makes no replacement, bounded by
    ``max_passes`` (default: one more pass than the input has characters).
    """

    if not value:
        return value

    patterns = _active_patterns(value, url_encoded)
    limit = len(value) + 1 if max_passes is None else max_passes

    passes = 0
    while passes < limit:
        passes += 1
        total = 0
        for pattern in patterns:
            value, count = pattern.subn(value[:0], value)
            total += count
        if not total:
            return value

    logger.warning("sanitize_pass_limit_reached passes=%s remaining_length=%s", passes, len(value))
    return value


def sanitize_json_strings(value: object, *, url_encoded: bool = True) -> object:
    """Recursively sanitize all strings inside JSON-like payloads."""

    if isinstance(value, str):
        return remove_invisible_characters(value, url_encoded)
    if isinstance(value, list):
        return [sanitize_json_strings(item, url_encoded=url_encoded) for item in value]
    if isinstance(value, dict):
        return {key: sanitize_json_strings(item, url_encoded=url_encoded) for key, item in value.items()}
    return value
