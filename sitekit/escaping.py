"""Context-aware output escaping for HTML, attributes, JavaScript, CSS and URLs."""

from __future__ import annotations

import codecs
import re
from typing import Any
from urllib.parse import quote

from markupsafe import escape

ESCAPE_CONTEXTS = frozenset({"html", "js", "css", "url", "attr"})
SUPPORTED_ENCODINGS = frozenset(
    {
        "utf-8",
        "iso8859-1",
        "iso8859-5",
        "iso8859-15",
        "cp866",
        "cp1251",
        "cp1252",
        "koi8-r",
        "big5",
        "gb2312",
        "big5hkscs",
        "shift_jis",
        "euc_jp",
        "mac-roman",
    }
)

_HTML_ATTR_UNSAFE = re.compile(r"[^a-z0-9,.\-_]", re.IGNORECASE | re.ASCII)
_JS_UNSAFE = re.compile(r"[^a-z0-9,._]", re.IGNORECASE | re.ASCII)
_CSS_UNSAFE = re.compile(r"[^a-z0-9]", re.IGNORECASE | re.ASCII)
_HTML_NAMED_ENTITIES = {34: "quot", 38: "amp", 60: "lt", 62: "gt"}


class EscaperError(ValueError):
    """Raised when an escaper cannot be configured."""


class InvalidEscapeContextError(ValueError):
    """Raised when ``esc`` is asked for an unknown context."""


def _canonical_encoding(encoding: str) -> str:
    try:
        return codecs.lookup(encoding).name
    except LookupError as exc:
        raise EscaperError(f"Unknown encoding: {encoding}") from exc


_SUPPORTED_CANONICAL = frozenset(_canonical_encoding(name) for name in SUPPORTED_ENCODINGS)


def _is_passthrough(value: str) -> bool:
    return value == "" or (value.isascii() and value.isdigit())


def _html_attr_replacement(match: re.Match[str]) -> str:
    char = match.group(0)
    codepoint = ord(char)

    if (codepoint <= 0x1F and char not in "\t\n\r") or 0x7F <= codepoint <= 0x9F:
        return "&#xFFFD;"

    named = _HTML_NAMED_ENTITIES.get(codepoint)
    if named is not None:
        return f"&{named};"
    if codepoint > 0xFF:
        return f"&#x{codepoint:04X};"
    return f"&#x{codepoint:02X};"


def _js_replacement(match: re.Match[str]) -> str:
    codepoint = ord(match.group(0))
    if codepoint < 0x100:
        return f"\\x{codepoint:02X}"
    if codepoint > 0xFFFF:
        # Astral code points are written as a UTF-16 surrogate pair.
        offset = codepoint - 0x10000
        high = 0xD800 + (offset >> 10)
        low = 0xDC00 + (offset & 0x3FF)
        return f"\\u{high:04X}\\u{low:04X}"
    return f"\\u{codepoint:04X}"


def _css_replacement(match: re.Match[str]) -> str:
    return f"\\{ord(match.group(0)):X} "


class Escaper:
    """Escape strings for a single output context."""

    def __init__(self, encoding: str | None = None) -> None:
        name = (encoding or "utf-8").strip()
        if not name:
            raise EscaperError("Escaper encoding must not be empty")
        canonical = _canonical_encoding(name)
        if canonical not in _SUPPORTED_CANONICAL:
            raise EscaperError(f"Unsupported escaper encoding: {encoding}")
        self.encoding = canonical

    def escape_html(self, value: str) -> str:
        return str(escape(value))

    def escape_html_attr(self, value: str) -> str:
        if _is_passthrough(value):
            return value
        return _HTML_ATTR_UNSAFE.sub(_html_attr_replacement, value)

    def escape_js(self, value: str) -> str:
        if _is_passthrough(value):
            return value
        return _JS_UNSAFE.sub(_js_replacement, value)

    def escape_css(self, value: str) -> str:
        if _is_passthrough(value):
            return value
        return _CSS_UNSAFE.sub(_css_replacement, value)

    def escape_url(self, value: str) -> str:
        return quote(value, safe="-_.~")


_ESCAPE_METHODS = {
    "html": "escape_html",
    "attr": "escape_html_attr",
    "js": "escape_js",
    "css": "escape_css",
    "url": "escape_url",
}


def esc(data: Any, context: str | None = "html", encoding: str | None = None) -> Any:
    """
    Escape ``data`` for the given output context.

    Lists and dicts are escaped item by item. Strings are escaped with the
    matching ``Escaper`` method; ``raw`` or an empty context leaves them alone.
    Other values are returned untouched.
    """

    if isinstance(data, dict):
        return {key: esc(value, context, encoding) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [esc(value, context, encoding) for value in data]
    if not isinstance(data, str):
        return data

    normalized = (context or "").strip().lower()
    if not normalized or normalized == "raw":
        return data
    if normalized not in ESCAPE_CONTEXTS:
        raise InvalidEscapeContextError(f"Invalid escape context provided: {context}")

    escaper = Escaper(encoding)
    return getattr(escaper, _ESCAPE_METHODS[normalized])(data)
