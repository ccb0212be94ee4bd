"""Severity-named logging with ``{placeholder}`` context interpolation."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

LOG_LEVELS: dict[str, int] = {
    "emergency": logging.CRITICAL,
    "alert": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "notice": logging.INFO,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

_PLACEHOLDER_RE = re.compile(r"\{([A-Za-z0-9_.]+)\}")
_default_logger = logging.getLogger("sitekit")


class InvalidLogLevelError(ValueError):
    """Raised when a log level name is not recognised."""


def interpolate(message: str, context: Mapping[str, Any] | None) -> str:
    """Replace ``{name}`` placeholders with context values; unknown names stay as written."""

    if not context:
        return message

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in context:
            return match.group(0)
        return str(context[name])

    return _PLACEHOLDER_RE.sub(_replace, message)


def log_message(
    level: str,
    message: str,
    context: Mapping[str, Any] | None = None,
    *,
    logger: logging.Logger | None = None,
) -> bool:
    """Log ``message`` at a named severity, returning whether it was emitted."""

    numeric_level = LOG_LEVELS.get(level.strip().lower())
    if numeric_level is None:
        raise InvalidLogLevelError(f"Unsupported log level: {level}")

    target = logger or _default_logger
    if not target.isEnabledFor(numeric_level):
        return False

    target.log(numeric_level, interpolate(message, context))
    return True
