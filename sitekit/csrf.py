"""CSRF token helpers backed by the request session."""

from __future__ import annotations

import hmac
from collections.abc import MutableMapping
from secrets import token_hex
from typing import Any

from sitekit.attributes import stringify_attributes
from sitekit.config import Settings

CSRF_SESSION_KEY = "_csrf_hash"


def csrf_token(settings: Settings) -> str:
    """Return the CSRF field name used by forms and script clients."""

    return settings.csrf_token_name


def csrf_hash(session: MutableMapping[str, Any]) -> str:
    """Return the session's CSRF hash, generating one on first use."""

    current = session.get(CSRF_SESSION_KEY)
    if isinstance(current, str) and current:
        return current

    generated = token_hex(16)
    session[CSRF_SESSION_KEY] = generated
    return generated


def csrf_field(session: MutableMapping[str, Any], settings: Settings) -> str:
    """Return a hidden input carrying the CSRF hash for hand-built forms."""

    attributes = {
        "type": "hidden",
        "name": csrf_token(settings),
        "value": csrf_hash(session),
    }
    return f"<input{stringify_attributes(attributes)}>"


def verify_csrf_hash(session: MutableMapping[str, Any], submitted: str | None) -> bool:
    """
    Compare a submitted token with the session hash in constant time.

    A session without a hash, or a missing submission, fails verification.
    """

    expected = session.get(CSRF_SESSION_KEY)
    if not isinstance(expected, str) or not expected or not submitted:
        return False
    return hmac.compare_digest(expected, submitted)
