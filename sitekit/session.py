"""Session accessors for requests handled behind ``SessionMiddleware``."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

OLD_INPUT_SESSION_KEY = "_old_input"


def session(request: Request, key: str | None = None) -> Any:
    """Return the request session, or a single item from it (None when absent)."""

    if key is None:
        return request.session
    return request.session.get(key)


def store_old_input(session_data: MutableMapping[str, Any], get: object, post: object) -> None:
    session_data[OLD_INPUT_SESSION_KEY] = {"get": get, "post": post}


class OldInputMiddleware(BaseHTTPMiddleware):
    """
    Give flashed input a one-request lifetime.

    Input stored by the previous request is moved out of the session and onto
    ``request.state.old_input`` before the handler runs. Must sit inside
    ``SessionMiddleware``.
    """

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        request.state.old_input = request.session.pop(OLD_INPUT_SESSION_KEY, None)
        return await call_next(request)


def old(request: Request, key: str, default: Any = None) -> Any:
    """Return input flashed by the previous request, preferring form fields over query parameters."""

    stored = getattr(request.state, "old_input", None)
    if not isinstance(stored, dict):
        return default
    for source in ("post", "get"):
        values = stored.get(source) or {}
        if key in values:
            return values[key]
    return default
