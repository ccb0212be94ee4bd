"""Reverse lookup of named routes."""

from __future__ import annotations

from typing import Any

from starlette.routing import NoMatchFound, Router


class RouteNotFoundError(LookupError):
    """Raised when no route matches a name and its parameters."""


def route_to(router: Router, name: str, /, **path_params: Any) -> str:
    """Return the URL path for the named route."""

    try:
        return str(router.url_path_for(name, **path_params))
    except NoMatchFound as exc:
        raise RouteNotFoundError(f"No route named {name!r} accepts {sorted(path_params)}") from exc
