"""Redirect helpers that understand named routes."""

from __future__ import annotations

from typing import Any

from starlette.requests import Request
from starlette.responses import RedirectResponse

from sitekit.routing import RouteNotFoundError, route_to
from sitekit.sanitization import sanitize_json_strings
from sitekit.session import store_old_input

_SAFE_METHODS = {"GET", "HEAD"}


def _redirect_status(request: Request) -> int:
    return 302 if request.method.upper() in _SAFE_METHODS else 303


def resolve_redirect_target(request: Request, target: str, /, **path_params: Any) -> str:
    try:
        return route_to(request.app.router, target, **path_params)
    except RouteNotFoundError:
        return target


def redirect(request: Request, target: str, /, **path_params: Any) -> RedirectResponse:
    """
    Redirect to a named route, or to ``target`` as a plain URI when no route matches.

    Requests that are not GET/HEAD get a 303 so the follow-up request is a GET.
    """

    location = resolve_redirect_target(request, target, **path_params)
    return RedirectResponse(url=location, status_code=_redirect_status(request))


async def redirect_with_input(request: Request, target: str, /, **path_params: Any) -> RedirectResponse:
    """
    Flash the current query and form input into the session, then redirect.

    Raw control bytes are dropped from the flashed values; everything else,
    percent sequences included, is kept as submitted.
    """

    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    store_old_input(
        request.session,
        get=sanitize_json_strings(dict(request.query_params), url_encoded=False),
        post=sanitize_json_strings(fields, url_encoded=False),
    )
    return redirect(request, target, **path_params)
