"""Force HTTPS access with a redirect and an HSTS header."""

from __future__ import annotations

from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

DEFAULT_HSTS_DURATION = 31_536_000


def is_secure_request(request: Request) -> bool:
    """Return True for HTTPS requests, including those forwarded by a TLS proxy."""

    if request.url.scheme == "https":
        return True
    forwarded_proto = request.headers.get("x-forwarded-proto", "")
    return forwarded_proto.split(",")[0].strip().lower() == "https"


def force_https(request: Request, duration: int = DEFAULT_HSTS_DURATION) -> RedirectResponse | None:
    """Return a redirect to the HTTPS version of the request URL, or None when already secure."""

    if is_secure_request(request):
        return None

    secure_url = request.url.replace(scheme="https")
    response = RedirectResponse(url=str(secure_url), status_code=307)
    response.headers["Strict-Transport-Security"] = f"max-age={duration}"
    return response


class ForceHTTPSMiddleware(BaseHTTPMiddleware):
    """Redirect every insecure request to HTTPS."""

    def __init__(self, app: Any, duration: int = DEFAULT_HSTS_DURATION) -> None:
        super().__init__(app)
        self.duration = duration

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        redirect = force_https(request, self.duration)
        if redirect is not None:
            return redirect
        return await call_next(request)
