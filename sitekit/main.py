"""FastAPI application factory wiring the sitekit helpers together."""

import logging
from time import monotonic
from typing import Any

from fastapi import FastAPI, Request, Response
from fastapi.routing import APIRoute
from starlette.middleware.sessions import SessionMiddleware

from sitekit.cache import create_cache
from sitekit.config import DEFAULT_SESSION_SECRET, Settings, get_settings
from sitekit.csrf import csrf_hash, csrf_token
from sitekit.https import ForceHTTPSMiddleware
from sitekit.session import OldInputMiddleware
from sitekit.timer import Timer
from sitekit.views import ViewRenderer, build_environment

request_logger = logging.getLogger("sitekit.request")
cache_logger = logging.getLogger("sitekit.cache")

_RELAXED_ENVIRONMENTS = {"development", "test"}


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    if isinstance(route, APIRoute):
        return route.path
    return "_unmatched"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app with sessions, optional HTTPS forcing and shared helpers on ``app.state``."""

    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    relaxed = settings.environment.lower() in _RELAXED_ENVIRONMENTS
    if not relaxed and settings.session_secret_key == DEFAULT_SESSION_SECRET:
        raise RuntimeError("SESSION_SECRET_KEY must be set outside development/test.")

    cache_handler, cache_is_shared = create_cache(
        backend=settings.cache_backend,
        redis_url=settings.redis_url,
        prefix=settings.cache_prefix,
        default_ttl=settings.cache_default_ttl,
        logger=cache_logger,
    )
    if not relaxed and not cache_is_shared:
        raise RuntimeError(
            "A shared cache is required outside development/test. "
            "Configure REDIS_URL or CACHE_BACKEND=redis."
        )

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.settings = settings
    app.state.cache = cache_handler
    app.state.timer = Timer()
    app.state.renderer = ViewRenderer(build_environment(directory=settings.templates_directory))

    # Middleware added later wraps earlier middleware; old input needs the session.
    app.add_middleware(OldInputMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret_key,
        https_only=settings.force_global_secure_requests,
    )
    if settings.force_global_secure_requests:
        app.add_middleware(ForceHTTPSMiddleware, duration=settings.hsts_max_age)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next: Any) -> Response:
        started = monotonic()
        path = request.url.path
        method = request.method.upper()
        try:
            response = await call_next(request)
        except Exception:
            latency_ms = int((monotonic() - started) * 1000)
            request_logger.exception(
                "request method=%s path=%s route=%s status=%s latency_ms=%s",
                method,
                path,
                _route_label(request),
                500,
                latency_ms,
            )
            raise

        latency_ms = int((monotonic() - started) * 1000)
        request_logger.info(
            "request method=%s path=%s route=%s status=%s latency_ms=%s",
            method,
            path,
            _route_label(request),
            response.status_code,
            latency_ms,
        )
        return response

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        await cache_handler.close()

    @app.get("/api/v1/health", tags=["meta"], name="health")
    async def health() -> dict[str, str]:
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "ok",
        }

    @app.get("/api/v1/csrf", tags=["meta"], name="csrf")
    async def csrf(request: Request) -> dict[str, str]:
        return {
            "name": csrf_token(settings),
            "header": settings.csrf_header_name,
            "hash": csrf_hash(request.session),
        }

    return app


app = create_app()
