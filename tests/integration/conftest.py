from __future__ import annotations

from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request

from sitekit.config import Settings
from sitekit.main import create_app
from sitekit.responses import redirect, redirect_with_input
from sitekit.session import old, session


def _test_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "environment": "test",
        "session_secret_key": "integration-secret",
        "cache_backend": "memory",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return _test_settings()


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    application = create_app(settings)

    @application.get("/profile/{name}", name="profile")
    async def profile(name: str) -> dict[str, str]:
        return {"name": name}

    @application.post("/submit")
    async def submit(request: Request):
        return await redirect_with_input(request, "profile", name="ann")

    @application.get("/go/{target:path}")
    async def go(request: Request, target: str):
        return redirect(request, target)

    @application.get("/old")
    async def old_values(request: Request) -> dict[str, Any]:
        return {
            "q": old(request, "q"),
            "field": old(request, "field", "unset"),
            "missing": old(request, "nope", "dflt"),
        }

    @application.get("/items/{target}", name="item")
    async def item(target: str) -> dict[str, str]:
        return {"target": target}

    @application.get("/go-item")
    async def go_item(request: Request):
        return redirect(request, "item", target="lamp")

    @application.get("/whoami")
    async def whoami(request: Request) -> dict[str, Any]:
        return {"user": session(request, "user")}

    return application


@pytest.fixture
def secure_app() -> FastAPI:
    return create_app(_test_settings(force_global_secure_requests=True, hsts_max_age=600))


@pytest_asyncio.fixture
async def client(app: FastAPI) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client


@pytest_asyncio.fixture
async def secure_client(secure_app: FastAPI) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=secure_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client
