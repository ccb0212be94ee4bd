import logging

import pytest

from sitekit.cache import MemoryCache
from sitekit.config import Settings
from sitekit.main import create_app
from sitekit.timer import Timer
from sitekit.views import ViewRenderer


async def test_health_endpoint(client) -> None:
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"name": "sitekit", "version": "0.1.0", "status": "ok"}


async def test_csrf_endpoint_is_stable_per_session(client) -> None:
    first = await client.get("/api/v1/csrf")
    second = await client.get("/api/v1/csrf")

    assert first.status_code == 200
    body = first.json()
    assert body["name"] == "csrf_test_name"
    assert body["header"] == "X-CSRF-TOKEN"
    assert len(body["hash"]) == 32
    assert second.json()["hash"] == body["hash"]


async def test_requests_are_logged(client, caplog) -> None:
    with caplog.at_level(logging.INFO, logger="sitekit.request"):
        await client.get("/api/v1/health")

    messages = [record.getMessage() for record in caplog.records if record.name == "sitekit.request"]
    assert any("path=/api/v1/health" in message and "status=200" in message for message in messages)


def test_app_state_exposes_helpers(app) -> None:
    assert isinstance(app.state.cache, MemoryCache)
    assert isinstance(app.state.timer, Timer)
    assert isinstance(app.state.renderer, ViewRenderer)


def test_production_requires_secret_and_shared_cache() -> None:
    with pytest.raises(RuntimeError, match="SESSION_SECRET_KEY"):
        create_app(Settings(environment="production", cache_backend="memory"))
    with pytest.raises(RuntimeError, match="shared cache"):
        create_app(Settings(environment="production", session_secret_key="s3cret", cache_backend="memory"))
