"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SESSION_SECRET = "change-me"


class Settings(BaseSettings):
    """Runtime settings for sitekit applications."""

    app_name: str = "sitekit"
    app_version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    base_url: str = "http://localhost:8000/"
    index_page: str = ""
    app_timezone: str = "UTC"
    templates_directory: str = "templates"
    session_secret_key: str = DEFAULT_SESSION_SECRET
    force_global_secure_requests: bool = False
    hsts_max_age: int = 31_536_000
    csrf_token_name: str = "csrf_test_name"
    csrf_header_name: str = "X-CSRF-TOKEN"
    cache_backend: str = "auto"
    redis_url: str | None = None
    cache_prefix: str = "sitekit:cache"
    cache_default_ttl: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings so env parsing only happens once."""

    return Settings()


_ENV_LITERALS: dict[str, Any] = {
    "true": True,
    "false": False,
    "empty": "",
    "null": None,
}


def env(key: str, default: Any = None) -> Any:
    """
    Return an environment variable, converting literal keywords.

    ``true``/``false``/``empty``/``null`` map to ``True``/``False``/``""``/``None``.
    """

    value = os.environ.get(key)
    if value is None:
        return default

    lowered = value.lower()
    if lowered in _ENV_LITERALS:
        return _ENV_LITERALS[lowered]
    return value


def app_timezone(settings: Settings) -> ZoneInfo:
    """Return the timezone the application displays dates in."""

    return ZoneInfo(settings.app_timezone)


def slash_item(settings: Settings, item: str) -> Any:
    """Return a settings item with a trailing slash, leaving unset or blank items alone."""

    value = getattr(settings, item, None)
    if value is None or not str(value).strip():
        return value
    return str(value).rstrip("/") + "/"
