"""Key/value cache handlers with optional shared Redis backend."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable
from threading import Lock
from time import monotonic
from typing import Any, Protocol

from redis.asyncio import Redis
from redis.exceptions import RedisError


class CacheBackendError(RuntimeError):
    """Raised when the configured cache backend is unavailable."""


class CacheHandler(Protocol):
    """Protocol implemented by all cache backends."""

    async def get(self, key: str) -> Any:
        """Return the cached value, or None when missing or expired."""

    async def save(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store a value, expiring after ``ttl`` seconds when given."""

    async def delete(self, key: str) -> bool:
        """Remove a key, returning whether it existed."""

    async def clear(self) -> None:
        """Drop every cached entry."""

    async def close(self) -> None:
        """Release backend resources if needed."""


class MemoryCache:
    """Process-local cache with per-entry expiry."""

    def __init__(self, *, default_ttl: int | None = None) -> None:
        self._entries: dict[str, tuple[float | None, Any]] = {}
        self._default_ttl = default_ttl
        self._lock = Lock()

    def _purge_expired(self, now: float) -> None:
        expired = [
            key
            for key, (expires_at, _) in self._entries.items()
            if expires_at is not None and expires_at <= now
        ]
        for key in expired:
            del self._entries[key]

    async def get(self, key: str) -> Any:
        now = monotonic()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at is not None and expires_at <= now:
                del self._entries[key]
                return None
            return value

    async def save(self, key: str, value: Any, ttl: int | None = None) -> bool:
        now = monotonic()
        effective_ttl = self._default_ttl if ttl is None else ttl
        expires_at = now + effective_ttl if effective_ttl else None
        with self._lock:
            self._purge_expired(now)
            self._entries[key] = (expires_at, value)
        return True

    async def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    async def close(self) -> None:
        return


class RedisCache:
    """Redis-backed cache shared across app instances; values are stored as JSON."""

    def __init__(
        self,
        *,
        redis_url: str,
        prefix: str = "sitekit:cache",
        default_ttl: int | None = None,
    ) -> None:
        self._client = Redis.from_url(redis_url, encoding="utf-8", decode_responses=True)
        self._prefix = prefix
        self._default_ttl = default_ttl

    def _redis_key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def get(self, key: str) -> Any:
        try:
            raw = await self._client.get(self._redis_key(key))
        except RedisError as exc:  # pragma: no cover - backend failure path
            raise CacheBackendError("Cache backend unavailable") from exc
        if raw is None:
            return None
        return json.loads(raw)

    async def save(self, key: str, value: Any, ttl: int | None = None) -> bool:
        effective_ttl = self._default_ttl if ttl is None else ttl
        try:
            result = await self._client.set(
                self._redis_key(key),
                json.dumps(value),
                ex=effective_ttl or None,
            )
        except RedisError as exc:  # pragma: no cover - backend failure path
            raise CacheBackendError("Cache backend unavailable") from exc
        return bool(result)

    async def delete(self, key: str) -> bool:
        try:
            removed = await self._client.delete(self._redis_key(key))
        except RedisError as exc:  # pragma: no cover - backend failure path
            raise CacheBackendError("Cache backend unavailable") from exc
        return bool(removed)

    async def clear(self) -> None:
        keys: list[str] = []
        try:
            async for key in self._client.scan_iter(match=f"{self._prefix}:*"):
                keys.append(str(key))
            if keys:
                await self._client.delete(*keys)
        except RedisError as exc:  # pragma: no cover - backend failure path
            raise CacheBackendError("Cache backend unavailable") from exc

    async def close(self) -> None:
        await self._client.aclose()


def create_cache(
    *,
    backend: str,
    redis_url: str | None,
    prefix: str = "sitekit:cache",
    default_ttl: int | None = None,
    logger: logging.Logger | None = None,
) -> tuple[CacheHandler, bool]:
    """Create a configured cache handler and indicate if it uses shared state."""

    normalized_backend = backend.strip().lower()
    if normalized_backend == "memory":
        return MemoryCache(default_ttl=default_ttl), False

    if normalized_backend == "redis":
        if not redis_url:
            raise RuntimeError("CACHE_BACKEND=redis requires REDIS_URL")
        return RedisCache(redis_url=redis_url, prefix=prefix, default_ttl=default_ttl), True

    if normalized_backend == "auto":
        if redis_url:
            return RedisCache(redis_url=redis_url, prefix=prefix, default_ttl=default_ttl), True
        if logger:
            logger.warning("cache_backend_auto_fallback backend=memory reason=redis_url_missing")
        return MemoryCache(default_ttl=default_ttl), False

    raise ValueError(f"Unsupported CACHE_BACKEND value: {backend}")


def cache(handler: CacheHandler, key: str | None = None) -> CacheHandler | Awaitable[Any]:
    """Return the handler itself, or the awaitable lookup of ``key``."""

    if key is None:
        return handler
    return handler.get(key)
