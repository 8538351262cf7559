from __future__ import annotations

import os

import redis

from fenui.application.ports.cache import CacheStore
from fenui.infrastructure.cache.redis_client import get_redis_client


def _default_prefix() -> str:
    return os.getenv("CACHE_KEY_PREFIX", "fenui")


class RedisCacheStore(CacheStore):
    """String cache on Redis with every key namespaced under ``prefix``."""

    def __init__(self, prefix: str | None = None, timeout_seconds: float = 1.0) -> None:
        self._prefix = prefix if prefix is not None else _default_prefix()
        self._timeout_seconds = timeout_seconds

    def _client(self) -> redis.Redis:
        return get_redis_client(timeout_seconds=self._timeout_seconds)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}" if self._prefix else key

    def get(self, key: str) -> str | None:
        value = self._client().get(self._key(key))
        if value is None or isinstance(value, str):
            return value
        return value.decode("utf-8")

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._client().set(self._key(key), value, ex=max(1, ttl_seconds))

    def incr(self, key: str) -> int:
        return int(self._client().incr(self._key(key)))
