from __future__ import annotations

import os

from fenui.application.use_cases.catalog_cache import CatalogCache
from fenui.infrastructure.cache.cache_store import RedisCacheStore
from fenui.infrastructure.cache.redis_client import redis_configured


def _ttl_seconds() -> int:
    return int(os.getenv("CATALOG_CACHE_TTL_SECONDS", "300"))


def catalog_cache() -> CatalogCache:
    store = RedisCacheStore() if redis_configured() else None
    return CatalogCache(cache=store, ttl_seconds=_ttl_seconds())
