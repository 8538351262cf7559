from __future__ import annotations

import json
import logging
from typing import Mapping

from fenui.application.metrics.catalog_activity import record_cache_lookup
from fenui.application.ports.cache import CacheStore

logger = logging.getLogger(__name__)

CATALOG_VERSION_KEY = "catalog:version"


def catalog_cache_key(endpoint: str, params: Mapping[str, str], version: int) -> str:
    serialized = json.dumps(dict(params), sort_keys=True, separators=(",", ":"))
    return f"catalog:v{version}:{endpoint}:{serialized}"


class CatalogCache:
    """Read-through cache for public catalog reads.

    Entries are keyed by endpoint and serialized filter params under the
    current catalog version; bumping the version invalidates every entry at
    once. Without a store every read is a miss; cache failures degrade to a
    miss and never fail the caller.
    """

    def __init__(self, cache: CacheStore | None, ttl_seconds: int = 300) -> None:
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def _version(self) -> int | None:
        if self._cache is None:
            return None
        try:
            raw = self._cache.get(CATALOG_VERSION_KEY)
        except Exception:
            return None
        if raw is None:
            return 0
        try:
            return int(raw)
        except ValueError:
            return 0

    def key_for(self, endpoint: str, params: Mapping[str, str]) -> str | None:
        version = self._version()
        if version is None:
            return None
        return catalog_cache_key(endpoint, params, version)

    def get(self, key: str | None, endpoint: str) -> str | None:
        if key is None:
            return None
        try:
            payload = self._cache.get(key)
        except Exception:
            payload = None
        record_cache_lookup(endpoint, hit=payload is not None)
        return payload

    def set(self, key: str | None, payload: str) -> None:
        if key is None:
            return
        try:
            self._cache.set(key, payload, ttl_seconds=self._ttl_seconds)
        except Exception:
            return

    def invalidate(self) -> None:
        if self._cache is None:
            return
        try:
            self._cache.incr(CATALOG_VERSION_KEY)
        except Exception:
            logger.warning("catalog_cache_invalidate_failed", exc_info=True)
