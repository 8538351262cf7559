from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping

CacheKey = tuple[str, str]


def _serialize_params(params: Mapping[str, Any] | None) -> str:
    cleaned = {key: value for key, value in (params or {}).items() if value is not None}
    if not cleaned:
        return ""
    return json.dumps(cleaned, sort_keys=True, separators=(",", ":"), default=str)


@dataclass(frozen=True)
class CacheEntry:
    data: Any
    timestamp: float


class QueryCache:
    """Explicit response cache keyed by (endpoint, serialized params).

    Nothing expires on its own; callers drop entries with ``invalidate`` after
    a mutation so the next read goes back to the server.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._clock = clock

    @staticmethod
    def key(endpoint: str, params: Mapping[str, Any] | None = None) -> CacheKey:
        return endpoint, _serialize_params(params)

    def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> CacheEntry | None:
        return self._entries.get(self.key(endpoint, params))

    def set(
        self,
        endpoint: str,
        data: Any,
        params: Mapping[str, Any] | None = None,
    ) -> CacheEntry:
        entry = CacheEntry(data=data, timestamp=self._clock())
        self._entries[self.key(endpoint, params)] = entry
        return entry

    def invalidate(self, endpoint_prefix: str) -> int:
        """Drop every entry whose endpoint starts with ``endpoint_prefix``."""
        stale = [key for key in self._entries if key[0].startswith(endpoint_prefix)]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
