from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from fenui.client.query_cache import QueryCache


def test_entries_are_keyed_by_endpoint_and_params() -> None:
    cache = QueryCache(clock=lambda: 100.0)
    cache.set("/api/dishes", ["all"])
    cache.set("/api/dishes", ["sweet"], {"category": "doces"})

    assert cache.get("/api/dishes").data == ["all"]
    assert cache.get("/api/dishes", {"category": "doces"}).data == ["sweet"]
    assert cache.get("/api/dishes", {"category": "bebidas"}) is None
    assert cache.get("/api/dishes").timestamp == 100.0


def test_param_order_and_none_values_do_not_change_the_key() -> None:
    assert QueryCache.key("/api/dishes", {"a": 1, "b": 2}) == QueryCache.key(
        "/api/dishes", {"b": 2, "a": 1}
    )
    assert QueryCache.key("/api/dishes", {"search": None}) == QueryCache.key("/api/dishes")


def test_invalidate_drops_matching_prefix_only() -> None:
    cache = QueryCache()
    cache.set("/api/dishes", [])
    cache.set("/api/dishes/4", {})
    cache.set("/api/countries", [])

    dropped = cache.invalidate("/api/dishes")

    assert dropped == 2
    assert len(cache) == 1
    assert cache.get("/api/countries") is not None


def test_clear_empties_cache() -> None:
    cache = QueryCache()
    cache.set("/api/banners", [])

    cache.clear()

    assert len(cache) == 0


def test_none_only_params_share_the_entry_of_no_params() -> None:
    cache = QueryCache()
    cache.set("/api/dishes", ["all"], {"search": None, "country": None})

    assert cache.get("/api/dishes").data == ["all"]
    assert len(cache) == 1

    cache.set("/api/dishes", ["again"])
    assert len(cache) == 1
