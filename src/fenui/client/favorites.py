from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from fenui.client.storage import KeyValueStorage
from fenui.domain.common.money import format_price, parse_price

logger = logging.getLogger(__name__)

FAVORITES_KEY = "fenui-favorites"
MAX_FAVORITES = 100
DEFAULT_COUNTRY_FLAG = "🏳️"


def _to_camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


class FavoriteDish(BaseModel):
    """Snapshot of a dish taken when it was favorited; never refreshed."""

    model_config = ConfigDict(alias_generator=_to_camel, populate_by_name=True, frozen=True)

    id: int = Field(gt=0)
    name: str
    price: str
    country_name: str
    country_flag: str = DEFAULT_COUNTRY_FLAG
    category: str
    added_at: str

    @field_validator("price", mode="before")
    @classmethod
    def _normalize_price(cls, value: Any) -> str:
        return format_price(parse_price(value))


_FAVORITE_LIST_ADAPTER = TypeAdapter(list[FavoriteDish])


@dataclass(frozen=True)
class FavoritesStats:
    total: int
    by_category: dict[str, int] = field(default_factory=dict)
    by_country: dict[str, int] = field(default_factory=dict)
    total_value: float = 0.0


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _snapshot(dish: Mapping[str, Any], added_at: str) -> FavoriteDish:
    country = dish.get("country") or {}
    return FavoriteDish(
        id=_dish_id(dish),
        name=dish["name"],
        price=dish["price"],
        country_name=country.get("name", ""),
        country_flag=country.get("flagEmoji") or DEFAULT_COUNTRY_FLAG,
        category=str(dish["category"]),
        added_at=added_at,
    )


def _unique_by_id(favorites: list[FavoriteDish]) -> list[FavoriteDish]:
    seen: set[int] = set()
    unique: list[FavoriteDish] = []
    for favorite in favorites:
        if favorite.id not in seen:
            seen.add(favorite.id)
            unique.append(favorite)
    return unique


def _dish_id(dish: Mapping[str, Any]) -> int:
    return int(dish["id"])


class FavoritesStore:
    """Bounded, deduplicated list of favorite dishes mirrored into storage.

    ``dish`` arguments are dish payloads as returned by the API (camelCase
    keys with a nested ``country``). State is loaded once; every mutation
    rewrites the whole list under ``key``.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = FAVORITES_KEY,
        clock: Callable[[], str] = _utc_now_iso,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._favorites: list[FavoriteDish] = self._load()

    def _load(self) -> list[FavoriteDish]:
        raw = self._storage.get_item(self._key)
        if not raw:
            return []
        try:
            loaded = _FAVORITE_LIST_ADAPTER.validate_python(json.loads(raw))
        except (ValueError, ValidationError):
            logger.warning("favorites_load_failed", extra={"storage_key": self._key}, exc_info=True)
            self._storage.remove_item(self._key)
            return []

        # Stored data may predate the cap or carry duplicates; first entry per id wins.
        favorites = _unique_by_id(loaded)[:MAX_FAVORITES]
        if len(favorites) != len(loaded):
            logger.warning(
                "favorites_load_normalized",
                extra={"storage_key": self._key, "loaded": len(loaded), "kept": len(favorites)},
            )
            self._favorites = favorites
            self._persist()
        return favorites

    def _persist(self) -> None:
        payload = _FAVORITE_LIST_ADAPTER.dump_json(self._favorites, by_alias=True)
        try:
            self._storage.set_item(self._key, payload.decode("utf-8"))
        except Exception:
            logger.warning("favorites_save_failed", extra={"storage_key": self._key}, exc_info=True)

    @property
    def favorites(self) -> list[FavoriteDish]:
        return list(self._favorites)

    def __len__(self) -> int:
        return len(self._favorites)

    def is_favorite(self, dish_id: int | str) -> bool:
        dish_id = int(dish_id)
        return any(favorite.id == dish_id for favorite in self._favorites)

    def add(self, dish: Mapping[str, Any]) -> bool:
        dish_id = _dish_id(dish)
        if self.is_favorite(dish_id):
            return False
        if len(self._favorites) >= MAX_FAVORITES:
            logger.warning(
                "favorites_limit_reached",
                extra={"dish_id": dish_id, "limit": MAX_FAVORITES},
            )
            return False
        self._favorites.append(_snapshot(dish, self._clock()))
        self._persist()
        return True

    def remove(self, dish_id: int | str) -> bool:
        dish_id = int(dish_id)
        remaining = [favorite for favorite in self._favorites if favorite.id != dish_id]
        if len(remaining) == len(self._favorites):
            return False
        self._favorites = remaining
        self._persist()
        return True

    def toggle(self, dish: Mapping[str, Any]) -> bool:
        """Returns whether the dish is a favorite after the call."""
        dish_id = _dish_id(dish)
        if self.is_favorite(dish_id):
            self.remove(dish_id)
            return False
        return self.add(dish)

    def clear(self) -> None:
        self._favorites = []
        self._persist()

    def stats(self) -> FavoritesStats:
        by_category: dict[str, int] = {}
        by_country: dict[str, int] = {}
        total_value = Decimal("0")
        for favorite in self._favorites:
            by_category[favorite.category] = by_category.get(favorite.category, 0) + 1
            by_country[favorite.country_name] = by_country.get(favorite.country_name, 0) + 1
            total_value += Decimal(favorite.price)
        return FavoritesStats(
            total=len(self._favorites),
            by_category=by_category,
            by_country=by_country,
            total_value=float(total_value),
        )
