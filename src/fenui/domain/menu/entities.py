from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable

from fenui.domain.common.ids import CountryId, DishId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DishCategory(str, Enum):
    SALTY = "salgados"
    SWEET = "doces"
    BEVERAGE = "bebidas"


def normalize_labels(values: Iterable[str] | None) -> tuple[str, ...]:
    """Trim, drop blanks and deduplicate free-text labels, keeping first-seen order."""
    if not values:
        return ()
    seen: dict[str, None] = {}
    for value in values:
        label = value.strip()
        if label and label not in seen:
            seen[label] = None
    return tuple(seen)


@dataclass(frozen=True)
class CountryData:
    name: str
    flag_emoji: str
    flag_image: str | None = None
    order: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if not self.flag_emoji.strip():
            raise ValueError("flag_emoji must be non-empty")


@dataclass(frozen=True)
class Country:
    country_id: CountryId
    name: str
    flag_emoji: str
    flag_image: str | None = None
    order: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class DishData:
    name: str
    description: str
    price: Decimal
    country_id: CountryId
    category: DishCategory
    image: str | None = None
    tags: tuple[str, ...] = ()
    allergens: tuple[str, ...] = ()
    rating: Decimal | None = None
    review_count: int | None = None
    is_featured: bool = False
    is_available: bool = True
    order: int = 0

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if self.price < 0:
            raise ValueError("price must be >= 0")


@dataclass(frozen=True)
class Dish:
    dish_id: DishId
    name: str
    description: str
    price: Decimal
    country_id: CountryId
    category: DishCategory
    image: str | None = None
    tags: tuple[str, ...] = ()
    allergens: tuple[str, ...] = ()
    rating: Decimal | None = None
    review_count: int | None = None
    is_featured: bool = False
    is_available: bool = True
    order: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class DishWithCountry:
    dish: Dish
    country: Country
