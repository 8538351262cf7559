"""Storefront grouping and per-country aggregation over dish-with-country lists.

Every function here is pure: inputs are never mutated and the same input
always yields the same output. Country buckets are ordered by the country's
stored display order, ties broken by country name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Sequence

from fenui.domain.menu.entities import Country, Dish, DishCategory, DishWithCountry

BEVERAGE_GROUP_KEY = "Bebidas"


@dataclass(frozen=True)
class DishGroup:
    key: str
    country: Country | None
    dishes: list[DishWithCountry] = field(default_factory=list)


@dataclass(frozen=True)
class CountrySummary:
    country: Country
    total_dishes: int
    featured_dishes: int
    average_price: float


def _country_sort_key(country: Country) -> tuple[int, str]:
    return (country.order, country.name)


def average_price(dishes: Sequence[Dish]) -> float:
    if not dishes:
        return 0.0
    total = sum((dish.price for dish in dishes), Decimal("0"))
    return float(total) / len(dishes)


def group_by_country(
    items: Iterable[DishWithCountry],
    *,
    split_beverages: bool = False,
) -> list[DishGroup]:
    buckets: dict[str, list[DishWithCountry]] = {}
    countries: dict[str, Country] = {}
    beverages: list[DishWithCountry] = []

    for item in items:
        if split_beverages and item.dish.category == DishCategory.BEVERAGE:
            beverages.append(item)
            continue
        key = item.country.name
        countries.setdefault(key, item.country)
        buckets.setdefault(key, []).append(item)

    ordered_keys = sorted(buckets, key=lambda name: _country_sort_key(countries[name]))
    groups = [
        DishGroup(key=key, country=countries[key], dishes=buckets[key]) for key in ordered_keys
    ]
    if beverages:
        groups.append(DishGroup(key=BEVERAGE_GROUP_KEY, country=None, dishes=beverages))
    return groups


def featured_dishes(items: Iterable[DishWithCountry], limit: int = 3) -> list[DishWithCountry]:
    return [item for item in items if item.dish.is_featured][:limit]


def summarize_countries(
    countries: Iterable[Country],
    items: Iterable[DishWithCountry],
) -> list[CountrySummary]:
    by_country: dict[int, list[Dish]] = {}
    for item in items:
        by_country.setdefault(int(item.dish.country_id), []).append(item.dish)

    summaries = []
    for country in sorted(countries, key=_country_sort_key):
        dishes = by_country.get(int(country.country_id), [])
        summaries.append(
            CountrySummary(
                country=country,
                total_dishes=len(dishes),
                featured_dishes=sum(1 for dish in dishes if dish.is_featured),
                average_price=average_price(dishes),
            )
        )
    return summaries
