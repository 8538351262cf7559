from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from fenui.domain.common.ids import CountryId
from fenui.domain.menu.entities import DishCategory, DishWithCountry


@dataclass(frozen=True)
class DishFilters:
    """Simultaneous dish filters; every filter that is set must match."""

    search: str | None = None
    country_id: CountryId | None = None
    category: DishCategory | None = None
    featured: bool = False

    def normalized_search(self) -> str | None:
        if self.search is None:
            return None
        term = self.search.strip()
        return term or None

    def matches(self, item: DishWithCountry) -> bool:
        term = self.normalized_search()
        if term is not None and term.casefold() not in item.dish.name.casefold():
            return False
        if self.country_id is not None and item.dish.country_id != self.country_id:
            return False
        if self.category is not None and item.dish.category != self.category:
            return False
        if self.featured and not item.dish.is_featured:
            return False
        return True

    def as_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        term = self.normalized_search()
        if term is not None:
            params["search"] = term
        if self.country_id is not None:
            params["country"] = str(self.country_id)
        if self.category is not None:
            params["category"] = self.category.value
        if self.featured:
            params["featured"] = "true"
        return params


def display_sort_key(item: DishWithCountry) -> tuple[int, int, str, int]:
    return (item.country.order, item.dish.order, item.dish.name, int(item.dish.dish_id))


def filter_dishes(
    items: Iterable[DishWithCountry],
    filters: DishFilters | None = None,
) -> list[DishWithCountry]:
    active = filters or DishFilters()
    return sorted((item for item in items if active.matches(item)), key=display_sort_key)
