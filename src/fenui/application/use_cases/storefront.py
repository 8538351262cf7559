from __future__ import annotations

from pydantic import ValidationError

from fenui.application.dto.responses import CountrySummaryResponse, StorefrontMenuResponse
from fenui.application.mappers.menu_mapper import (
    to_country_summary_response,
    to_dish_group_response,
    to_dish_response,
)
from fenui.application.ports.repositories import CountryRepository, DishRepository
from fenui.application.use_cases.catalog_cache import CatalogCache
from fenui.domain.menu.filtering import DishFilters
from fenui.domain.menu.grouping import featured_dishes, group_by_country, summarize_countries

MENU_ENDPOINT = "/api/menu"
FEATURED_LIMIT = 3


class GetStorefrontMenu:
    """Dishes for the public storefront: featured highlights plus country buckets."""

    def __init__(self, dish_repository: DishRepository, cache: CatalogCache) -> None:
        self._dish_repository = dish_repository
        self._cache = cache

    def execute(self, filters: DishFilters) -> StorefrontMenuResponse:
        key = self._cache.key_for(MENU_ENDPOINT, filters.as_params())
        cached = self._cache.get(key, MENU_ENDPOINT)
        if cached:
            try:
                return StorefrontMenuResponse.model_validate_json(cached)
            except ValidationError:
                pass

        items = self._dish_repository.list_all(filters)
        response = StorefrontMenuResponse(
            featured=[to_dish_response(item) for item in featured_dishes(items, FEATURED_LIMIT)],
            groups=[
                to_dish_group_response(group)
                for group in group_by_country(items, split_beverages=True)
            ],
        )
        self._cache.set(key, response.model_dump_json())
        return response


class GetCountrySummaries:
    def __init__(
        self,
        country_repository: CountryRepository,
        dish_repository: DishRepository,
    ) -> None:
        self._country_repository = country_repository
        self._dish_repository = dish_repository

    def execute(self) -> list[CountrySummaryResponse]:
        summaries = summarize_countries(
            self._country_repository.list_all(),
            self._dish_repository.list_all(DishFilters()),
        )
        summaries.sort(key=lambda summary: -summary.total_dishes)
        return [to_country_summary_response(summary) for summary in summaries]
