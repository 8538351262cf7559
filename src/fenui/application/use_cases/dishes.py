from __future__ import annotations

import logging

from pydantic import TypeAdapter, ValidationError

from fenui.application.dto.requests import DishRequest
from fenui.application.dto.responses import DishResponse
from fenui.application.mappers.menu_mapper import to_dish_data, to_dish_response
from fenui.application.metrics.catalog_activity import record_catalog_mutation, record_dish_view
from fenui.application.ports.repositories import (
    DishRepository,
    UnknownCountryReferenceError,
    UnknownDishReferenceError,
)
from fenui.application.use_cases.catalog_cache import CatalogCache
from fenui.application.use_cases.countries import CountryNotFoundError
from fenui.domain.common.ids import DishId
from fenui.domain.menu.filtering import DishFilters

logger = logging.getLogger(__name__)

DISHES_ENDPOINT = "/api/dishes"

_DISH_LIST_ADAPTER = TypeAdapter(list[DishResponse])


class DishNotFoundError(Exception):
    pass


class ListDishes:
    def __init__(self, dish_repository: DishRepository, cache: CatalogCache) -> None:
        self._dish_repository = dish_repository
        self._cache = cache

    def execute(self, filters: DishFilters) -> list[DishResponse]:
        key = self._cache.key_for(DISHES_ENDPOINT, filters.as_params())
        cached = self._cache.get(key, DISHES_ENDPOINT)
        if cached:
            try:
                return _DISH_LIST_ADAPTER.validate_json(cached)
            except ValidationError:
                pass

        dishes = [to_dish_response(item) for item in self._dish_repository.list_all(filters)]
        self._cache.set(key, _DISH_LIST_ADAPTER.dump_json(dishes).decode("utf-8"))
        return dishes


class GetDish:
    def __init__(self, dish_repository: DishRepository) -> None:
        self._dish_repository = dish_repository

    def execute(self, dish_id: DishId) -> DishResponse:
        item = self._dish_repository.get(dish_id)
        if item is None:
            raise DishNotFoundError(f"dish not found for dish_id={dish_id}")
        return to_dish_response(item)


class CreateDish:
    def __init__(self, dish_repository: DishRepository, cache: CatalogCache) -> None:
        self._dish_repository = dish_repository
        self._cache = cache

    def execute(self, request: DishRequest) -> DishResponse:
        try:
            item = self._dish_repository.add(to_dish_data(request))
        except UnknownCountryReferenceError as exc:
            raise CountryNotFoundError(
                f"country not found for country_id={request.country_id}"
            ) from exc
        self._cache.invalidate()
        record_catalog_mutation("dish", "create")
        logger.info("dish_created", extra={"dish_id": int(item.dish.dish_id)})
        return to_dish_response(item)


class UpdateDish:
    def __init__(self, dish_repository: DishRepository, cache: CatalogCache) -> None:
        self._dish_repository = dish_repository
        self._cache = cache

    def execute(self, dish_id: DishId, request: DishRequest) -> DishResponse:
        try:
            item = self._dish_repository.update(dish_id, to_dish_data(request))
        except UnknownCountryReferenceError as exc:
            raise CountryNotFoundError(
                f"country not found for country_id={request.country_id}"
            ) from exc
        if item is None:
            raise DishNotFoundError(f"dish not found for dish_id={dish_id}")
        self._cache.invalidate()
        record_catalog_mutation("dish", "update")
        return to_dish_response(item)


class DeleteDish:
    def __init__(self, dish_repository: DishRepository, cache: CatalogCache) -> None:
        self._dish_repository = dish_repository
        self._cache = cache

    def execute(self, dish_id: DishId) -> None:
        if not self._dish_repository.delete(dish_id):
            raise DishNotFoundError(f"dish not found for dish_id={dish_id}")
        self._cache.invalidate()
        record_catalog_mutation("dish", "delete")
        logger.info("dish_deleted", extra={"dish_id": int(dish_id)})


class RecordDishView:
    def __init__(self, dish_repository: DishRepository) -> None:
        self._dish_repository = dish_repository

    def execute(self, dish_id: DishId, ip_address: str | None) -> None:
        try:
            self._dish_repository.record_view(dish_id, ip_address)
        except UnknownDishReferenceError as exc:
            raise DishNotFoundError(f"dish not found for dish_id={dish_id}") from exc
        record_dish_view()
