from __future__ import annotations

import logging
from typing import Sequence

from fenui.application.dto.requests import CountryRequest
from fenui.application.dto.responses import CountryResponse
from fenui.application.mappers.menu_mapper import to_country_data, to_country_response
from fenui.application.metrics.catalog_activity import record_catalog_mutation
from fenui.application.ports.repositories import CountryRepository
from fenui.application.use_cases.catalog_cache import CatalogCache
from fenui.domain.common.ids import CountryId

logger = logging.getLogger(__name__)


class CountryNotFoundError(Exception):
    pass


class CountryInUseError(Exception):
    pass


class ListCountries:
    def __init__(self, country_repository: CountryRepository) -> None:
        self._country_repository = country_repository

    def execute(self) -> list[CountryResponse]:
        return [to_country_response(country) for country in self._country_repository.list_all()]


class CreateCountry:
    def __init__(self, country_repository: CountryRepository, cache: CatalogCache) -> None:
        self._country_repository = country_repository
        self._cache = cache

    def execute(self, request: CountryRequest) -> CountryResponse:
        country = self._country_repository.add(to_country_data(request))
        self._cache.invalidate()
        record_catalog_mutation("country", "create")
        logger.info("country_created", extra={"country_id": int(country.country_id)})
        return to_country_response(country)


class UpdateCountry:
    def __init__(self, country_repository: CountryRepository, cache: CatalogCache) -> None:
        self._country_repository = country_repository
        self._cache = cache

    def execute(self, country_id: CountryId, request: CountryRequest) -> CountryResponse:
        country = self._country_repository.update(country_id, to_country_data(request))
        if country is None:
            raise CountryNotFoundError(f"country not found for country_id={country_id}")
        self._cache.invalidate()
        record_catalog_mutation("country", "update")
        return to_country_response(country)


class DeleteCountry:
    def __init__(self, country_repository: CountryRepository, cache: CatalogCache) -> None:
        self._country_repository = country_repository
        self._cache = cache

    def execute(self, country_id: CountryId) -> None:
        if self._country_repository.has_dishes(country_id):
            raise CountryInUseError(f"country {country_id} still has dishes")
        if not self._country_repository.delete(country_id):
            raise CountryNotFoundError(f"country not found for country_id={country_id}")
        self._cache.invalidate()
        record_catalog_mutation("country", "delete")
        logger.info("country_deleted", extra={"country_id": int(country_id)})


class ReorderCountries:
    """Rewrite each listed country's display order to its position in the list.

    Countries missing from the list keep their current order; ids that do not
    exist are ignored.
    """

    def __init__(self, country_repository: CountryRepository, cache: CatalogCache) -> None:
        self._country_repository = country_repository
        self._cache = cache

    def execute(self, country_ids: Sequence[int]) -> None:
        self._country_repository.reorder([CountryId(country_id) for country_id in country_ids])
        self._cache.invalidate()
        record_catalog_mutation("country", "reorder")
