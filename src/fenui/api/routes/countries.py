from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from fenui.api.auth import require_admin
from fenui.api.catalog_cache import catalog_cache
from fenui.application.dto.requests import CountryRequest, ReorderCountriesRequest
from fenui.application.dto.responses import CountryResponse, SuccessResponse
from fenui.application.use_cases.countries import (
    CreateCountry,
    DeleteCountry,
    ListCountries,
    ReorderCountries,
    UpdateCountry,
)
from fenui.domain.common.ids import CountryId
from fenui.infrastructure.db.repositories.country_repo import SqlAlchemyCountryRepository

router = APIRouter(prefix="/api/countries", tags=["countries"])


def _list_countries_use_case() -> ListCountries:
    return ListCountries(country_repository=SqlAlchemyCountryRepository())


def _create_country_use_case() -> CreateCountry:
    return CreateCountry(country_repository=SqlAlchemyCountryRepository(), cache=catalog_cache())


def _update_country_use_case() -> UpdateCountry:
    return UpdateCountry(country_repository=SqlAlchemyCountryRepository(), cache=catalog_cache())


def _delete_country_use_case() -> DeleteCountry:
    return DeleteCountry(country_repository=SqlAlchemyCountryRepository(), cache=catalog_cache())


def _reorder_countries_use_case() -> ReorderCountries:
    return ReorderCountries(
        country_repository=SqlAlchemyCountryRepository(),
        cache=catalog_cache(),
    )


@router.get("", response_model=list[CountryResponse])
def list_countries() -> list[CountryResponse]:
    return _list_countries_use_case().execute()


@router.post(
    "",
    response_model=CountryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_country(body: CountryRequest) -> CountryResponse:
    return _create_country_use_case().execute(body)


# Registered before "/{country_id}" so "reorder" is not parsed as an id.
@router.put("/reorder", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
def reorder_countries(body: ReorderCountriesRequest) -> SuccessResponse:
    _reorder_countries_use_case().execute(body.country_ids)
    return SuccessResponse()


@router.put(
    "/{country_id}",
    response_model=CountryResponse,
    dependencies=[Depends(require_admin)],
)
def update_country(country_id: int, body: CountryRequest) -> CountryResponse:
    return _update_country_use_case().execute(CountryId(country_id), body)


@router.delete(
    "/{country_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_country(country_id: int) -> Response:
    _delete_country_use_case().execute(CountryId(country_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
