from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, Response, status

from fenui.api.auth import require_admin
from fenui.api.catalog_cache import catalog_cache
from fenui.application.dto.requests import DishRequest
from fenui.application.dto.responses import BulkUploadResponse, DishResponse, SuccessResponse
from fenui.application.use_cases.bulk_upload import BulkUploadDishes
from fenui.application.use_cases.dishes import (
    CreateDish,
    DeleteDish,
    GetDish,
    ListDishes,
    RecordDishView,
    UpdateDish,
)
from fenui.domain.common.ids import CountryId, DishId
from fenui.domain.menu.entities import DishCategory
from fenui.domain.menu.filtering import DishFilters
from fenui.infrastructure.db.repositories.dish_repo import SqlAlchemyDishRepository

router = APIRouter(prefix="/api/dishes", tags=["dishes"])


def _list_dishes_use_case() -> ListDishes:
    return ListDishes(dish_repository=SqlAlchemyDishRepository(), cache=catalog_cache())


def _get_dish_use_case() -> GetDish:
    return GetDish(dish_repository=SqlAlchemyDishRepository())


def _create_dish_use_case() -> CreateDish:
    return CreateDish(dish_repository=SqlAlchemyDishRepository(), cache=catalog_cache())


def _update_dish_use_case() -> UpdateDish:
    return UpdateDish(dish_repository=SqlAlchemyDishRepository(), cache=catalog_cache())


def _delete_dish_use_case() -> DeleteDish:
    return DeleteDish(dish_repository=SqlAlchemyDishRepository(), cache=catalog_cache())


def _record_dish_view_use_case() -> RecordDishView:
    return RecordDishView(dish_repository=SqlAlchemyDishRepository())


def _bulk_upload_use_case() -> BulkUploadDishes:
    return BulkUploadDishes(create_dish=_create_dish_use_case())


def dish_filters(
    search: str | None = Query(default=None),
    country: int | None = Query(default=None, gt=0),
    category: DishCategory | None = Query(default=None),
    featured: bool = Query(default=False),
) -> DishFilters:
    return DishFilters(
        search=search,
        country_id=CountryId(country) if country is not None else None,
        category=category,
        featured=featured,
    )


@router.get("", response_model=list[DishResponse])
def list_dishes(filters: DishFilters = Depends(dish_filters)) -> list[DishResponse]:
    return _list_dishes_use_case().execute(filters)


@router.post(
    "/bulk",
    response_model=BulkUploadResponse,
    dependencies=[Depends(require_admin)],
)
def bulk_upload_dishes(payload: Any = Body(...)) -> BulkUploadResponse:
    return _bulk_upload_use_case().execute(payload)


@router.get("/{dish_id}", response_model=DishResponse)
def get_dish(dish_id: int) -> DishResponse:
    return _get_dish_use_case().execute(DishId(dish_id))


@router.post(
    "",
    response_model=DishResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_dish(body: DishRequest) -> DishResponse:
    return _create_dish_use_case().execute(body)


@router.put("/{dish_id}", response_model=DishResponse, dependencies=[Depends(require_admin)])
def update_dish(dish_id: int, body: DishRequest) -> DishResponse:
    return _update_dish_use_case().execute(DishId(dish_id), body)


@router.delete(
    "/{dish_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_dish(dish_id: int) -> Response:
    _delete_dish_use_case().execute(DishId(dish_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{dish_id}/view",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_dish_view(dish_id: int, request: Request) -> SuccessResponse:
    ip_address = request.client.host if request.client else None
    _record_dish_view_use_case().execute(DishId(dish_id), ip_address)
    return SuccessResponse()
