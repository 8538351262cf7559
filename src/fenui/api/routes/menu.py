from __future__ import annotations

from fastapi import APIRouter, Depends

from fenui.api.catalog_cache import catalog_cache
from fenui.api.routes.dishes import dish_filters
from fenui.application.dto.responses import StorefrontMenuResponse
from fenui.application.use_cases.storefront import GetStorefrontMenu
from fenui.domain.menu.filtering import DishFilters
from fenui.infrastructure.db.repositories.dish_repo import SqlAlchemyDishRepository

router = APIRouter(tags=["menu"])


def _storefront_menu_use_case() -> GetStorefrontMenu:
    return GetStorefrontMenu(dish_repository=SqlAlchemyDishRepository(), cache=catalog_cache())


@router.get("/api/menu", response_model=StorefrontMenuResponse)
def get_storefront_menu(filters: DishFilters = Depends(dish_filters)) -> StorefrontMenuResponse:
    return _storefront_menu_use_case().execute(filters)
