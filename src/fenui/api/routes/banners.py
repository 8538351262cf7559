from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from fenui.api.auth import require_admin
from fenui.application.dto.requests import BannerRequest
from fenui.application.dto.responses import BannerResponse
from fenui.application.use_cases.banners import (
    CreateBanner,
    DeleteBanner,
    ListBanners,
    UpdateBanner,
)
from fenui.domain.common.ids import BannerId
from fenui.infrastructure.db.repositories.banner_repo import SqlAlchemyBannerRepository

router = APIRouter(prefix="/api/banners", tags=["banners"])


@router.get("", response_model=list[BannerResponse])
def list_banners(active: bool = Query(default=False)) -> list[BannerResponse]:
    return ListBanners(SqlAlchemyBannerRepository()).execute(active_only=active)


@router.post(
    "",
    response_model=BannerResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_banner(body: BannerRequest) -> BannerResponse:
    return CreateBanner(SqlAlchemyBannerRepository()).execute(body)


@router.put("/{banner_id}", response_model=BannerResponse, dependencies=[Depends(require_admin)])
def update_banner(banner_id: int, body: BannerRequest) -> BannerResponse:
    return UpdateBanner(SqlAlchemyBannerRepository()).execute(BannerId(banner_id), body)


@router.delete(
    "/{banner_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_banner(banner_id: int) -> Response:
    DeleteBanner(SqlAlchemyBannerRepository()).execute(BannerId(banner_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
