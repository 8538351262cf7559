from __future__ import annotations

from fenui.application.dto.requests import BannerRequest
from fenui.application.dto.responses import BannerResponse
from fenui.application.mappers.festival_mapper import to_banner_data, to_banner_response
from fenui.application.metrics.catalog_activity import record_catalog_mutation
from fenui.application.ports.repositories import BannerRepository
from fenui.domain.common.ids import BannerId


class BannerNotFoundError(Exception):
    pass


class ListBanners:
    def __init__(self, banner_repository: BannerRepository) -> None:
        self._banner_repository = banner_repository

    def execute(self, *, active_only: bool = False) -> list[BannerResponse]:
        banners = self._banner_repository.list_all(active_only=active_only)
        return [to_banner_response(banner) for banner in banners]


class CreateBanner:
    def __init__(self, banner_repository: BannerRepository) -> None:
        self._banner_repository = banner_repository

    def execute(self, request: BannerRequest) -> BannerResponse:
        banner = self._banner_repository.add(to_banner_data(request))
        record_catalog_mutation("banner", "create")
        return to_banner_response(banner)


class UpdateBanner:
    def __init__(self, banner_repository: BannerRepository) -> None:
        self._banner_repository = banner_repository

    def execute(self, banner_id: BannerId, request: BannerRequest) -> BannerResponse:
        banner = self._banner_repository.update(banner_id, to_banner_data(request))
        if banner is None:
            raise BannerNotFoundError(f"banner not found for banner_id={banner_id}")
        record_catalog_mutation("banner", "update")
        return to_banner_response(banner)


class DeleteBanner:
    def __init__(self, banner_repository: BannerRepository) -> None:
        self._banner_repository = banner_repository

    def execute(self, banner_id: BannerId) -> None:
        if not self._banner_repository.delete(banner_id):
            raise BannerNotFoundError(f"banner not found for banner_id={banner_id}")
        record_catalog_mutation("banner", "delete")
