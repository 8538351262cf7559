from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from fenui.domain.admin.entities import AdminUser, DashboardStats
from fenui.domain.common.ids import BannerId, CountryId, DishId, EventoId
from fenui.domain.festival.entities import Banner, BannerData, EventoData, EventoWithCountry
from fenui.domain.menu.entities import Country, CountryData, DishData, DishWithCountry
from fenui.domain.menu.filtering import DishFilters


class CountryRepository(Protocol):
    def list_all(self) -> list[Country]: ...

    def get(self, country_id: CountryId) -> Country | None: ...

    def add(self, data: CountryData) -> Country: ...

    def update(self, country_id: CountryId, data: CountryData) -> Country | None: ...

    def delete(self, country_id: CountryId) -> bool: ...

    def reorder(self, country_ids: Sequence[CountryId]) -> None: ...

    def has_dishes(self, country_id: CountryId) -> bool: ...


class DishRepository(Protocol):
    def list_all(self, filters: DishFilters) -> list[DishWithCountry]: ...

    def get(self, dish_id: DishId) -> DishWithCountry | None: ...

    def add(self, data: DishData) -> DishWithCountry: ...

    def update(self, dish_id: DishId, data: DishData) -> DishWithCountry | None: ...

    def delete(self, dish_id: DishId) -> bool: ...

    def record_view(self, dish_id: DishId, ip_address: str | None) -> None: ...


class BannerRepository(Protocol):
    def list_all(self, *, active_only: bool = False) -> list[Banner]: ...

    def add(self, data: BannerData) -> Banner: ...

    def update(self, banner_id: BannerId, data: BannerData) -> Banner | None: ...

    def delete(self, banner_id: BannerId) -> bool: ...


class EventoRepository(Protocol):
    def list_all(
        self,
        day: date | None = None,
        *,
        active_only: bool = True,
    ) -> list[EventoWithCountry]: ...

    def get(self, evento_id: EventoId) -> EventoWithCountry | None: ...

    def add(self, data: EventoData) -> EventoWithCountry: ...

    def update(self, evento_id: EventoId, data: EventoData) -> EventoWithCountry | None: ...

    def delete(self, evento_id: EventoId) -> bool: ...


class UserRepository(Protocol):
    def get_by_username(self, username: str) -> AdminUser | None: ...

    def add(self, username: str, password_hash: str) -> AdminUser: ...


class StatsRepository(Protocol):
    def dashboard_stats(self) -> DashboardStats: ...


class UnknownCountryReferenceError(Exception):
    pass


class UnknownDishReferenceError(Exception):
    pass
