from __future__ import annotations

import sys
from dataclasses import replace
from datetime import date, time
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from fenui.application.dto.requests import BannerRequest, EventoRequest
from fenui.application.ports.repositories import UnknownCountryReferenceError
from fenui.application.use_cases.banners import (
    BannerNotFoundError,
    CreateBanner,
    DeleteBanner,
    ListBanners,
    UpdateBanner,
)
from fenui.application.use_cases.countries import CountryNotFoundError
from fenui.application.use_cases.eventos import (
    CreateEvento,
    EventoNotFoundError,
    GetEvento,
    ListEventos,
)
from fenui.domain.common.ids import BannerId, CountryId, EventoId
from fenui.domain.festival.entities import (
    Banner,
    BannerData,
    Evento,
    EventoData,
    EventoWithCountry,
)
from fenui.domain.menu.entities import Country

ITALIA = Country(country_id=CountryId(1), name="Itália", flag_emoji="🇮🇹")


class FakeBannerRepository:
    def __init__(self) -> None:
        self.banners: dict[int, Banner] = {}

    def list_all(self, *, active_only: bool = False) -> list[Banner]:
        banners = sorted(self.banners.values(), key=lambda b: (b.order, int(b.banner_id)))
        return [b for b in banners if b.is_active or not active_only]

    def add(self, data: BannerData) -> Banner:
        banner = Banner(banner_id=BannerId(len(self.banners) + 1), **vars(data))
        self.banners[int(banner.banner_id)] = banner
        return banner

    def update(self, banner_id: BannerId, data: BannerData) -> Banner | None:
        current = self.banners.get(int(banner_id))
        if current is None:
            return None
        updated = replace(current, **vars(data))
        self.banners[int(banner_id)] = updated
        return updated

    def delete(self, banner_id: BannerId) -> bool:
        return self.banners.pop(int(banner_id), None) is not None


class FakeEventoRepository:
    def __init__(self) -> None:
        self.eventos: dict[int, Evento] = {}
        self.countries = {1: ITALIA}

    def _with_country(self, evento: Evento) -> EventoWithCountry:
        country_id = evento.country_id
        country = self.countries.get(int(country_id)) if country_id is not None else None
        return EventoWithCountry(evento=evento, country=country)

    def list_all(
        self,
        day: date | None = None,
        *,
        active_only: bool = True,
    ) -> list[EventoWithCountry]:
        eventos = sorted(self.eventos.values(), key=lambda e: (e.day, e.start_time, e.order))
        return [
            self._with_country(e)
            for e in eventos
            if (day is None or e.day == day) and (e.is_active or not active_only)
        ]

    def get(self, evento_id: EventoId) -> EventoWithCountry | None:
        evento = self.eventos.get(int(evento_id))
        return self._with_country(evento) if evento else None

    def add(self, data: EventoData) -> EventoWithCountry:
        if data.country_id is not None and int(data.country_id) not in self.countries:
            raise UnknownCountryReferenceError(f"country {data.country_id} does not exist")
        evento = Evento(evento_id=EventoId(len(self.eventos) + 1), **vars(data))
        self.eventos[int(evento.evento_id)] = evento
        return self._with_country(evento)


def _evento_request(**overrides: object) -> EventoRequest:
    payload: dict[str, object] = {
        "title": "Tarantella",
        "description": "Dança típica",
        "day": "2025-06-14",
        "startTime": "19:00",
        "endTime": "19:30",
        "location": "Palco principal",
    }
    payload.update(overrides)
    return EventoRequest.model_validate(payload)


def test_list_banners_can_hide_inactive() -> None:
    repo = FakeBannerRepository()
    create = CreateBanner(repo)
    create.execute(BannerRequest(title="Abertura", image="data:image/png;base64,AAA", order=2))
    create.execute(BannerRequest(title="Oculto", image="/b.png", is_active=False, order=1))

    assert [b.title for b in ListBanners(repo).execute()] == ["Oculto", "Abertura"]
    assert [b.title for b in ListBanners(repo).execute(active_only=True)] == ["Abertura"]


def test_banner_update_and_delete_missing_raise_not_found() -> None:
    repo = FakeBannerRepository()
    request = BannerRequest(title="Abertura", image="/a.png")

    with pytest.raises(BannerNotFoundError):
        UpdateBanner(repo).execute(BannerId(3), request)
    with pytest.raises(BannerNotFoundError):
        DeleteBanner(repo).execute(BannerId(3))


def test_eventos_filtered_by_day_and_active_flag() -> None:
    repo = FakeEventoRepository()
    create = CreateEvento(repo)
    create.execute(_evento_request(title="Sábado"))
    create.execute(_evento_request(title="Domingo", day="2025-06-15"))
    create.execute(_evento_request(title="Cancelado", isActive=False))

    assert [e.title for e in ListEventos(repo).execute()] == ["Sábado", "Domingo"]
    assert [e.title for e in ListEventos(repo).execute(date(2025, 6, 15))] == ["Domingo"]


def test_evento_country_is_optional() -> None:
    repo = FakeEventoRepository()

    general = CreateEvento(repo).execute(_evento_request())
    italian = CreateEvento(repo).execute(_evento_request(countryId=1))

    assert general.country is None
    assert italian.country is not None
    assert italian.country.name == "Itália"
    assert italian.startTime == time(19, 0)


def test_evento_with_unknown_country_is_rejected() -> None:
    with pytest.raises(CountryNotFoundError):
        CreateEvento(FakeEventoRepository()).execute(_evento_request(countryId=7))


def test_get_missing_evento_raises_not_found() -> None:
    with pytest.raises(EventoNotFoundError):
        GetEvento(FakeEventoRepository()).execute(EventoId(1))
