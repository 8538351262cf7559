from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone

from fenui.domain.common.ids import BannerId, CountryId, EventoId
from fenui.domain.menu.entities import Country


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BannerData:
    title: str
    image: str
    link: str | None = None
    order: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValueError("title must be non-empty")
        if not self.image.strip():
            raise ValueError("image must be non-empty")


@dataclass(frozen=True)
class Banner:
    banner_id: BannerId
    title: str
    image: str
    link: str | None = None
    order: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class EventoData:
    title: str
    description: str
    day: date
    start_time: time
    end_time: time
    location: str
    image_url: str | None = None
    country_id: CountryId | None = None
    is_featured: bool = False
    order: int = 0
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.title.strip():
            raise ValueError("title must be non-empty")
        if not self.location.strip():
            raise ValueError("location must be non-empty")


@dataclass(frozen=True)
class Evento:
    evento_id: EventoId
    title: str
    description: str
    day: date
    start_time: time
    end_time: time
    location: str
    image_url: str | None = None
    country_id: CountryId | None = None
    is_featured: bool = False
    order: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class EventoWithCountry:
    evento: Evento
    country: Country | None
