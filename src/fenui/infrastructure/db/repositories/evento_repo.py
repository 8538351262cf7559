from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import Engine, Select, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fenui.application.ports.repositories import EventoRepository, UnknownCountryReferenceError
from fenui.domain.common.ids import CountryId, EventoId
from fenui.domain.festival.entities import Evento, EventoData, EventoWithCountry
from fenui.infrastructure.db.models.festival import EventoModel
from fenui.infrastructure.db.models.menu import CountryModel
from fenui.infrastructure.db.repositories.country_repo import country_to_domain
from fenui.infrastructure.db.session import as_utc, get_engine


def _to_domain(model: EventoModel, country: CountryModel | None) -> EventoWithCountry:
    evento = Evento(
        evento_id=EventoId(model.id),
        title=model.title,
        description=model.description,
        day=model.day,
        start_time=model.start_time,
        end_time=model.end_time,
        location=model.location,
        image_url=model.image_url,
        country_id=CountryId(model.country_id) if model.country_id is not None else None,
        is_featured=model.is_featured,
        order=model.order,
        is_active=model.is_active,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )
    return EventoWithCountry(
        evento=evento,
        country=country_to_domain(country) if country is not None else None,
    )


def _evento_values(data: EventoData) -> dict[str, object]:
    return {
        "title": data.title,
        "description": data.description,
        "day": data.day,
        "start_time": data.start_time,
        "end_time": data.end_time,
        "location": data.location,
        "image_url": data.image_url,
        "country_id": int(data.country_id) if data.country_id is not None else None,
        "is_featured": data.is_featured,
        "order": data.order,
        "is_active": data.is_active,
    }


def _with_country() -> Select[tuple[EventoModel, CountryModel]]:
    return select(EventoModel, CountryModel).outerjoin(
        CountryModel, EventoModel.country_id == CountryModel.id
    )


class SqlAlchemyEventoRepository(EventoRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_all(
        self,
        day: date | None = None,
        *,
        active_only: bool = True,
    ) -> list[EventoWithCountry]:
        statement = _with_country()
        if active_only:
            statement = statement.where(EventoModel.is_active.is_(True))
        if day is not None:
            statement = statement.where(EventoModel.day == day)
        statement = statement.order_by(
            EventoModel.day,
            EventoModel.start_time,
            EventoModel.order,
            EventoModel.id,
        )
        with Session(self._engine) as session:
            return [_to_domain(evento, country) for evento, country in session.execute(statement)]

    def get(self, evento_id: EventoId) -> EventoWithCountry | None:
        statement = _with_country().where(EventoModel.id == int(evento_id))
        with Session(self._engine) as session:
            row = session.execute(statement).one_or_none()
            if row is None:
                return None
            return _to_domain(row[0], row[1])

    def add(self, data: EventoData) -> EventoWithCountry:
        model = EventoModel(**_evento_values(data))
        with Session(self._engine) as session:
            session.add(model)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise UnknownCountryReferenceError(
                    f"country {data.country_id} does not exist"
                ) from exc
            evento_id = EventoId(model.id)

        created = self.get(evento_id)
        if created is None:
            raise RuntimeError(f"failed to load created evento {evento_id}")
        return created

    def update(self, evento_id: EventoId, data: EventoData) -> EventoWithCountry | None:
        with Session(self._engine) as session:
            model = session.get(EventoModel, int(evento_id))
            if model is None:
                return None
            for key, value in _evento_values(data).items():
                setattr(model, key, value)
            model.updated_at = datetime.now(timezone.utc)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise UnknownCountryReferenceError(
                    f"country {data.country_id} does not exist"
                ) from exc

        return self.get(evento_id)

    def delete(self, evento_id: EventoId) -> bool:
        statement = delete(EventoModel).where(EventoModel.id == int(evento_id))
        with Session(self._engine) as session:
            result = session.execute(statement)
            session.commit()
        return (result.rowcount or 0) > 0
