from __future__ import annotations

from typing import Sequence

from sqlalchemy import Engine, delete, select, update
from sqlalchemy.orm import Session

from fenui.application.ports.repositories import CountryRepository
from fenui.domain.common.ids import CountryId
from fenui.domain.menu.entities import Country, CountryData
from fenui.infrastructure.db.models.menu import CountryModel, DishModel
from fenui.infrastructure.db.session import as_utc, get_engine


def country_to_domain(model: CountryModel) -> Country:
    return Country(
        country_id=CountryId(model.id),
        name=model.name,
        flag_emoji=model.flag_emoji,
        flag_image=model.flag_image,
        order=model.order,
        is_active=model.is_active,
        created_at=as_utc(model.created_at),
    )


def _country_values(data: CountryData) -> dict[str, object]:
    return {
        "name": data.name,
        "flag_emoji": data.flag_emoji,
        "flag_image": data.flag_image,
        "order": data.order,
        "is_active": data.is_active,
    }


class SqlAlchemyCountryRepository(CountryRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_all(self) -> list[Country]:
        statement = select(CountryModel).order_by(
            CountryModel.order, CountryModel.name, CountryModel.id
        )
        with Session(self._engine) as session:
            models = session.execute(statement).scalars().all()
            return [country_to_domain(model) for model in models]

    def get(self, country_id: CountryId) -> Country | None:
        with Session(self._engine) as session:
            model = session.get(CountryModel, int(country_id))
            if model is None:
                return None
            return country_to_domain(model)

    def add(self, data: CountryData) -> Country:
        model = CountryModel(**_country_values(data))
        with Session(self._engine) as session:
            session.add(model)
            session.commit()
            session.refresh(model)
            return country_to_domain(model)

    def update(self, country_id: CountryId, data: CountryData) -> Country | None:
        with Session(self._engine) as session:
            model = session.get(CountryModel, int(country_id))
            if model is None:
                return None
            for key, value in _country_values(data).items():
                setattr(model, key, value)
            session.commit()
            session.refresh(model)
            return country_to_domain(model)

    def delete(self, country_id: CountryId) -> bool:
        statement = delete(CountryModel).where(CountryModel.id == int(country_id))
        with Session(self._engine) as session:
            result = session.execute(statement)
            session.commit()
        return (result.rowcount or 0) > 0

    def reorder(self, country_ids: Sequence[CountryId]) -> None:
        with Session(self._engine) as session:
            for position, country_id in enumerate(country_ids):
                session.execute(
                    update(CountryModel)
                    .where(CountryModel.id == int(country_id))
                    .values(order=position)
                )
            session.commit()

    def has_dishes(self, country_id: CountryId) -> bool:
        statement = select(DishModel.id).where(DishModel.country_id == int(country_id)).limit(1)
        with Session(self._engine) as session:
            return session.execute(statement).scalar_one_or_none() is not None
