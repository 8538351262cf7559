from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Engine, Select, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fenui.application.ports.repositories import (
    DishRepository,
    UnknownCountryReferenceError,
    UnknownDishReferenceError,
)
from fenui.domain.common.ids import CountryId, DishId
from fenui.domain.menu.entities import Dish, DishCategory, DishData, DishWithCountry
from fenui.domain.menu.filtering import DishFilters
from fenui.infrastructure.db.models.menu import CountryModel, DishModel, DishViewModel
from fenui.infrastructure.db.repositories.country_repo import country_to_domain
from fenui.infrastructure.db.session import as_utc, get_engine


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _dish_to_domain(model: DishModel) -> Dish:
    return Dish(
        dish_id=DishId(model.id),
        name=model.name,
        description=model.description,
        price=model.price,
        country_id=CountryId(model.country_id),
        category=DishCategory(model.category),
        image=model.image,
        tags=tuple(model.tags or ()),
        allergens=tuple(model.allergens or ()),
        rating=model.rating,
        review_count=model.review_count,
        is_featured=model.is_featured,
        is_available=model.is_available,
        order=model.order,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )


def _dish_values(data: DishData) -> dict[str, object]:
    return {
        "name": data.name,
        "description": data.description,
        "price": data.price,
        "country_id": int(data.country_id),
        "category": data.category.value,
        "image": data.image,
        "tags": list(data.tags),
        "allergens": list(data.allergens),
        "rating": data.rating,
        "review_count": data.review_count,
        "is_featured": data.is_featured,
        "is_available": data.is_available,
        "order": data.order,
    }


def _with_country() -> Select[tuple[DishModel, CountryModel]]:
    return select(DishModel, CountryModel).join(
        CountryModel, DishModel.country_id == CountryModel.id
    )


class SqlAlchemyDishRepository(DishRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_all(self, filters: DishFilters) -> list[DishWithCountry]:
        statement = _with_country()

        term = filters.normalized_search()
        if term is not None:
            statement = statement.where(
                DishModel.name.ilike(f"%{_escape_like(term)}%", escape="\\")
            )
        if filters.country_id is not None:
            statement = statement.where(DishModel.country_id == int(filters.country_id))
        if filters.category is not None:
            statement = statement.where(DishModel.category == filters.category.value)
        if filters.featured:
            statement = statement.where(DishModel.is_featured.is_(True))

        statement = statement.order_by(
            CountryModel.order,
            DishModel.order,
            DishModel.name,
            DishModel.id,
        )

        with Session(self._engine) as session:
            rows = session.execute(statement).all()
            return [
                DishWithCountry(dish=_dish_to_domain(dish), country=country_to_domain(country))
                for dish, country in rows
            ]

    def get(self, dish_id: DishId) -> DishWithCountry | None:
        statement = _with_country().where(DishModel.id == int(dish_id))
        with Session(self._engine) as session:
            row = session.execute(statement).one_or_none()
            if row is None:
                return None
            dish, country = row
            return DishWithCountry(dish=_dish_to_domain(dish), country=country_to_domain(country))

    def add(self, data: DishData) -> DishWithCountry:
        model = DishModel(**_dish_values(data))
        with Session(self._engine) as session:
            session.add(model)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise UnknownCountryReferenceError(
                    f"country {data.country_id} does not exist"
                ) from exc
            dish_id = DishId(model.id)

        created = self.get(dish_id)
        if created is None:
            raise RuntimeError(f"failed to load created dish {dish_id}")
        return created

    def update(self, dish_id: DishId, data: DishData) -> DishWithCountry | None:
        with Session(self._engine) as session:
            model = session.get(DishModel, int(dish_id))
            if model is None:
                return None
            for key, value in _dish_values(data).items():
                setattr(model, key, value)
            model.updated_at = datetime.now(timezone.utc)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise UnknownCountryReferenceError(
                    f"country {data.country_id} does not exist"
                ) from exc

        return self.get(dish_id)

    def delete(self, dish_id: DishId) -> bool:
        # Views reference the dish without a cascade, so both deletes share one transaction.
        with Session(self._engine) as session, session.begin():
            session.execute(delete(DishViewModel).where(DishViewModel.dish_id == int(dish_id)))
            result = session.execute(delete(DishModel).where(DishModel.id == int(dish_id)))
        return (result.rowcount or 0) > 0

    def record_view(self, dish_id: DishId, ip_address: str | None) -> None:
        with Session(self._engine) as session:
            session.add(DishViewModel(dish_id=int(dish_id), ip_address=ip_address))
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise UnknownDishReferenceError(f"dish {dish_id} does not exist") from exc
