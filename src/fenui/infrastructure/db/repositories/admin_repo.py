from __future__ import annotations

from sqlalchemy import Engine, func, select
from sqlalchemy.orm import Session

from fenui.application.ports.repositories import StatsRepository, UserRepository
from fenui.domain.admin.entities import AdminUser, DashboardStats
from fenui.domain.common.ids import UserId
from fenui.infrastructure.db.models.menu import CountryModel, DishModel, DishViewModel, UserModel
from fenui.infrastructure.db.session import get_engine


def _to_domain(model: UserModel) -> AdminUser:
    return AdminUser(
        user_id=UserId(model.id),
        username=model.username,
        password_hash=model.password,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get_by_username(self, username: str) -> AdminUser | None:
        statement = select(UserModel).where(UserModel.username == username)
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return None
            return _to_domain(model)

    def add(self, username: str, password_hash: str) -> AdminUser:
        model = UserModel(username=username, password=password_hash)
        with Session(self._engine) as session:
            session.add(model)
            session.commit()
            session.refresh(model)
            return _to_domain(model)

    def set_password(self, username: str, password_hash: str) -> bool:
        statement = select(UserModel).where(UserModel.username == username)
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            if model is None:
                return False
            model.password = password_hash
            session.commit()
        return True


class SqlAlchemyStatsRepository(StatsRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def dashboard_stats(self) -> DashboardStats:
        with Session(self._engine) as session:
            total_dishes = session.execute(select(func.count(DishModel.id))).scalar_one()
            total_countries = session.execute(select(func.count(CountryModel.id))).scalar_one()
            total_views = session.execute(select(func.count(DishViewModel.id))).scalar_one()
        return DashboardStats(
            total_dishes=int(total_dishes),
            total_countries=int(total_countries),
            total_views=int(total_views),
        )
