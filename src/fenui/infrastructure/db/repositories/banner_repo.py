from __future__ import annotations

from sqlalchemy import Engine, delete, select
from sqlalchemy.orm import Session

from fenui.application.ports.repositories import BannerRepository
from fenui.domain.common.ids import BannerId
from fenui.domain.festival.entities import Banner, BannerData
from fenui.infrastructure.db.models.festival import BannerModel
from fenui.infrastructure.db.session import as_utc, get_engine


def _to_domain(model: BannerModel) -> Banner:
    return Banner(
        banner_id=BannerId(model.id),
        title=model.title,
        image=model.image,
        link=model.link,
        order=model.order,
        is_active=model.is_active,
        created_at=as_utc(model.created_at),
    )


def _banner_values(data: BannerData) -> dict[str, object]:
    return {
        "title": data.title,
        "image": data.image,
        "link": data.link,
        "order": data.order,
        "is_active": data.is_active,
    }


class SqlAlchemyBannerRepository(BannerRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_all(self, *, active_only: bool = False) -> list[Banner]:
        statement = select(BannerModel)
        if active_only:
            statement = statement.where(BannerModel.is_active.is_(True))
        statement = statement.order_by(BannerModel.order, BannerModel.id)
        with Session(self._engine) as session:
            return [_to_domain(model) for model in session.execute(statement).scalars()]

    def add(self, data: BannerData) -> Banner:
        model = BannerModel(**_banner_values(data))
        with Session(self._engine) as session:
            session.add(model)
            session.commit()
            session.refresh(model)
            return _to_domain(model)

    def update(self, banner_id: BannerId, data: BannerData) -> Banner | None:
        with Session(self._engine) as session:
            model = session.get(BannerModel, int(banner_id))
            if model is None:
                return None
            for key, value in _banner_values(data).items():
                setattr(model, key, value)
            session.commit()
            session.refresh(model)
            return _to_domain(model)

    def delete(self, banner_id: BannerId) -> bool:
        statement = delete(BannerModel).where(BannerModel.id == int(banner_id))
        with Session(self._engine) as session:
            result = session.execute(statement)
            session.commit()
        return (result.rowcount or 0) > 0
