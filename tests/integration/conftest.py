from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete
from sqlalchemy.orm import Session

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from fenui.infrastructure.cache import redis_client
from fenui.infrastructure.db import session as db_session
from fenui.infrastructure.db.models.festival import BannerModel, EventoModel
from fenui.infrastructure.db.models.menu import Base, CountryModel, DishModel, DishViewModel
from fenui.infrastructure.db.repositories.admin_repo import SqlAlchemyUserRepository
from fenui.infrastructure.security.passwords import hash_password

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "festival-2025"


@pytest.fixture(scope="session", autouse=True)
def integration_environment(tmp_path_factory: pytest.TempPathFactory) -> Iterator[None]:
    database_path = tmp_path_factory.mktemp("db") / "fenui.sqlite3"

    os.environ["DATABASE_URL"] = f"sqlite:///{database_path}"
    os.environ.pop("REDIS_URL", None)
    os.environ["APP_ENV"] = "test"
    os.environ.setdefault("OTEL_SERVICE_NAME", "fenui-api-test")
    os.environ.setdefault("OTEL_EXPORTER_OTLP_ENDPOINT", "")

    db_session._build_engine.cache_clear()
    redis_client._build_client.cache_clear()

    engine = db_session.get_engine()
    Base.metadata.create_all(engine)
    SqlAlchemyUserRepository(engine).add(ADMIN_USERNAME, hash_password(ADMIN_PASSWORD))
    yield
    engine.dispose()
    db_session._build_engine.cache_clear()


@pytest.fixture(autouse=True)
def clean_catalog() -> Iterator[None]:
    yield
    with Session(db_session.get_engine()) as session, session.begin():
        for model in (DishViewModel, DishModel, EventoModel, BannerModel, CountryModel):
            session.execute(delete(model))


@pytest.fixture()
def client() -> Iterator[TestClient]:
    from fenui.api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def admin_client(client: TestClient) -> TestClient:
    response = client.post(
        "/api/admin/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return client


@pytest.fixture()
def admin_credentials() -> dict[str, str]:
    return {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}
