from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from fenui.api.auth import end_admin_session, require_admin, start_admin_session
from fenui.application.dto.requests import LoginRequest
from fenui.application.dto.responses import (
    AdminUserResponse,
    CountrySummaryResponse,
    DashboardStatsResponse,
    LoginResponse,
    SuccessResponse,
)
from fenui.application.use_cases.admin import AdminLogin, GetDashboardStats
from fenui.application.use_cases.storefront import GetCountrySummaries
from fenui.infrastructure.db.repositories.admin_repo import (
    SqlAlchemyStatsRepository,
    SqlAlchemyUserRepository,
)
from fenui.infrastructure.db.repositories.country_repo import SqlAlchemyCountryRepository
from fenui.infrastructure.db.repositories.dish_repo import SqlAlchemyDishRepository
from fenui.infrastructure.security.passwords import verify_password

router = APIRouter(prefix="/api/admin", tags=["admin"])


def _admin_login_use_case() -> AdminLogin:
    return AdminLogin(user_repository=SqlAlchemyUserRepository(), verify_password=verify_password)


def _country_summaries_use_case() -> GetCountrySummaries:
    return GetCountrySummaries(
        country_repository=SqlAlchemyCountryRepository(),
        dish_repository=SqlAlchemyDishRepository(),
    )


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, request: Request) -> LoginResponse:
    user = _admin_login_use_case().execute(body.username, body.password)
    start_admin_session(request, user_id=user.id, username=user.username)
    return LoginResponse(success=True, user=user)


@router.post("/logout", response_model=SuccessResponse)
def logout(request: Request) -> SuccessResponse:
    end_admin_session(request)
    return SuccessResponse()


@router.get("/me", response_model=AdminUserResponse)
def me(admin: dict[str, Any] = Depends(require_admin)) -> AdminUserResponse:
    return AdminUserResponse(id=admin["id"], username=admin["username"])


@router.get(
    "/stats",
    response_model=DashboardStatsResponse,
    dependencies=[Depends(require_admin)],
)
def dashboard_stats() -> DashboardStatsResponse:
    return GetDashboardStats(SqlAlchemyStatsRepository()).execute()


@router.get(
    "/countries/summary",
    response_model=list[CountrySummaryResponse],
    dependencies=[Depends(require_admin)],
)
def country_summaries() -> list[CountrySummaryResponse]:
    return _country_summaries_use_case().execute()
