from __future__ import annotations

import logging
from typing import Callable

from fenui.application.dto.responses import AdminUserResponse, DashboardStatsResponse
from fenui.application.metrics.catalog_activity import record_admin_login
from fenui.application.ports.repositories import StatsRepository, UserRepository

logger = logging.getLogger(__name__)

PasswordVerifier = Callable[[str, str], bool]


class InvalidCredentialsError(Exception):
    pass


class AdminLogin:
    def __init__(self, user_repository: UserRepository, verify_password: PasswordVerifier) -> None:
        self._user_repository = user_repository
        self._verify_password = verify_password

    def execute(self, username: str, password: str) -> AdminUserResponse:
        user = self._user_repository.get_by_username(username)
        if user is None or not self._verify_password(password, user.password_hash):
            record_admin_login(succeeded=False)
            logger.warning("admin_login_failed", extra={"username": username})
            raise InvalidCredentialsError("invalid credentials")

        record_admin_login(succeeded=True)
        logger.info("admin_login_succeeded", extra={"username": user.username})
        return AdminUserResponse(id=int(user.user_id), username=user.username)


class GetDashboardStats:
    def __init__(self, stats_repository: StatsRepository) -> None:
        self._stats_repository = stats_repository

    def execute(self) -> DashboardStatsResponse:
        stats = self._stats_repository.dashboard_stats()
        return DashboardStatsResponse(
            totalDishes=stats.total_dishes,
            totalCountries=stats.total_countries,
            totalViews=stats.total_views,
        )
