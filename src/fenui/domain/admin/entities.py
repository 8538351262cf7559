from __future__ import annotations

from dataclasses import dataclass

from fenui.domain.common.ids import UserId


@dataclass(frozen=True)
class AdminUser:
    user_id: UserId
    username: str
    password_hash: str

    def __post_init__(self) -> None:
        if not self.username.strip():
            raise ValueError("username must be non-empty")


@dataclass(frozen=True)
class DashboardStats:
    total_dishes: int
    total_countries: int
    total_views: int
