from __future__ import annotations

from typing import Any

from fastapi import Request

ADMIN_SESSION_KEY = "admin"


class NotAuthenticatedError(Exception):
    pass


def start_admin_session(request: Request, user_id: int, username: str) -> None:
    request.session.clear()
    request.session[ADMIN_SESSION_KEY] = {"id": user_id, "username": username}


def end_admin_session(request: Request) -> None:
    request.session.clear()


def require_admin(request: Request) -> dict[str, Any]:
    """Route dependency: the signed session must carry a logged-in admin."""
    admin = request.session.get(ADMIN_SESSION_KEY)
    if not admin:
        raise NotAuthenticatedError("admin login required")
    return admin
