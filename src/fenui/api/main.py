from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from fenui.api.error_handling import register_exception_handlers
from fenui.api.middleware.access_log import AccessLogMiddleware
from fenui.api.middleware.request_id import RequestIDMiddleware
from fenui.api.routes.admin import router as admin_router
from fenui.api.routes.banners import router as banners_router
from fenui.api.routes.countries import router as countries_router
from fenui.api.routes.dishes import router as dishes_router
from fenui.api.routes.eventos import router as eventos_router
from fenui.api.routes.health import router as health_router
from fenui.api.routes.menu import router as menu_router
from fenui.api.routes.metrics import router as metrics_router
from fenui.infrastructure.observability.logging_config import configure_logging
from fenui.infrastructure.observability.otel import configure_otel

SESSION_COOKIE_NAME = "fenui_admin"
SESSION_MAX_AGE_SECONDS = 60 * 60 * 24 * 7
DEV_SESSION_SECRET = "fenui-dev-session-secret"

ROUTERS = (
    health_router,
    metrics_router,
    menu_router,
    countries_router,
    dishes_router,
    banners_router,
    eventos_router,
    admin_router,
)


def _is_local_env() -> bool:
    return os.getenv("APP_ENV", "dev").lower() in {"dev", "test"}


def _cors_allow_origins() -> list[str]:
    if _is_local_env():
        return ["*"]

    raw_value = os.getenv("CORS_ALLOW_ORIGINS", "")
    return [origin.strip() for origin in raw_value.split(",") if origin.strip()]


def _session_secret() -> str:
    secret = os.getenv("SESSION_SECRET", "").strip()
    if secret:
        return secret
    if _is_local_env():
        return DEV_SESSION_SECRET
    raise RuntimeError("SESSION_SECRET must be set outside dev/test")


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="FENUI Menu API", version="0.1.0")
    register_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    # Added innermost first: CORS wraps sessions, which wrap request ids and access logs.
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=_session_secret(),
        session_cookie=SESSION_COOKIE_NAME,
        max_age=SESSION_MAX_AGE_SECONDS,
        same_site="lax",
        https_only=not _is_local_env(),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    configure_otel(app)
    return app


app = create_app()
