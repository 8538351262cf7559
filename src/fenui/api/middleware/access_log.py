from __future__ import annotations

import logging
import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("fenui.api.access")

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "path", "status_code"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)

UNMATCHED_ROUTE = "<unmatched>"


def _route_template(request: Request) -> str:
    # Label by "/api/dishes/{dish_id}" rather than the raw URL to bound label cardinality.
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    return template if isinstance(template, str) else UNMATCHED_ROUTE


def _observe(request: Request, status_code: int, started: float) -> dict[str, object]:
    duration_seconds = time.perf_counter() - started
    method = request.method
    route = _route_template(request)
    REQUEST_COUNT.labels(method=method, path=route, status_code=str(status_code)).inc()
    REQUEST_LATENCY.labels(method=method, path=route).observe(duration_seconds)
    return {
        "method": method,
        "path": request.url.path,
        "route": route,
        "status_code": status_code,
        "duration_ms": round(duration_seconds * 1000, 2),
    }


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_error", extra=_observe(request, 500, started))
            raise

        logger.info("request_complete", extra=_observe(request, response.status_code, started))
        return response
