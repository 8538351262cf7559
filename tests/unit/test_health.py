from __future__ import annotations

import sys
from pathlib import Path

from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import fenui.api.routes.health as health_route
from fenui.api.main import app


def test_live_health_endpoint() -> None:
    client = TestClient(app)
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_health_endpoint_healthy_with_mocks(monkeypatch) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda timeout_seconds=1.0: True)
    monkeypatch.setattr(health_route, "ping_redis", lambda timeout_seconds=1.0: True)

    client = TestClient(app)
    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_ready_health_endpoint_reports_failed_checks(monkeypatch) -> None:
    monkeypatch.setattr(health_route, "ping_database", lambda timeout_seconds=1.0: False)
    monkeypatch.setattr(health_route, "ping_redis", lambda timeout_seconds=1.0: True)

    client = TestClient(app)
    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["checks"] == {"database": False, "redis": True}


def test_metrics_endpoint_exposes_prometheus_text() -> None:
    client = TestClient(app)
    client.get("/health/live")

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text


def test_request_id_is_echoed() -> None:
    client = TestClient(app)

    response = client.get("/health/live", headers={"X-Request-Id": "req-123"})

    assert response.headers["x-request-id"] == "req-123"


def test_metrics_label_requests_by_route_template() -> None:
    client = TestClient(app)
    client.get("/health/live")
    client.get("/definitely/not/a/route")

    text = client.get("/metrics").text

    assert 'path="/health/live"' in text
    assert 'path="<unmatched>"' in text
    assert 'path="/definitely/not/a/route"' not in text
