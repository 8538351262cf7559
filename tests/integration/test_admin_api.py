from __future__ import annotations

from fastapi.testclient import TestClient


def test_login_starts_session(client: TestClient, admin_credentials: dict[str, str]) -> None:
    assert client.get("/api/admin/me").status_code == 401

    response = client.post(
        "/api/admin/login",
        json=admin_credentials,
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["user"]["username"] == admin_credentials["username"]
    assert client.get("/api/admin/me").json()["username"] == admin_credentials["username"]


def test_login_with_wrong_password_is_rejected(
    client: TestClient,
    admin_credentials: dict[str, str],
) -> None:
    response = client.post(
        "/api/admin/login",
        json={**admin_credentials, "password": "wrong"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"
    assert client.get("/api/admin/stats").status_code == 401


def test_logout_ends_session(admin_client: TestClient) -> None:
    assert admin_client.post("/api/admin/logout").json() == {"success": True}

    assert admin_client.get("/api/admin/stats").status_code == 401


def test_dashboard_stats(admin_client: TestClient) -> None:
    country = admin_client.post(
        "/api/countries",
        json={"name": "Brasil", "flagEmoji": "🇧🇷"},
    ).json()
    dish = admin_client.post(
        "/api/dishes",
        json={
            "name": "Pastel",
            "description": "Frito na hora",
            "price": "9.00",
            "countryId": country["id"],
            "category": "salgados",
        },
    ).json()
    admin_client.post(f"/api/dishes/{dish['id']}/view")

    stats = admin_client.get("/api/admin/stats").json()

    assert stats == {"totalDishes": 1, "totalCountries": 1, "totalViews": 1}


def test_country_summaries(admin_client: TestClient) -> None:
    brasil = admin_client.post(
        "/api/countries",
        json={"name": "Brasil", "flagEmoji": "🇧🇷"},
    ).json()
    admin_client.post("/api/countries", json={"name": "Chile", "flagEmoji": "🇨🇱"})
    for name, price in (("Pastel", "9.00"), ("Coxinha", "7.00")):
        admin_client.post(
            "/api/dishes",
            json={
                "name": name,
                "description": name,
                "price": price,
                "countryId": brasil["id"],
                "category": "salgados",
                "isFeatured": name == "Pastel",
            },
        )

    summaries = admin_client.get("/api/admin/countries/summary").json()

    assert [summary["country"]["name"] for summary in summaries] == ["Brasil", "Chile"]
    assert summaries[0]["totalDishes"] == 2
    assert summaries[0]["featuredDishes"] == 1
    assert summaries[0]["averagePrice"] == 8.0
    assert summaries[1]["averagePrice"] == 0.0
