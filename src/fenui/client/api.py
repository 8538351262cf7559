from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Sequence

import httpx

from fenui.client.query_cache import QueryCache
from fenui.domain.menu.filtering import DishFilters

logger = logging.getLogger(__name__)

COUNTRIES = "/api/countries"
DISHES = "/api/dishes"
MENU = "/api/menu"
BANNERS = "/api/banners"
EVENTOS = "/api/eventos"
ADMIN = "/api/admin"

# Reads that depend on dish or country data.
_CATALOG_ENDPOINTS = (COUNTRIES, DISHES, MENU, EVENTOS, f"{ADMIN}/stats", f"{ADMIN}/countries")


class ApiError(Exception):
    def __init__(self, status_code: int, payload: Any) -> None:
        super().__init__(f"request failed with status {status_code}")
        self.status_code = status_code
        self.payload = payload

    @property
    def code(self) -> str | None:
        if isinstance(self.payload, dict):
            error = self.payload.get("error")
            if isinstance(error, dict):
                return error.get("code")
        return None


def _payload(response: httpx.Response) -> Any:
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class FestivalApiClient:
    """HTTP client for the festival API with an explicit read cache.

    GET requests are served from ``cache`` when present; every mutation drops
    the cached reads it can affect. A session cookie set by ``login`` is kept
    on the underlying ``httpx.Client``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        http_client: httpx.Client | None = None,
        cache: QueryCache | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        if http_client is None:
            if base_url is None:
                raise ValueError("base_url or http_client is required")
            http_client = httpx.Client(base_url=base_url, timeout=timeout_seconds)
        self._http = http_client
        self.cache = cache if cache is not None else QueryCache()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> FestivalApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        response = self._http.request(method, path, params=params, json=json)
        payload = _payload(response)
        if response.is_error:
            logger.warning(
                "api_request_failed",
                extra={"method": method, "path": path, "status_code": response.status_code},
            )
            raise ApiError(response.status_code, payload)
        return payload

    def _cached_get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        entry = self.cache.get(path, params)
        if entry is not None:
            return entry.data
        data = self._request("GET", path, params=params)
        self.cache.set(path, data, params)
        return data

    def _invalidate(self, *prefixes: str) -> None:
        for prefix in prefixes:
            self.cache.invalidate(prefix)

    def _invalidate_catalog(self) -> None:
        self._invalidate(*_CATALOG_ENDPOINTS)

    # Countries

    def list_countries(self) -> list[dict[str, Any]]:
        return self._cached_get(COUNTRIES)

    def create_country(self, data: Mapping[str, Any]) -> dict[str, Any]:
        created = self._request("POST", COUNTRIES, json=dict(data))
        self._invalidate_catalog()
        return created

    def update_country(self, country_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        updated = self._request("PUT", f"{COUNTRIES}/{country_id}", json=dict(data))
        self._invalidate_catalog()
        return updated

    def delete_country(self, country_id: int) -> None:
        self._request("DELETE", f"{COUNTRIES}/{country_id}")
        self._invalidate_catalog()

    def reorder_countries(self, country_ids: Sequence[int]) -> None:
        self._request("PUT", f"{COUNTRIES}/reorder", json={"countryIds": list(country_ids)})
        self._invalidate_catalog()

    # Dishes

    def list_dishes(self, filters: DishFilters | None = None) -> list[dict[str, Any]]:
        params = (filters or DishFilters()).as_params()
        return self._cached_get(DISHES, params)

    def get_dish(self, dish_id: int) -> dict[str, Any]:
        return self._cached_get(f"{DISHES}/{dish_id}")

    def create_dish(self, data: Mapping[str, Any]) -> dict[str, Any]:
        created = self._request("POST", DISHES, json=dict(data))
        self._invalidate_catalog()
        return created

    def update_dish(self, dish_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        updated = self._request("PUT", f"{DISHES}/{dish_id}", json=dict(data))
        self._invalidate_catalog()
        return updated

    def delete_dish(self, dish_id: int) -> None:
        self._request("DELETE", f"{DISHES}/{dish_id}")
        self._invalidate_catalog()

    def record_dish_view(self, dish_id: int) -> None:
        self._request("POST", f"{DISHES}/{dish_id}/view")
        self._invalidate(f"{ADMIN}/stats")

    def bulk_upload_dishes(self, records: Sequence[Mapping[str, Any]]) -> dict[str, Any]:
        result = self._request("POST", f"{DISHES}/bulk", json=[dict(record) for record in records])
        self._invalidate_catalog()
        return result

    def storefront_menu(self, filters: DishFilters | None = None) -> dict[str, Any]:
        params = (filters or DishFilters()).as_params()
        return self._cached_get(MENU, params)

    # Banners

    def list_banners(self, *, active_only: bool = False) -> list[dict[str, Any]]:
        return self._cached_get(BANNERS, {"active": "true"} if active_only else None)

    def create_banner(self, data: Mapping[str, Any]) -> dict[str, Any]:
        created = self._request("POST", BANNERS, json=dict(data))
        self._invalidate(BANNERS)
        return created

    def update_banner(self, banner_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        updated = self._request("PUT", f"{BANNERS}/{banner_id}", json=dict(data))
        self._invalidate(BANNERS)
        return updated

    def delete_banner(self, banner_id: int) -> None:
        self._request("DELETE", f"{BANNERS}/{banner_id}")
        self._invalidate(BANNERS)

    # Eventos

    def list_eventos(self, day: date | None = None) -> list[dict[str, Any]]:
        return self._cached_get(EVENTOS, {"dia": day.isoformat()} if day else None)

    def get_evento(self, evento_id: int) -> dict[str, Any]:
        return self._cached_get(f"{EVENTOS}/{evento_id}")

    def create_evento(self, data: Mapping[str, Any]) -> dict[str, Any]:
        created = self._request("POST", EVENTOS, json=dict(data))
        self._invalidate(EVENTOS)
        return created

    def update_evento(self, evento_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        updated = self._request("PUT", f"{EVENTOS}/{evento_id}", json=dict(data))
        self._invalidate(EVENTOS)
        return updated

    def delete_evento(self, evento_id: int) -> None:
        self._request("DELETE", f"{EVENTOS}/{evento_id}")
        self._invalidate(EVENTOS)

    # Admin

    def login(self, username: str, password: str) -> dict[str, Any]:
        result = self._request(
            "POST",
            f"{ADMIN}/login",
            json={"username": username, "password": password},
        )
        self._invalidate(ADMIN)
        return result

    def logout(self) -> None:
        self._request("POST", f"{ADMIN}/logout")
        self._invalidate(ADMIN)

    def dashboard_stats(self) -> dict[str, Any]:
        return self._cached_get(f"{ADMIN}/stats")

    def country_summaries(self) -> list[dict[str, Any]]:
        return self._cached_get(f"{ADMIN}/countries/summary")
