from __future__ import annotations

from prometheus_client import Counter

DISH_VIEWS_TOTAL = Counter(
    "fenui_dish_views_total",
    "Total number of dish views recorded.",
)

CATALOG_MUTATIONS_TOTAL = Counter(
    "fenui_catalog_mutations_total",
    "Total number of catalog writes by entity and action.",
    ["entity", "action"],
)

BULK_UPLOAD_RECORDS_TOTAL = Counter(
    "fenui_bulk_upload_records_total",
    "Total number of dish records processed by bulk uploads.",
    ["outcome"],
)

ADMIN_LOGINS_TOTAL = Counter(
    "fenui_admin_logins_total",
    "Total number of admin login attempts.",
    ["outcome"],
)

CATALOG_CACHE_LOOKUPS_TOTAL = Counter(
    "fenui_catalog_cache_lookups_total",
    "Total number of catalog cache lookups.",
    ["endpoint", "result"],
)


def record_dish_view() -> None:
    DISH_VIEWS_TOTAL.inc()


def record_catalog_mutation(entity: str, action: str) -> None:
    CATALOG_MUTATIONS_TOTAL.labels(entity=entity, action=action).inc()


def record_bulk_upload(successes: int, failures: int) -> None:
    if successes:
        BULK_UPLOAD_RECORDS_TOTAL.labels(outcome="success").inc(successes)
    if failures:
        BULK_UPLOAD_RECORDS_TOTAL.labels(outcome="failure").inc(failures)


def record_admin_login(succeeded: bool) -> None:
    ADMIN_LOGINS_TOTAL.labels(outcome="success" if succeeded else "failure").inc()


def record_cache_lookup(endpoint: str, hit: bool) -> None:
    CATALOG_CACHE_LOOKUPS_TOTAL.labels(endpoint=endpoint, result="hit" if hit else "miss").inc()
