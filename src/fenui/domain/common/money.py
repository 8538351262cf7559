from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_CENTS = Decimal("0.01")


def parse_price(value: str | int | float | Decimal) -> Decimal:
    try:
        amount = Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"invalid price: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"invalid price: {value!r}")
    if amount < 0:
        raise ValueError("price must be >= 0")
    return amount


def format_price(amount: Decimal) -> str:
    return f"{amount.quantize(_CENTS, rounding=ROUND_HALF_UP):.2f}"
