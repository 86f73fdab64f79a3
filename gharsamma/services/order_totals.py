"""Order totals in the shopper's currency and in NPR.

Line items arrive already priced in the order currency. Quantities and
prices are trusted as-is; validation belongs to the caller. Subtotal and NPR
subtotal are rounded independently, so ``nprSubtotal / rate`` may differ from
``subtotal`` by a cent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Protocol

from gharsamma.models.constants import BASE_CURRENCY
from gharsamma.services.currency import convert_to_npr, get_exchange_rate
from gharsamma.services.money import round2, round4


class SupportsLineItem(Protocol):
    price: float
    quantity: int


@dataclass(frozen=True)
class OrderTotals:
    subtotal: float
    npr_subtotal: float
    exchange_rate: float
    currency: str


def _line_value(item) -> float:  # type: ignore[no-untyped-def]
    if isinstance(item, Mapping):
        return item["price"] * item["quantity"]
    return item.price * item.quantity


def calculate_order_totals(
    items: Iterable[SupportsLineItem | Mapping[str, float]],
    currency: str,
    rates: Optional[Mapping[str, float]] = None,
) -> OrderTotals:
    code = currency.strip().upper()
    subtotal = sum((_line_value(item) for item in items), 0.0)
    npr_subtotal = (
        subtotal if code == BASE_CURRENCY else convert_to_npr(subtotal, code, rates)
    )
    exchange_rate = get_exchange_rate(code, BASE_CURRENCY, rates)
    return OrderTotals(
        subtotal=round2(subtotal),
        npr_subtotal=round2(npr_subtotal),
        exchange_rate=round4(exchange_rate),
        currency=code,
    )
