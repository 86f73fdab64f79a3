"""Per-product price resolution.

A product can be priced two ways:

- per-country overrides (``product_currency_prices``), already denominated in
  the shopper's currency;
- the deprecated NPR base price on the product row, converted on the fly.

The NPR equivalent of a price is modelled explicitly as either an
``OverridePrice`` (a Nepal/NPR labelled override) or a ``LegacyBasePrice``
(the product's base price). The Nepal override wins when both exist.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Dict, List, Mapping, Optional, Union

from gharsamma.models.constants import BASE_CURRENCY, NEPAL_PRICE_LABELS
from gharsamma.services.country import map_country_to_pricing_country
from gharsamma.services.currency import (
    convert_between,
    convert_from_npr,
    get_currency_symbol,
    get_exchange_rate,
)

if TYPE_CHECKING:  # pragma: no cover
    from gharsamma.db.dal import Database

logger = logging.getLogger("gharsamma.pricing")


@dataclass(frozen=True)
class OverridePrice:
    kind: ClassVar[str] = "override"
    amount: float
    country: str


@dataclass(frozen=True)
class LegacyBasePrice:
    kind: ClassVar[str] = "legacy_base"
    amount: float


NprPriceSource = Union[OverridePrice, LegacyBasePrice]


@dataclass(frozen=True)
class ProductPrice:
    price: float
    compare_price: Optional[float]
    currency: str
    symbol: str
    npr_price: float
    exchange_rate: float
    price_source: str
    npr_source: str


@dataclass(frozen=True)
class DisplayPrice:
    price: float
    compare_price: Optional[float]
    country: str
    currency: Optional[str] = None
    symbol: Optional[str] = None


def _optional_amount(value: Any) -> Optional[float]:
    # Zero compare prices mean "no compare price".
    return float(value) if value else None


def resolve_npr_source(
    product: Dict[str, Any], overrides: List[Dict[str, Any]]
) -> NprPriceSource:
    for cp in overrides:
        if cp["country"].lower() in NEPAL_PRICE_LABELS:
            return OverridePrice(amount=float(cp["price"]), country=cp["country"])
    return LegacyBasePrice(amount=float(product.get("price") or 0))


def get_product_price_in_currency(
    db: "Database",
    product_id: str,
    country: str,
    currency: str,
    rates: Optional[Mapping[str, float]] = None,
    symbols: Optional[Mapping[str, str]] = None,
) -> Optional[ProductPrice]:
    """Price ``product_id`` for a shopper in ``country`` paying in ``currency``.

    Returns ``None`` when the product does not exist or has no usable price.
    Database errors propagate.
    """
    code = currency.strip().upper()
    product = db.get_product_with_prices(product_id, country=country, active_only=True)
    if product is None:
        return None

    overrides = product["currency_prices"]
    npr_source = resolve_npr_source(product, overrides)
    symbol = get_currency_symbol(code, symbols)
    exchange_rate = get_exchange_rate(BASE_CURRENCY, code, rates)

    if overrides:
        override = overrides[0]
        price = float(override["price"])
        compare_price = _optional_amount(override.get("compare_price"))
        # NULL currency (unmapped country) means the amount is already in `code`.
        stored = (override.get("currency") or "").upper()
        if stored and stored != code:
            logger.warning(
                "Override for product %s in %s is priced in %s, converting to %s",
                product_id,
                country,
                stored,
                code,
            )
            price = convert_between(price, stored, code, rates)
            if compare_price is not None:
                compare_price = convert_between(compare_price, stored, code, rates)
        return ProductPrice(
            price=price,
            compare_price=compare_price,
            currency=code,
            symbol=symbol,
            npr_price=npr_source.amount,
            exchange_rate=exchange_rate,
            price_source=OverridePrice.kind,
            npr_source=npr_source.kind,
        )

    npr_price = npr_source.amount
    if npr_price == 0:
        logger.warning("No pricing found for product %s in country %s", product_id, country)
        return None

    base_compare = _optional_amount(product.get("compare_price"))
    return ProductPrice(
        price=convert_from_npr(npr_price, code, rates),
        compare_price=(
            convert_from_npr(base_compare, code, rates) if base_compare is not None else None
        ),
        currency=code,
        symbol=symbol,
        npr_price=npr_price,
        exchange_rate=exchange_rate,
        price_source=LegacyBasePrice.kind,
        npr_source=npr_source.kind,
    )


def get_product_display_price(
    product: Dict[str, Any], user_country: Optional[str] = None
) -> DisplayPrice:
    """Pick the override to show on listings for a shopper's country.

    Order: mapped pricing country, then USA, then any active override, then the
    first override. Products without overrides show a zero price.
    """
    pricing_country = map_country_to_pricing_country(user_country)
    overrides: List[Dict[str, Any]] = product.get("currency_prices") or []

    chosen = next(
        (
            cp
            for cp in overrides
            if cp["country"].lower() == pricing_country.lower() and cp["is_active"]
        ),
        None,
    )
    if chosen is None and pricing_country != "USA":
        chosen = next(
            (
                cp
                for cp in overrides
                if cp["country"].lower() in ("usa", "united states") and cp["is_active"]
            ),
            None,
        )
    if chosen is None and overrides:
        chosen = next((cp for cp in overrides if cp["is_active"]), overrides[0])

    if chosen is None:
        return DisplayPrice(price=0.0, compare_price=None, country=pricing_country)
    return DisplayPrice(
        price=float(chosen["price"]),
        compare_price=_optional_amount(chosen.get("compare_price")),
        country=chosen["country"],
        currency=chosen.get("currency"),
        symbol=chosen.get("symbol"),
    )
