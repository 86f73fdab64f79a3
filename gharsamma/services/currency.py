"""NPR-anchored currency conversion.

Every stored price is anchored to NPR, so all conversions go through NPR:
``rates[code]`` is the number of ``code`` units bought by 1 NPR.

Unsupported codes never raise. Conversions return the input amount unchanged
and log a warning, and rate lookups fall back to 1. Callers that need a hard
failure should check :func:`is_supported_currency` first.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from gharsamma.models.constants import BASE_CURRENCY, CURRENCY_SYMBOLS, EXCHANGE_RATES
from gharsamma.services.money import round2

logger = logging.getLogger("gharsamma.currency")


def _normalize(code: str) -> str:
    return code.strip().upper()


def _rate_for(code: str, rates: Optional[Mapping[str, float]]) -> float | None:
    table = EXCHANGE_RATES if rates is None else rates
    rate = table.get(code)
    # A zero rate is as unusable as a missing one.
    return rate or None


def is_supported_currency(code: str, rates: Optional[Mapping[str, float]] = None) -> bool:
    return _rate_for(_normalize(code), rates) is not None


def convert_from_npr(
    npr_amount: float, to_currency: str, rates: Optional[Mapping[str, float]] = None
) -> float:
    """Convert an NPR amount into ``to_currency``, rounded to 2 decimals."""
    code = _normalize(to_currency)
    rate = _rate_for(code, rates)
    if rate is None:
        logger.warning("Exchange rate not found for currency: %s", to_currency)
        return npr_amount
    return round2(npr_amount * rate)


def convert_to_npr(
    amount: float, from_currency: str, rates: Optional[Mapping[str, float]] = None
) -> float:
    """Convert an amount in ``from_currency`` back into NPR, rounded to 2 decimals."""
    code = _normalize(from_currency)
    if code == BASE_CURRENCY:
        return amount
    rate = _rate_for(code, rates)
    if rate is None:
        logger.warning("Exchange rate not found for currency: %s", from_currency)
        return amount
    return round2(amount / rate)


def get_exchange_rate(
    from_currency: str, to_currency: str, rates: Optional[Mapping[str, float]] = None
) -> float:
    """Units of ``to_currency`` per 1 unit of ``from_currency``.

    Pairs without NPR are crossed through NPR. Any missing leg yields 1.
    """
    src = _normalize(from_currency)
    dst = _normalize(to_currency)
    if src == dst:
        return 1.0
    if src == BASE_CURRENCY:
        return _rate_for(dst, rates) or 1.0
    if dst == BASE_CURRENCY:
        rate = _rate_for(src, rates)
        return 1 / rate if rate else 1.0
    src_rate = _rate_for(src, rates)
    dst_rate = _rate_for(dst, rates)
    if not src_rate or not dst_rate:
        return 1.0
    return dst_rate / src_rate


def get_currency_symbol(currency: str, symbols: Optional[Mapping[str, str]] = None) -> str:
    table = CURRENCY_SYMBOLS if symbols is None else symbols
    return table.get(_normalize(currency)) or currency


def format_price(
    amount: float, currency: str, symbols: Optional[Mapping[str, str]] = None
) -> str:
    """Render ``amount`` for display: ``NPR 1,234.50`` or ``$1,234.50``."""
    symbol = get_currency_symbol(currency, symbols)
    formatted = f"{round2(amount):,.2f}"
    if _normalize(currency) == BASE_CURRENCY:
        return f"{symbol} {formatted}"
    return f"{symbol}{formatted}"


def convert_between(
    amount: float,
    from_currency: str,
    to_currency: str,
    rates: Optional[Mapping[str, float]] = None,
) -> float:
    """Convert between any two codes, hopping through NPR when neither side is NPR."""
    src = _normalize(from_currency)
    dst = _normalize(to_currency)
    if src == BASE_CURRENCY:
        return convert_from_npr(amount, dst, rates)
    if dst == BASE_CURRENCY:
        return convert_to_npr(amount, src, rates)
    return convert_from_npr(convert_to_npr(amount, src, rates), dst, rates)
