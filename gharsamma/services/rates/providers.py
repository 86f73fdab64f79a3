from __future__ import annotations

"""Concrete rate sources and factory.

'static' serves the built-in table. 'database' overlays active admin-managed
rows from ``currency_rates`` on the built-in table, so codes without an
active row keep their static rate.
"""
import logging
from typing import TYPE_CHECKING, Dict, Mapping, Optional
from types import MappingProxyType

from gharsamma.models.constants import BASE_CURRENCY, CURRENCY_SYMBOLS, EXCHANGE_RATES
from .base import RateSource

if TYPE_CHECKING:  # pragma: no cover
    from gharsamma.db.dal import Database

logger = logging.getLogger("gharsamma.rates")


class StaticRateSource(RateSource):
    def get_rates(self) -> Mapping[str, float]:  # type: ignore[override]
        return EXCHANGE_RATES

    def get_symbols(self) -> Mapping[str, str]:  # type: ignore[override]
        return CURRENCY_SYMBOLS


class DatabaseRateSource(RateSource):
    """Static table with active ``currency_rates`` rows layered on top.

    Rows are read once per instance; build one per request.
    """

    def __init__(self, db: "Database"):
        self._db = db
        self._rates: Optional[Mapping[str, float]] = None
        self._symbols: Optional[Mapping[str, str]] = None

    def _load(self) -> None:
        rates: Dict[str, float] = dict(EXCHANGE_RATES)
        symbols: Dict[str, str] = dict(CURRENCY_SYMBOLS)
        for row in self._db.list_currency_rates(active_only=True):
            code = row["currency"].upper()
            if code == BASE_CURRENCY:
                # NPR is the anchor; a stored row can only relabel it.
                symbols[code] = row["symbol"]
                continue
            rates[code] = float(row["rate_to_npr"])
            symbols[code] = row["symbol"]
        logger.debug("loaded %d rates from database overlay", len(rates))
        self._rates = MappingProxyType(rates)
        self._symbols = MappingProxyType(symbols)

    def get_rates(self) -> Mapping[str, float]:  # type: ignore[override]
        if self._rates is None:
            self._load()
        return self._rates  # type: ignore[return-value]

    def get_symbols(self) -> Mapping[str, str]:  # type: ignore[override]
        if self._symbols is None:
            self._load()
        return self._symbols  # type: ignore[return-value]


_SOURCE_REGISTRY = {
    "static": StaticRateSource,
    "database": DatabaseRateSource,
}


def make_rate_source(kind: str, db: "Database" | None = None) -> RateSource:
    cls = _SOURCE_REGISTRY.get(kind)
    if not cls:
        raise ValueError(f"Unknown rate source kind '{kind}'")
    if cls is DatabaseRateSource:
        if db is None:
            raise ValueError("database rate source requires a Database")
        return DatabaseRateSource(db)
    return cls()
