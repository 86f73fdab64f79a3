"""Seeding helpers for the admin-managed currency rate table.

`seed_currency_rates` copies the static exchange rate table into
``currency_rates`` so admins start from the built-in values. Existing rows
are left untouched so this can be safely re-run.
"""

from __future__ import annotations
from pathlib import Path
import sqlite3
from typing import Mapping

from gharsamma.models.constants import (
    BASE_CURRENCY,
    COUNTRY_CURRENCIES,
    CURRENCY_SYMBOLS,
    EXCHANGE_RATES,
)
from .migrate import apply_migrations

# Currencies without a storefront country label.
_EXTRA_COUNTRIES = {"EUR": "Eurozone"}


def _country_for(currency: str) -> str:
    for country, code in COUNTRY_CURRENCIES.items():
        if code == currency:
            return country
    return _EXTRA_COUNTRIES.get(currency, currency)


def seed_currency_rates(
    db_path: Path, rates: Mapping[str, float] | None = None
) -> int:
    """Insert missing rate rows; return how many were added."""
    apply_migrations(db_path)  # ensure tables exist
    source = rates or EXCHANGE_RATES
    added = 0
    with sqlite3.connect(db_path) as conn:
        cur = conn.cursor()
        for currency, rate in source.items():
            if currency == BASE_CURRENCY:
                continue
            cur.execute(
                """
                INSERT OR IGNORE INTO currency_rates (country, currency, symbol, rate_to_npr)
                VALUES (?, ?, ?, ?)
                """,
                (
                    _country_for(currency),
                    currency,
                    CURRENCY_SYMBOLS.get(currency, currency),
                    float(rate),
                ),
            )
            added += cur.rowcount
        conn.commit()
    return added
