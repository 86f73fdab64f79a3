"""Normalise stored currency/symbol labels on price overrides.

Admins enter overrides by country; the currency and symbol columns are
derived from it. Unmapped countries get NULL labels, which also clears
labels an earlier run guessed for them.
"""

from __future__ import annotations

import logging

from gharsamma.db.dal import Database
from gharsamma.services.country import currency_for_country, symbol_for_currency

logger = logging.getLogger("gharsamma.backfill")


def backfill_currency_price_labels(db: Database) -> int:
    """Rewrite currency/symbol on every override; return how many rows changed."""
    changed = 0
    prices = db.list_all_currency_prices()
    for cp in prices:
        currency = currency_for_country(cp["country"])
        symbol = symbol_for_currency(currency)
        if cp.get("currency") == currency and cp.get("symbol") == symbol:
            continue
        db.set_currency_price_labels(cp["id"], currency, symbol)
        changed += 1
    logger.info("Updated %d of %d currency price records", changed, len(prices))
    return changed
