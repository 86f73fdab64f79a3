"""Database schema DDL definitions and initialization utilities.

Tables:
  - products: catalogue entries carrying the deprecated NPR base price
  - product_currency_prices: per-country price overrides for a product
  - currency_rates: admin-managed NPR-relative exchange rates
  - metadata: key/value store (default currency, schema version)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

PRODUCTS_DDL = f"""
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    slug TEXT NOT NULL UNIQUE,
    price REAL, -- deprecated NPR base price
    compare_price REAL,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

PRODUCT_CURRENCY_PRICES_DDL = f"""
CREATE TABLE IF NOT EXISTS product_currency_prices (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id TEXT NOT NULL,
    country TEXT NOT NULL,
    currency TEXT,
    symbol TEXT,
    price REAL NOT NULL,
    compare_price REAL,
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    FOREIGN KEY (product_id) REFERENCES products(id) ON DELETE CASCADE
);
"""

CURRENCY_RATES_DDL = f"""
CREATE TABLE IF NOT EXISTS currency_rates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    country TEXT NOT NULL,
    currency TEXT NOT NULL UNIQUE,
    symbol TEXT NOT NULL,
    rate_to_npr REAL NOT NULL CHECK (rate_to_npr > 0),
    is_active INTEGER NOT NULL DEFAULT 1,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

CURRENCY_PRICES_PRODUCT_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_currency_prices_product "
    "ON product_currency_prices(product_id, country);"
)

DDL_ORDER: Sequence[str] = (
    PRODUCTS_DDL,
    PRODUCT_CURRENCY_PRICES_DDL,
    CURRENCY_RATES_DDL,
    METADATA_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        cur.execute(CURRENCY_PRICES_PRODUCT_INDEX_DDL)
        conn.commit()
    finally:
        conn.close()
