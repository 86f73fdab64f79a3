"""Database migration utilities.

Handles schema evolution by applying idempotent migrations keyed by an integer
`schema_version` stored in the metadata table. Each migration upgrades the
SQLite schema in-place while preserving catalogue data.
"""

from __future__ import annotations
from pathlib import Path
import sqlite3
from typing import Optional

from gharsamma.models.constants import BASE_CURRENCY
from gharsamma.services.country import currency_for_country, symbol_for_currency
from . import schema as schema_def
from .schema import init_db
from .dal import DEFAULT_CURRENCY_KEY

CURRENT_SCHEMA_VERSION = 2
SCHEMA_VERSION_KEY = "schema_version"


def _get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,))
        row = cur.fetchone()
        if row:
            return int(row[0])
    except sqlite3.OperationalError:
        # metadata table may not exist yet (first run before init_db)
        return None
    return None


def apply_migrations(db_path: Path) -> int:
    """Apply required migrations and return resulting schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        version = _get_schema_version(conn) or 1
        if version < 2:
            _migrate_to_v2(conn)
            version = 2
        _set_schema_version(conn, version)
        conn.commit()
        return version
    finally:
        conn.close()


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO metadata (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (SCHEMA_VERSION_KEY, str(version)),
    )


def _column_exists(cur: sqlite3.Cursor, table: str, column: str) -> bool:
    cur.execute(f"PRAGMA table_info({table})")
    return any(row[1] == column for row in cur.fetchall())


def _migrate_to_v2(conn: sqlite3.Connection) -> None:
    """Upgrade schema to version 2 (currency + symbol on currency prices).

    Legacy rows only carried a country label; currency and symbol are derived
    from it. Rows for unmapped countries are left NULL.
    """
    cur = conn.cursor()
    try:
        for column in ("currency", "symbol"):
            if not _column_exists(cur, "product_currency_prices", column):
                cur.execute(f"ALTER TABLE product_currency_prices ADD COLUMN {column} TEXT")

        cur.execute(
            "SELECT id, country FROM product_currency_prices "
            "WHERE currency IS NULL OR symbol IS NULL"
        )
        for row_id, country in cur.fetchall():
            currency = currency_for_country(country)
            if currency is None:
                continue
            cur.execute(
                "UPDATE product_currency_prices SET currency=?, symbol=? WHERE id=?",
                (currency, symbol_for_currency(currency), row_id),
            )

        cur.execute("SELECT value FROM metadata WHERE key = ?", (DEFAULT_CURRENCY_KEY,))
        if not cur.fetchone():
            cur.execute(
                f"""
                INSERT INTO metadata (key, value, updated_at)
                VALUES (?, ?, ({schema_def.BASIC_UTC_NOW}))
                """,
                (DEFAULT_CURRENCY_KEY, BASE_CURRENCY),
            )

        conn.commit()
    except Exception:
        conn.rollback()
        raise
