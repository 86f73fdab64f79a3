"""Data Access Layer for the pricing catalogue.

Responsibilities
----------------
- CRUD helpers for products and their per-country currency price overrides.
- CRUD helpers for admin-managed currency rates.
- Metadata accessors (default currency).

Every method opens its own short-lived connection so request handlers stay
independent of each other.
"""

from __future__ import annotations

from pathlib import Path
import sqlite3
import uuid
from typing import Any, Dict, Iterable, List, Optional

from gharsamma.core.errors import ConflictError, NotFoundError
from .schema import BASIC_UTC_NOW

UTC_NOW_SQL = BASIC_UTC_NOW
DEFAULT_CURRENCY_KEY = "default_currency"
_RATE_COLUMNS = ("country", "currency", "symbol", "rate_to_npr", "is_active")


def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    data = dict(row)
    if "is_active" in data:
        data["is_active"] = bool(data["is_active"])
    return data


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    # ------------------------------------------------------------------
    # Products
    def create_product(
        self,
        name: str,
        slug: str,
        price: Optional[float] = None,
        compare_price: Optional[float] = None,
        product_id: Optional[str] = None,
    ) -> str:
        product_id = product_id or uuid.uuid4().hex
        try:
            with self._connect() as conn:
                conn.execute(
                    """
                    INSERT INTO products (id, name, slug, price, compare_price)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (product_id, name, slug, price, compare_price),
                )
        except sqlite3.IntegrityError as e:
            raise ConflictError(f"Product with slug '{slug}' already exists") from e
        return product_id

    def get_product(self, product_id: str) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM products WHERE id = ?", (product_id,))
            row = cur.fetchone()
            return _row_to_dict(row) if row else None

    def list_products(self, limit: int = 50, offset: int = 0) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM products ORDER BY created_at ASC, id ASC LIMIT ? OFFSET ?",
                (limit, offset),
            )
            return [_row_to_dict(r) for r in cur.fetchall()]

    def get_product_with_prices(
        self,
        product_id: str,
        country: Optional[str] = None,
        active_only: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """Return the product row with a ``currency_prices`` list attached.

        ``country`` filters overrides by exact label match.
        """
        product = self.get_product(product_id)
        if product is None:
            return None
        query = "SELECT * FROM product_currency_prices WHERE product_id = ?"
        params: List[Any] = [product_id]
        if country is not None:
            query += " AND country = ?"
            params.append(country)
        if active_only:
            query += " AND is_active = 1"
        query += " ORDER BY id ASC"
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(query, params)
            product["currency_prices"] = [_row_to_dict(r) for r in cur.fetchall()]
        return product

    # ------------------------------------------------------------------
    # Currency price overrides
    def replace_currency_prices(
        self, product_id: str, prices: Iterable[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT 1 FROM products WHERE id = ?", (product_id,))
            if cur.fetchone() is None:
                raise NotFoundError(f"Product {product_id} not found")
            cur.execute(
                "DELETE FROM product_currency_prices WHERE product_id = ?", (product_id,)
            )
            for p in prices:
                cur.execute(
                    """
                    INSERT INTO product_currency_prices
                        (product_id, country, currency, symbol, price, compare_price, is_active)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        product_id,
                        p["country"],
                        p.get("currency"),
                        p.get("symbol"),
                        p["price"],
                        p.get("compare_price"),
                        1 if p.get("is_active", True) else 0,
                    ),
                )
            cur.execute(
                f"UPDATE products SET updated_at = ({UTC_NOW_SQL}) WHERE id = ?",
                (product_id,),
            )
            cur.execute(
                "SELECT * FROM product_currency_prices WHERE product_id = ? ORDER BY id ASC",
                (product_id,),
            )
            return [_row_to_dict(r) for r in cur.fetchall()]

    def list_all_currency_prices(self) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM product_currency_prices ORDER BY id ASC")
            return [_row_to_dict(r) for r in cur.fetchall()]

    def set_currency_price_labels(
        self, price_id: int, currency: Optional[str], symbol: Optional[str]
    ) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE product_currency_prices SET currency = ?, symbol = ? WHERE id = ?",
                (currency, symbol, price_id),
            )

    # ------------------------------------------------------------------
    # Currency rates
    def list_currency_rates(self, active_only: bool = False) -> List[Dict[str, Any]]:
        query = "SELECT * FROM currency_rates"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY created_at ASC, id ASC"
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(query)
            return [_row_to_dict(r) for r in cur.fetchall()]

    def get_currency_rate(self, rate_id: int) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM currency_rates WHERE id = ?", (rate_id,))
            row = cur.fetchone()
            return _row_to_dict(row) if row else None

    def create_currency_rate(
        self,
        country: str,
        currency: str,
        symbol: str,
        rate_to_npr: float,
        is_active: bool = True,
    ) -> int:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT id FROM currency_rates WHERE currency = ?", (currency,))
            if cur.fetchone():
                raise ConflictError("Currency rate already exists for this country/currency")
            cur.execute(
                """
                INSERT INTO currency_rates (country, currency, symbol, rate_to_npr, is_active)
                VALUES (?, ?, ?, ?, ?)
                """,
                (country, currency, symbol, rate_to_npr, 1 if is_active else 0),
            )
            return int(cur.lastrowid)

    def update_currency_rate(self, rate_id: int, **fields: Any) -> Dict[str, Any]:
        updates = {k: v for k, v in fields.items() if k in _RATE_COLUMNS and v is not None}
        if "is_active" in updates:
            updates["is_active"] = 1 if updates["is_active"] else 0
        with self._connect() as conn:
            cur = conn.cursor()
            if updates:
                assignments = ", ".join(f"{col} = ?" for col in updates)
                try:
                    cur.execute(
                        f"UPDATE currency_rates SET {assignments}, updated_at = ({UTC_NOW_SQL}) "
                        "WHERE id = ?",
                        (*updates.values(), rate_id),
                    )
                except sqlite3.IntegrityError as e:
                    raise ConflictError("Currency rate already exists for this currency") from e
            cur.execute("SELECT * FROM currency_rates WHERE id = ?", (rate_id,))
            row = cur.fetchone()
            if row is None:
                raise NotFoundError(f"Currency rate {rate_id} not found")
            return _row_to_dict(row)

    def delete_currency_rate(self, rate_id: int) -> bool:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM currency_rates WHERE id = ?", (rate_id,))
            return cur.rowcount > 0

    def replace_currency_rates(
        self, rates: Iterable[Dict[str, Any]], default_currency: Optional[str] = None
    ) -> None:
        """Swap the whole rate table (and optionally the default currency) atomically."""
        try:
            with self._connect() as conn:
                cur = conn.cursor()
                cur.execute("DELETE FROM currency_rates")
                for r in rates:
                    cur.execute(
                        """
                        INSERT INTO currency_rates (country, currency, symbol, rate_to_npr, is_active)
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        (
                            r["country"],
                            r["currency"],
                            r["symbol"],
                            r["rate_to_npr"],
                            1 if r.get("is_active", True) else 0,
                        ),
                    )
                if default_currency:
                    self._set_metadata(cur, DEFAULT_CURRENCY_KEY, default_currency)
        except sqlite3.IntegrityError as e:
            raise ConflictError("Duplicate currency in rate list") from e

    # ------------------------------------------------------------------
    # Metadata
    def _set_metadata(self, cur: sqlite3.Cursor, key: str, value: str) -> None:
        cur.execute(
            f"""
            INSERT INTO metadata (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = ({UTC_NOW_SQL})
            """,
            (key, value),
        )

    def get_default_currency(self, fallback: str = "NPR") -> str:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT value FROM metadata WHERE key = ?", (DEFAULT_CURRENCY_KEY,))
            row = cur.fetchone()
            return row[0] if row else fallback
