import sqlite3

import pytest

from gharsamma.core.config import Settings
from gharsamma.db.migrate import CURRENT_SCHEMA_VERSION, apply_migrations
from gharsamma.db.seed import seed_currency_rates
from gharsamma.models.constants import EXCHANGE_RATES
from gharsamma.services.currency_backfill import backfill_currency_price_labels
from gharsamma.services.rates import DatabaseRateSource, StaticRateSource, make_rate_source


def _legacy_db(path):
    conn = sqlite3.connect(path)
    conn.executescript(
        """
        CREATE TABLE products (
            id TEXT PRIMARY KEY, name TEXT NOT NULL, slug TEXT NOT NULL UNIQUE,
            price REAL, compare_price REAL,
            created_at TEXT NOT NULL DEFAULT 'x', updated_at TEXT NOT NULL DEFAULT 'x'
        );
        CREATE TABLE product_currency_prices (
            id INTEGER PRIMARY KEY AUTOINCREMENT, product_id TEXT NOT NULL,
            country TEXT NOT NULL, price REAL NOT NULL, compare_price REAL,
            is_active INTEGER NOT NULL DEFAULT 1, created_at TEXT NOT NULL DEFAULT 'x'
        );
        INSERT INTO products (id, name, slug, price) VALUES ('p1', 'Bowl', 'bowl', 1000);
        INSERT INTO product_currency_prices (product_id, country, price) VALUES ('p1', 'Australia', 15);
        INSERT INTO product_currency_prices (product_id, country, price) VALUES ('p1', 'Germany', 900);
        """
    )
    conn.commit()
    conn.close()


def test_migration_adds_currency_labels(tmp_path):
    path = tmp_path / "legacy.sqlite3"
    _legacy_db(path)
    assert apply_migrations(path) == CURRENT_SCHEMA_VERSION
    conn = sqlite3.connect(path)
    rows = conn.execute(
        "SELECT country, currency, symbol FROM product_currency_prices ORDER BY id"
    ).fetchall()
    version = conn.execute("SELECT value FROM metadata WHERE key='schema_version'").fetchone()
    conn.close()
    assert rows == [("Australia", "AUD", "$"), ("Germany", None, None)]
    assert version == (str(CURRENT_SCHEMA_VERSION),)


def test_migrations_are_idempotent(db_path, db):
    assert apply_migrations(db_path) == CURRENT_SCHEMA_VERSION
    assert db.get_default_currency() == "NPR"


def test_backfill_rewrites_wrong_labels(db, make_product):
    make_product(
        overrides=[
            {"country": "Australia", "currency": "USD", "symbol": "$", "price": 15},
            {"country": "UK", "currency": "GBP", "symbol": "£", "price": 12},
        ]
    )
    assert backfill_currency_price_labels(db) == 1
    labels = [(cp["currency"], cp["symbol"]) for cp in db.list_all_currency_prices()]
    assert labels == [("AUD", "$"), ("GBP", "£")]
    assert backfill_currency_price_labels(db) == 0


def test_backfill_clears_labels_for_unmapped_country(db, make_product):
    make_product(overrides=[{"country": "Germany", "currency": "NPR", "symbol": "NPR", "price": 15}])
    assert backfill_currency_price_labels(db) == 1
    [cp] = db.list_all_currency_prices()
    assert (cp["currency"], cp["symbol"]) == (None, None)
    assert backfill_currency_price_labels(db) == 0


def test_seed_currency_rates(db_path, db):
    assert seed_currency_rates(db_path) == len(EXCHANGE_RATES) - 1
    assert seed_currency_rates(db_path) == 0
    rows = {r["currency"]: r for r in db.list_currency_rates()}
    assert "NPR" not in rows
    assert rows["EUR"]["country"] == "Eurozone"
    assert rows["AUD"]["country"] == "Australia"
    assert rows["JPY"]["rate_to_npr"] == EXCHANGE_RATES["JPY"]


def test_database_rate_source_keeps_npr_anchored(db):
    db.create_currency_rate("Nepal", "NPR", "Rs", 2.0)
    db.create_currency_rate("USA", "USD", "$", 0.008)
    source = DatabaseRateSource(db)
    assert source.get_rates()["NPR"] == 1.0
    assert source.get_rates()["USD"] == 0.008
    assert source.get_symbols()["NPR"] == "Rs"


def test_make_rate_source(db):
    assert isinstance(make_rate_source("static"), StaticRateSource)
    assert make_rate_source("static").get_rates() is EXCHANGE_RATES
    assert isinstance(make_rate_source("database", db), DatabaseRateSource)
    with pytest.raises(ValueError):
        make_rate_source("database")
    with pytest.raises(ValueError):
        make_rate_source("external")


def test_settings_reject_unknown_provider(tmp_path):
    settings = Settings(db_path=tmp_path / "x.sqlite3", exchange_rate_provider="external")
    with pytest.raises(ValueError):
        settings.init_post_load()
