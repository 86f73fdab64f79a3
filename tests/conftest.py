import os
import tempfile

# Importing gharsamma.main builds a module-level app; keep its database out of the repo.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="gharsamma-tests-"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from gharsamma.core.config import Settings  # noqa: E402
from gharsamma.db.dal import Database  # noqa: E402
from gharsamma.db.migrate import apply_migrations  # noqa: E402
from gharsamma.main import create_app  # noqa: E402


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "test.sqlite3"
    apply_migrations(path)
    return path


@pytest.fixture
def db(db_path):
    return Database(db_path)


@pytest.fixture
def make_client(tmp_path):
    def _make(**overrides) -> TestClient:
        overrides.setdefault("db_path", tmp_path / "api.sqlite3")
        return TestClient(create_app(settings_override=Settings(**overrides)))

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def make_product(db):
    def _make(name="Singing Bowl", price=None, compare_price=None, overrides=()):
        slug = f"{name.lower().replace(' ', '-')}-{len(db.list_products(limit=200))}"
        product_id = db.create_product(
            name=name, slug=slug, price=price, compare_price=compare_price
        )
        if overrides:
            db.replace_currency_prices(product_id, list(overrides))
        return product_id

    return _make
