"""Seed the admin-managed currency rate table from the built-in rates.

Safe to re-run: existing rows are kept as-is.
"""

from gharsamma.core.config import get_settings
from gharsamma.core.logging import init_logging
from gharsamma.db.seed import seed_currency_rates


def run():
    settings = get_settings()
    init_logging(debug=settings.debug)
    added = seed_currency_rates(settings.db_path)  # type: ignore[arg-type]
    print(f"Seeded {added} currency rate rows into {settings.db_path}")


if __name__ == "__main__":
    run()
