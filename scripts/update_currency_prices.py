"""Re-derive currency and symbol on every product price override from its country."""

from gharsamma.core.config import get_settings
from gharsamma.core.logging import init_logging
from gharsamma.db.dal import Database
from gharsamma.db.migrate import apply_migrations
from gharsamma.services.currency_backfill import backfill_currency_price_labels


def run():
    settings = get_settings()
    init_logging(debug=settings.debug)
    apply_migrations(settings.db_path)  # type: ignore[arg-type]
    changed = backfill_currency_price_labels(Database(settings.db_path))
    print(f"Updated {changed} currency price records")


if __name__ == "__main__":
    run()
