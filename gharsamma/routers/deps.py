"""Shared FastAPI dependencies.

Settings come from ``app.state.settings`` so apps built with
``create_app(settings_override=...)`` stay isolated from the cached defaults.
"""

from fastapi import Depends, Request

from gharsamma.core.config import Settings, get_settings
from gharsamma.core.errors import FeatureDisabledError
from gharsamma.db.dal import Database
from gharsamma.services.rates import RateSource, make_rate_source


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_db(settings: Settings = Depends(get_app_settings)) -> Database:
    return Database(settings.db_path)


def get_rate_source(
    settings: Settings = Depends(get_app_settings),
    db: Database = Depends(get_db),
) -> RateSource:
    return make_rate_source(settings.exchange_rate_provider, db)


def require_rate_admin_enabled(settings: Settings = Depends(get_app_settings)) -> bool:
    if not settings.enable_rate_admin:
        raise FeatureDisabledError("rate admin feature disabled")
    return True
