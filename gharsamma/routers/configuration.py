from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from gharsamma.core.config import Settings
from gharsamma.core.errors import NotFoundError
from gharsamma.db.dal import Database
from gharsamma.models.currency import (
    ConfigurationOut,
    CurrencyRateIn,
    CurrencyRateOut,
    CurrencyRatesReplaceIn,
    CurrencyRateUpdateIn,
)
from gharsamma.routers.deps import get_app_settings, get_db, require_rate_admin_enabled

"""Configuration router for admin-managed currency rates.

Endpoints (guarded by settings.enable_rate_admin):
    - GET    /configuration
    - GET    /configuration/currency-rates
    - POST   /configuration/currency-rates
    - PUT    /configuration/currency-rates          (bulk replace + default currency)
    - PUT    /configuration/currency-rates/{rate_id}
    - DELETE /configuration/currency-rates/{rate_id}

Rows only affect conversions when EXCHANGE_RATE_PROVIDER=database.
"""

router = APIRouter(
    prefix="/configuration",
    tags=["configuration"],
    dependencies=[Depends(require_rate_admin_enabled)],
)
logger = logging.getLogger("gharsamma.configuration")


def _rates_out(db: Database) -> List[CurrencyRateOut]:
    return [CurrencyRateOut(**row) for row in db.list_currency_rates()]


@router.get("", response_model=ConfigurationOut, summary="Currency configuration")
async def get_configuration(
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    return ConfigurationOut(
        currency_rates=_rates_out(db),
        default_currency=db.get_default_currency(fallback=settings.default_currency),
    )


@router.get(
    "/currency-rates", response_model=List[CurrencyRateOut], summary="List currency rates"
)
async def list_currency_rates(db: Database = Depends(get_db)):
    return _rates_out(db)


@router.post(
    "/currency-rates",
    response_model=CurrencyRateOut,
    status_code=201,
    summary="Add a currency rate",
)
async def create_currency_rate(payload: CurrencyRateIn, db: Database = Depends(get_db)):
    rate_id = db.create_currency_rate(
        country=payload.country,
        currency=payload.currency,
        symbol=payload.symbol,
        rate_to_npr=payload.rate_to_npr,
        is_active=payload.is_active,
    )
    logger.info("currency rate %s added (%s)", payload.currency, payload.rate_to_npr)
    row = db.get_currency_rate(rate_id)
    if row is None:
        raise NotFoundError(f"Currency rate {rate_id} not found after insert")
    return CurrencyRateOut(**row)


@router.put(
    "/currency-rates", response_model=ConfigurationOut, summary="Replace all currency rates"
)
async def replace_currency_rates(
    payload: CurrencyRatesReplaceIn,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    db.replace_currency_rates(
        [r.model_dump() for r in payload.currency_rates],
        default_currency=payload.default_currency,
    )
    logger.info("currency rates replaced (%d rows)", len(payload.currency_rates))
    return ConfigurationOut(
        currency_rates=_rates_out(db),
        default_currency=db.get_default_currency(fallback=settings.default_currency),
    )


@router.put(
    "/currency-rates/{rate_id}",
    response_model=CurrencyRateOut,
    summary="Update a currency rate",
)
async def update_currency_rate(
    rate_id: int, payload: CurrencyRateUpdateIn, db: Database = Depends(get_db)
):
    row = db.update_currency_rate(rate_id, **payload.model_dump(exclude_none=True))
    logger.info("currency rate %s updated", rate_id)
    return CurrencyRateOut(**row)


@router.delete("/currency-rates/{rate_id}", summary="Delete a currency rate")
async def delete_currency_rate(rate_id: int, db: Database = Depends(get_db)):
    if not db.delete_currency_rate(rate_id):
        raise NotFoundError(f"Currency rate {rate_id} not found")
    logger.info("currency rate %s deleted", rate_id)
    return {"status": "deleted", "id": rate_id}
