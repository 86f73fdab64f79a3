from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from gharsamma.core.errors import BadRequestError, NotFoundError
from gharsamma.db.dal import Database
from gharsamma.models.constants import BASE_CURRENCY
from gharsamma.models.currency import (
    ConvertIn,
    ConvertOut,
    ConvertedAmount,
    OrderTotalsIn,
    OrderTotalsOut,
    ProductPriceOut,
    RatesOut,
)
from gharsamma.routers.deps import get_db, get_rate_source
from gharsamma.services.currency import convert_between, format_price, get_exchange_rate
from gharsamma.services.order_totals import calculate_order_totals
from gharsamma.services.pricing import get_product_price_in_currency
from gharsamma.services.rates import RateSource

"""Currency router: public rate table, conversion, product pricing and order totals.

Endpoints:
    - GET  /currency/rates
    - POST /currency/convert
    - GET  /currency/product/{product_id}?country=&currency=
    - POST /currency/order-totals
"""

router = APIRouter(prefix="/currency", tags=["currency"])


@router.get("/rates", response_model=RatesOut, summary="Supported currencies and NPR rates")
async def get_rates(source: RateSource = Depends(get_rate_source)):
    return RatesOut(
        rates=dict(source.get_rates()),
        symbols=dict(source.get_symbols()),
        base_currency=BASE_CURRENCY,
        last_updated=datetime.now(timezone.utc),
    )


@router.post("/convert", response_model=ConvertOut, summary="Convert an amount between currencies")
async def convert(payload: ConvertIn, source: RateSource = Depends(get_rate_source)):
    rates = source.get_rates()
    symbols = source.get_symbols()
    src, dst = payload.from_currency, payload.to_currency
    converted = convert_between(payload.amount, src, dst, rates)
    return ConvertOut(
        from_=ConvertedAmount(
            currency=src,
            amount=payload.amount,
            formatted=format_price(payload.amount, src, symbols),
        ),
        to=ConvertedAmount(
            currency=dst,
            amount=converted,
            formatted=format_price(converted, dst, symbols),
        ),
        exchange_rate=get_exchange_rate(src, dst, rates),
    )


@router.get(
    "/product/{product_id}",
    response_model=ProductPriceOut,
    response_model_exclude_none=True,
    summary="Price a product for a country and currency",
)
async def product_price(
    product_id: str,
    country: Optional[str] = Query(None, description="Customer country label"),
    currency: Optional[str] = Query(None, description="Desired currency code"),
    db: Database = Depends(get_db),
    source: RateSource = Depends(get_rate_source),
):
    if not country or not country.strip() or not currency or not currency.strip():
        raise BadRequestError("Country and currency are required")
    result = get_product_price_in_currency(
        db,
        product_id,
        country.strip(),
        currency,
        rates=source.get_rates(),
        symbols=source.get_symbols(),
    )
    if result is None:
        raise NotFoundError("Product not found")
    return ProductPriceOut(**asdict(result))


@router.post(
    "/order-totals",
    response_model=OrderTotalsOut,
    summary="Order subtotal in the order currency and in NPR",
)
async def order_totals(payload: OrderTotalsIn, source: RateSource = Depends(get_rate_source)):
    totals = calculate_order_totals(payload.items, payload.currency, source.get_rates())
    return OrderTotalsOut(**asdict(totals))
