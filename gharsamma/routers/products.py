from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from gharsamma.core.errors import NotFoundError
from gharsamma.db.dal import Database
from gharsamma.models.product import (
    CurrencyPriceIn,
    CurrencyPriceOut,
    DisplayPriceOut,
    ProductIn,
    ProductOut,
)
from gharsamma.routers.deps import get_db
from gharsamma.services.country import currency_for_country, symbol_for_currency
from gharsamma.services.pricing import get_product_display_price

router = APIRouter(prefix="/products", tags=["products"])


# Helpers ----------------------------------------------------------


def _product_out(row: Dict[str, Any]) -> ProductOut:
    return ProductOut(
        **{k: v for k, v in row.items() if k != "currency_prices"},
        currency_prices=[CurrencyPriceOut(**cp) for cp in row.get("currency_prices", [])],
    )


def _load_product(db: Database, product_id: str) -> Dict[str, Any]:
    product = db.get_product_with_prices(product_id)
    if product is None:
        raise NotFoundError(f"Product {product_id} not found")
    return product


def _override_row(payload: CurrencyPriceIn) -> Dict[str, Any]:
    # Unmapped countries keep a NULL currency: the amount is used as entered.
    currency = payload.currency or currency_for_country(payload.country)
    if currency:
        currency = currency.upper()
    return {
        "country": payload.country,
        "currency": currency,
        "symbol": payload.symbol or symbol_for_currency(currency),
        "price": payload.price,
        "compare_price": payload.compare_price,
        "is_active": payload.is_active,
    }


# Routes -----------------------------------------------------------
@router.post("", response_model=ProductOut, status_code=201, summary="Create a product")
async def create_product(payload: ProductIn, db: Database = Depends(get_db)):
    product_id = db.create_product(
        name=payload.name,
        slug=payload.slug,  # type: ignore[arg-type]
        price=payload.price,
        compare_price=payload.compare_price,
    )
    return _product_out(_load_product(db, product_id))


@router.get("", response_model=List[ProductOut], summary="List products")
async def list_products(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Database = Depends(get_db),
):
    rows = db.list_products(limit=limit, offset=offset)
    return [_product_out(_load_product(db, r["id"])) for r in rows]


@router.get("/{product_id}", response_model=ProductOut, summary="Get a product")
async def get_product(product_id: str, db: Database = Depends(get_db)):
    return _product_out(_load_product(db, product_id))


@router.put(
    "/{product_id}/currency-prices",
    response_model=List[CurrencyPriceOut],
    summary="Replace a product's per-country prices",
)
async def replace_currency_prices(
    product_id: str, payload: List[CurrencyPriceIn], db: Database = Depends(get_db)
):
    rows = db.replace_currency_prices(product_id, [_override_row(p) for p in payload])
    return [CurrencyPriceOut(**r) for r in rows]


@router.get(
    "/{product_id}/display-price",
    response_model=DisplayPriceOut,
    summary="Listing price for a shopper's country",
)
async def display_price(
    product_id: str,
    country: Optional[str] = Query(None, description="Shopper country"),
    db: Database = Depends(get_db),
):
    product = _load_product(db, product_id)
    return DisplayPriceOut(**asdict(get_product_display_price(product, country)))
