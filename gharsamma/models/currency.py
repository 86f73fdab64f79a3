from __future__ import annotations
from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


def _currency_code(v: str) -> str:
    v = v.strip().upper()
    if not v:
        raise ValueError("currency code is required")
    return v


CurrencyCode = Annotated[str, AfterValidator(_currency_code)]


class RatesOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rates: Dict[str, float]
    symbols: Dict[str, str]
    base_currency: str = Field("NPR", alias="baseCurrency")
    last_updated: datetime = Field(..., alias="lastUpdated")


class ConvertIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: float = Field(..., allow_inf_nan=False)
    from_currency: CurrencyCode = Field(..., alias="from")
    to_currency: CurrencyCode = Field(..., alias="to")


class ConvertedAmount(BaseModel):
    currency: str
    amount: float
    formatted: str


class ConvertOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: ConvertedAmount = Field(..., alias="from")
    to: ConvertedAmount
    exchange_rate: float = Field(..., alias="exchangeRate")


class ProductPriceOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price: float
    compare_price: Optional[float] = Field(None, alias="comparePrice")
    currency: str
    symbol: str
    npr_price: float = Field(..., alias="nprPrice")
    exchange_rate: float = Field(..., alias="exchangeRate")
    price_source: str = Field(..., alias="priceSource")
    npr_source: str = Field(..., alias="nprSource")


class LineItemIn(BaseModel):
    price: float = Field(..., ge=0, allow_inf_nan=False)
    quantity: int = Field(..., ge=0)


class OrderTotalsIn(BaseModel):
    currency: CurrencyCode
    items: List[LineItemIn]


class OrderTotalsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    currency: str
    subtotal: float
    npr_subtotal: float = Field(..., alias="nprSubtotal")
    exchange_rate: float = Field(..., alias="exchangeRate")


class CurrencyRateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    country: str = Field(..., min_length=1)
    currency: CurrencyCode
    symbol: str = Field(..., min_length=1)
    rate_to_npr: float = Field(..., gt=0, alias="rateToNPR", allow_inf_nan=False)
    is_active: bool = Field(True, alias="isActive")


class CurrencyRateUpdateIn(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    model_config = ConfigDict(populate_by_name=True)

    country: Optional[str] = Field(None, min_length=1)
    currency: Optional[CurrencyCode] = None
    symbol: Optional[str] = Field(None, min_length=1)
    rate_to_npr: Optional[float] = Field(None, gt=0, alias="rateToNPR", allow_inf_nan=False)
    is_active: Optional[bool] = Field(None, alias="isActive")


class CurrencyRateOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    country: str
    currency: str
    symbol: str
    rate_to_npr: float = Field(..., alias="rateToNPR")
    is_active: bool = Field(..., alias="isActive")
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")


class CurrencyRatesReplaceIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    currency_rates: List[CurrencyRateIn] = Field(default_factory=list, alias="currencyRates")
    default_currency: Optional[CurrencyCode] = Field(None, alias="defaultCurrency")


class ConfigurationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    currency_rates: List[CurrencyRateOut] = Field(..., alias="currencyRates")
    default_currency: str = Field(..., alias="defaultCurrency")
