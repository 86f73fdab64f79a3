from __future__ import annotations
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "product"


class ProductIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    slug: Optional[str] = None
    # Deprecated NPR base price; per-country overrides take precedence.
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    compare_price: Optional[float] = Field(
        None, ge=0, alias="comparePrice", allow_inf_nan=False
    )

    @model_validator(mode="after")
    def default_slug(self) -> "ProductIn":
        self.slug = slugify(self.slug or self.name)
        return self


class CurrencyPriceIn(BaseModel):
    """One per-country override. Currency and symbol default from the country."""

    model_config = ConfigDict(populate_by_name=True)

    country: str = Field(..., min_length=1)
    currency: Optional[str] = None
    symbol: Optional[str] = None
    price: float = Field(..., ge=0, allow_inf_nan=False)
    compare_price: Optional[float] = Field(
        None, ge=0, alias="comparePrice", allow_inf_nan=False
    )
    is_active: bool = Field(True, alias="isActive")


class CurrencyPriceOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    country: str
    currency: Optional[str] = None
    symbol: Optional[str] = None
    price: float
    compare_price: Optional[float] = Field(None, alias="comparePrice")
    is_active: bool = Field(..., alias="isActive")


class ProductOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    slug: str
    price: Optional[float] = None
    compare_price: Optional[float] = Field(None, alias="comparePrice")
    currency_prices: List[CurrencyPriceOut] = Field(
        default_factory=list, alias="currencyPrices"
    )
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")


class DisplayPriceOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    price: float
    compare_price: Optional[float] = Field(None, alias="comparePrice")
    country: str
    currency: Optional[str] = None
    symbol: Optional[str] = None
