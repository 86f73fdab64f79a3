"""Pydantic request/response models and static currency tables."""

from .constants import (
    BASE_CURRENCY,
    EXCHANGE_RATES,
    CURRENCY_SYMBOLS,
    COUNTRY_CURRENCIES,
)  # re-export
from .currency import (
    ConvertIn,
    ConvertOut,
    RatesOut,
    ProductPriceOut,
    OrderTotalsIn,
    OrderTotalsOut,
    CurrencyRateIn,
    CurrencyRateOut,
    CurrencyRateUpdateIn,
    CurrencyRatesReplaceIn,
    ConfigurationOut,
)
from .product import ProductIn, ProductOut, CurrencyPriceIn, CurrencyPriceOut, DisplayPriceOut

__all__ = [
    "BASE_CURRENCY",
    "EXCHANGE_RATES",
    "CURRENCY_SYMBOLS",
    "COUNTRY_CURRENCIES",
    "ConvertIn",
    "ConvertOut",
    "RatesOut",
    "ProductPriceOut",
    "OrderTotalsIn",
    "OrderTotalsOut",
    "CurrencyRateIn",
    "CurrencyRateOut",
    "CurrencyRateUpdateIn",
    "CurrencyRatesReplaceIn",
    "ConfigurationOut",
    "ProductIn",
    "ProductOut",
    "CurrencyPriceIn",
    "CurrencyPriceOut",
    "DisplayPriceOut",
]
