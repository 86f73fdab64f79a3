"""Static currency tables.

Rates are expressed as units of the quote currency per 1 NPR. The tables are
read-only for the life of the process; admin-managed rates live in the
``currency_rates`` table and are layered on top by the database rate source.
"""

from types import MappingProxyType
from typing import FrozenSet, Mapping

BASE_CURRENCY = "NPR"

EXCHANGE_RATES: Mapping[str, float] = MappingProxyType(
    {
        "NPR": 1.0,
        "USD": 0.0075,
        "AUD": 0.011,
        "GBP": 0.0059,
        "CAD": 0.010,
        "EUR": 0.0069,
        "INR": 0.63,
        "CNY": 0.054,
        "JPY": 1.15,
        "SGD": 0.010,
        "AED": 0.027,
    }
)

CURRENCY_SYMBOLS: Mapping[str, str] = MappingProxyType(
    {
        "NPR": "NPR",
        "USD": "$",
        "AUD": "$",
        "GBP": "£",
        "CAD": "$",
        "EUR": "€",
        "INR": "₹",
        "CNY": "¥",
        "JPY": "¥",
        "SGD": "$",
        "AED": "د.إ",
    }
)

# Storefront country labels as entered by admins on currency prices.
COUNTRY_CURRENCIES: Mapping[str, str] = MappingProxyType(
    {
        "Australia": "AUD",
        "USA": "USD",
        "UK": "GBP",
        "Canada": "CAD",
        "India": "INR",
        "China": "CNY",
        "Japan": "JPY",
        "Singapore": "SGD",
        "UAE": "AED",
        "Nepal": "NPR",
        "NPR": "NPR",
    }
)

# Override country labels that denote the NPR price of a product.
NEPAL_PRICE_LABELS: FrozenSet[str] = frozenset({"nepal", "npr"})

DEFAULT_PRICING_COUNTRY = "USA"
