"""Country label helpers shared by the catalogue, backfill and migrations."""

from __future__ import annotations

from typing import Optional

from gharsamma.models.constants import (
    COUNTRY_CURRENCIES,
    CURRENCY_SYMBOLS,
    DEFAULT_PRICING_COUNTRY,
)

_PRICING_COUNTRY_ALIASES = {
    "usa": "USA",
    "united states": "USA",
    "united states of america": "USA",
    "canada": "USA",  # USA/Canada share pricing
    "uk": "UK",
    "united kingdom": "UK",
    "great britain": "UK",
    "australia": "Australia",
    "hong kong": "Hong Kong",
    "hk": "Hong Kong",
}


def currency_for_country(country: str) -> Optional[str]:
    """Currency a storefront country is priced in; ``None`` when the country is unmapped."""
    return COUNTRY_CURRENCIES.get(country)


def symbol_for_currency(currency: Optional[str]) -> Optional[str]:
    if not currency:
        return None
    return CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())


def map_country_to_pricing_country(country: Optional[str]) -> str:
    """Map a shopper's free-form country onto one of the priced storefront regions."""
    if not country:
        return DEFAULT_PRICING_COUNTRY
    return _PRICING_COUNTRY_ALIASES.get(country.strip().lower(), DEFAULT_PRICING_COUNTRY)
