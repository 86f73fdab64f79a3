import logging

import pytest

from gharsamma.models.constants import CURRENCY_SYMBOLS, EXCHANGE_RATES
from gharsamma.services.currency import (
    convert_between,
    convert_from_npr,
    convert_to_npr,
    format_price,
    get_currency_symbol,
    get_exchange_rate,
    is_supported_currency,
)


@pytest.mark.parametrize("currency", sorted(EXCHANGE_RATES))
@pytest.mark.parametrize("amount", [100, 1000, 2500, 12345.67])
def test_round_trip_is_close(currency, amount):
    rate = EXCHANGE_RATES[currency]
    back = convert_to_npr(convert_from_npr(amount, currency), currency)
    # Rounding the foreign amount to cents loses up to half a cent, scaled back by 1/rate.
    assert back == pytest.approx(amount, abs=0.005 / rate + 0.01)


def test_convert_from_npr_rounds_to_cents():
    assert convert_from_npr(1000, "EUR") == 6.9
    assert convert_from_npr(2500, "USD") == 18.75
    assert convert_from_npr(1, "USD") == 0.01  # 0.0075 rounds half-up


def test_convert_from_npr_is_case_insensitive():
    assert convert_from_npr(1000, "usd") == convert_from_npr(1000, "USD")


@pytest.mark.parametrize("amount", [0, 1, 99.99, 1234567.89])
def test_convert_to_npr_passthrough(amount):
    assert convert_to_npr(amount, "NPR") == amount


def test_convert_to_npr_inverts_rate():
    assert convert_to_npr(25, "USD") == 3333.33


def test_unsupported_currency_returns_amount_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="gharsamma.currency"):
        assert convert_from_npr(100, "XYZ") == 100
        assert convert_to_npr(100, "XYZ") == 100
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert "XYZ" in warnings[0].getMessage()


def test_zero_rate_is_treated_as_unsupported():
    rates = {"NPR": 1.0, "USD": 0.0}
    assert convert_from_npr(100, "USD", rates) == 100
    assert get_exchange_rate("NPR", "USD", rates) == 1.0
    assert not is_supported_currency("USD", rates)


@pytest.mark.parametrize("code", list(EXCHANGE_RATES) + ["XYZ", "ABC"])
def test_exchange_rate_identity(code):
    assert get_exchange_rate(code, code) == 1


def test_exchange_rate_direct_and_inverse():
    assert get_exchange_rate("NPR", "USD") == EXCHANGE_RATES["USD"]
    assert get_exchange_rate("USD", "NPR") == pytest.approx(1 / EXCHANGE_RATES["USD"])


def test_cross_rate():
    assert get_exchange_rate("USD", "AUD") == EXCHANGE_RATES["AUD"] / EXCHANGE_RATES["USD"]


def test_exchange_rate_missing_leg_defaults_to_one():
    assert get_exchange_rate("NPR", "XYZ") == 1
    assert get_exchange_rate("XYZ", "NPR") == 1
    assert get_exchange_rate("USD", "XYZ") == 1
    assert get_exchange_rate("XYZ", "ABC") == 1


def test_format_price():
    assert format_price(1234.5, "USD") == "$1,234.50"
    assert format_price(1234.5, "NPR") == "NPR 1,234.50"
    assert format_price(1234567.891, "EUR") == "€1,234,567.89"
    assert format_price(0, "GBP") == "£0.00"


def test_format_price_unknown_currency_uses_code():
    assert format_price(10, "XYZ") == "XYZ10.00"


def test_currency_symbol_lookup():
    assert get_currency_symbol("inr") == CURRENCY_SYMBOLS["INR"]
    assert get_currency_symbol("XYZ") == "XYZ"
    assert get_currency_symbol("USD", {"USD": "US$"}) == "US$"


def test_convert_between_goes_through_npr():
    expected = convert_from_npr(convert_to_npr(10, "USD"), "AUD")
    assert convert_between(10, "USD", "AUD") == expected
    assert convert_between(2500, "NPR", "USD") == 18.75
    assert convert_between(10, "USD", "NPR") == 1333.33


def test_injected_rates_take_precedence():
    rates = {"NPR": 1.0, "USD": 0.01}
    assert convert_from_npr(1000, "USD", rates) == 10.0
    assert get_exchange_rate("USD", "NPR", rates) == pytest.approx(100.0)
