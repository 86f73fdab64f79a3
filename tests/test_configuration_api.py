import pytest

from gharsamma.models.constants import EXCHANGE_RATES

AUD_RATE = {"country": "Australia", "currency": "aud", "symbol": "A$", "rateToNPR": 0.012}


def test_create_and_list_rates(client):
    resp = client.post("/configuration/currency-rates", json=AUD_RATE)
    assert resp.status_code == 201
    body = resp.json()
    assert body["currency"] == "AUD"
    assert body["rateToNPR"] == 0.012
    assert body["isActive"] is True
    assert body["createdAt"]

    rates = client.get("/configuration/currency-rates").json()
    assert [r["currency"] for r in rates] == ["AUD"]


def test_duplicate_currency_conflicts(client):
    assert client.post("/configuration/currency-rates", json=AUD_RATE).status_code == 201
    resp = client.post("/configuration/currency-rates", json=AUD_RATE)
    assert resp.status_code == 409
    assert resp.json()["error"] == "conflict"


@pytest.mark.parametrize(
    "payload",
    [
        {**AUD_RATE, "rateToNPR": 0},
        {**AUD_RATE, "rateToNPR": -1},
        {k: v for k, v in AUD_RATE.items() if k != "symbol"},
        {k: v for k, v in AUD_RATE.items() if k != "country"},
    ],
)
def test_create_rate_validation(client, payload):
    assert client.post("/configuration/currency-rates", json=payload).status_code == 422


def test_update_rate(client):
    rate_id = client.post("/configuration/currency-rates", json=AUD_RATE).json()["id"]
    resp = client.put(
        f"/configuration/currency-rates/{rate_id}", json={"rateToNPR": 0.0105, "isActive": False}
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["rateToNPR"] == 0.0105
    assert body["isActive"] is False
    assert body["symbol"] == "A$"


def test_update_unknown_rate(client):
    resp = client.put("/configuration/currency-rates/999", json={"rateToNPR": 0.02})
    assert resp.status_code == 404


def test_delete_rate(client):
    rate_id = client.post("/configuration/currency-rates", json=AUD_RATE).json()["id"]
    assert client.delete(f"/configuration/currency-rates/{rate_id}").json() == {
        "status": "deleted",
        "id": rate_id,
    }
    assert client.delete(f"/configuration/currency-rates/{rate_id}").status_code == 404


def test_replace_rates_and_default_currency(client):
    client.post("/configuration/currency-rates", json=AUD_RATE)
    resp = client.put(
        "/configuration/currency-rates",
        json={
            "currencyRates": [
                {"country": "USA", "currency": "USD", "symbol": "$", "rateToNPR": 0.0074},
                {"country": "UK", "currency": "GBP", "symbol": "£", "rateToNPR": 0.0058},
            ],
            "defaultCurrency": "usd",
        },
    )
    assert resp.status_code == 200
    config = client.get("/configuration").json()
    assert config["defaultCurrency"] == "USD"
    assert sorted(r["currency"] for r in config["currencyRates"]) == ["GBP", "USD"]


def test_replace_rates_rejects_duplicates(client):
    rate = {"country": "USA", "currency": "USD", "symbol": "$", "rateToNPR": 0.0074}
    resp = client.put("/configuration/currency-rates", json={"currencyRates": [rate, rate]})
    assert resp.status_code == 409


def test_default_currency_defaults_to_npr(client):
    assert client.get("/configuration").json()["defaultCurrency"] == "NPR"


def test_rate_admin_can_be_disabled(make_client):
    client = make_client(enable_rate_admin=False)
    resp = client.get("/configuration/currency-rates")
    assert resp.status_code == 403
    assert resp.json()["error"] == "forbidden"


def test_database_rate_source_overrides_static_rates(make_client):
    client = make_client(exchange_rate_provider="database")
    client.post(
        "/configuration/currency-rates",
        json={"country": "USA", "currency": "USD", "symbol": "US$", "rateToNPR": 0.008},
    )
    body = client.get("/currency/rates").json()
    assert body["rates"]["USD"] == 0.008
    assert body["symbols"]["USD"] == "US$"
    assert body["rates"]["EUR"] == EXCHANGE_RATES["EUR"]

    converted = client.post(
        "/currency/convert", json={"amount": 1000, "from": "NPR", "to": "USD"}
    ).json()
    assert converted["to"]["amount"] == 8.0
    assert converted["to"]["formatted"] == "US$8.00"


def test_database_rate_source_ignores_inactive_rows(make_client):
    client = make_client(exchange_rate_provider="database")
    client.post(
        "/configuration/currency-rates",
        json={"country": "USA", "currency": "USD", "symbol": "$", "rateToNPR": 0.008, "isActive": False},
    )
    assert client.get("/currency/rates").json()["rates"]["USD"] == EXCHANGE_RATES["USD"]


def test_static_rate_source_ignores_stored_rows(client):
    client.post(
        "/configuration/currency-rates",
        json={"country": "USA", "currency": "USD", "symbol": "$", "rateToNPR": 0.008},
    )
    assert client.get("/currency/rates").json()["rates"]["USD"] == EXCHANGE_RATES["USD"]
