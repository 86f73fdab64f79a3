"""Smoke script for the currency endpoints.

Sequence:
 1. Create a product with a base NPR price and an Australia override.
 2. Price it for Australia (override) and France (converted base price).
 3. Convert an amount and compute order totals.
 4. Switch to the database rate source and override the USD rate.
"""

import os
import tempfile
from pprint import pprint

from fastapi.testclient import TestClient

from gharsamma.core.config import Settings
from gharsamma.main import create_app


def run():
    output = {}
    with tempfile.TemporaryDirectory() as d:
        client = TestClient(create_app(Settings(db_path=os.path.join(d, "static.db"))))
        product = client.post(
            "/products", json={"name": "Singing Bowl", "price": 1000, "comparePrice": 1200}
        ).json()
        client.put(
            f"/products/{product['id']}/currency-prices",
            json=[{"country": "Australia", "price": 15.0}],
        )
        output["australia"] = client.get(
            f"/currency/product/{product['id']}",
            params={"country": "Australia", "currency": "AUD"},
        ).json()
        output["france"] = client.get(
            f"/currency/product/{product['id']}",
            params={"country": "France", "currency": "EUR"},
        ).json()
        output["convert"] = client.post(
            "/currency/convert", json={"amount": 2500, "from": "NPR", "to": "USD"}
        ).json()
        output["order_totals"] = client.post(
            "/currency/order-totals",
            json={
                "currency": "USD",
                "items": [{"price": 10, "quantity": 2}, {"price": 5, "quantity": 1}],
            },
        ).json()

        db_client = TestClient(
            create_app(
                Settings(
                    db_path=os.path.join(d, "database.db"),
                    exchange_rate_provider="database",
                )
            )
        )
        db_client.post(
            "/configuration/currency-rates",
            json={"country": "USA", "currency": "USD", "symbol": "$", "rateToNPR": 0.008},
        )
        output["database_rates"] = db_client.get("/currency/rates").json()["rates"]

    pprint(output)


if __name__ == "__main__":
    run()
