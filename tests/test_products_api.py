def test_create_and_get_product(client):
    resp = client.post(
        "/products", json={"name": "Pashmina Shawl", "price": 4500, "comparePrice": 5000}
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["slug"] == "pashmina-shawl"
    assert body["price"] == 4500
    assert body["comparePrice"] == 5000
    assert body["currencyPrices"] == []

    fetched = client.get(f"/products/{body['id']}").json()
    assert fetched["name"] == "Pashmina Shawl"


def test_duplicate_slug_conflicts(client):
    client.post("/products", json={"name": "Pashmina Shawl"})
    resp = client.post("/products", json={"name": "Pashmina  Shawl!"})
    assert resp.status_code == 409


def test_list_products(client):
    for name in ("Bowl", "Bell", "Dorje"):
        client.post("/products", json={"name": name, "price": 100})
    names = [p["name"] for p in client.get("/products", params={"limit": 2}).json()]
    assert len(names) == 2


def test_unknown_product(client):
    assert client.get("/products/missing").status_code == 404


def test_currency_prices_derive_currency_and_symbol(client):
    pid = client.post("/products", json={"name": "Khukuri"}).json()["id"]
    resp = client.put(
        f"/products/{pid}/currency-prices",
        json=[
            {"country": "UK", "price": 30},
            {"country": "Germany", "price": 3500},
            {"country": "Australia", "currency": "aud", "symbol": "A$", "price": 55},
        ],
    )
    assert resp.status_code == 200
    labels = [(cp["country"], cp["currency"], cp["symbol"]) for cp in resp.json()]
    assert labels == [
        ("UK", "GBP", "£"),
        ("Germany", None, None),
        ("Australia", "AUD", "A$"),
    ]


def test_currency_prices_replace_previous_list(client):
    pid = client.post("/products", json={"name": "Mala Beads"}).json()["id"]
    client.put(f"/products/{pid}/currency-prices", json=[{"country": "UK", "price": 30}])
    client.put(f"/products/{pid}/currency-prices", json=[{"country": "USA", "price": 40}])
    prices = client.get(f"/products/{pid}").json()["currencyPrices"]
    assert [cp["country"] for cp in prices] == ["USA"]


def test_currency_prices_for_unknown_product(client):
    resp = client.put("/products/missing/currency-prices", json=[{"country": "UK", "price": 1}])
    assert resp.status_code == 404


def test_display_price(client):
    pid = client.post("/products", json={"name": "Tibetan Rug"}).json()["id"]
    client.put(
        f"/products/{pid}/currency-prices",
        json=[{"country": "USA", "price": 200}, {"country": "UK", "price": 160}],
    )
    uk = client.get(f"/products/{pid}/display-price", params={"country": "Great Britain"}).json()
    assert uk["country"] == "UK"
    assert uk["price"] == 160
    assert uk["currency"] == "GBP"

    fallback = client.get(f"/products/{pid}/display-price").json()
    assert fallback["country"] == "USA"
