# tests/test_products_api.py
from fastapi.testclient import TestClient
from catalog_api.main import app

client = TestClient(app)
KEY = {"x-api-key": app.state.settings.api_key}


def reset():
    app.state.store.reset()


def test_welcome_banner():
    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert "/api/products" in r.text


def test_list_seed_products():
    reset()
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["totalPages"] == 1
    assert [p["id"] for p in body["products"]] == ["1", "2", "3"]


def test_filter_by_category_is_case_insensitive():
    reset()
    body = client.get("/api/products", params={"category": "ELECTRONICS"}).json()
    assert body["total"] == 2
    assert all(p["category"] == "electronics" for p in body["products"])


def test_search_by_name_substring():
    reset()
    body = client.get("/api/products", params={"search": "coffee"}).json()
    assert body["total"] == 1
    assert body["products"][0]["name"] == "Coffee Maker"


def test_category_and_search_combine():
    reset()
    body = client.get("/api/products", params={"category": "electronics", "search": "phone"}).json()
    assert [p["id"] for p in body["products"]] == ["2"]


def test_pagination_metadata():
    reset()
    body = client.get("/api/products", params={"page": "2", "limit": "2"}).json()
    assert body["total"] == 3
    assert body["page"] == 2
    assert body["totalPages"] == 2
    assert [p["id"] for p in body["products"]] == ["3"]


def test_page_beyond_range_is_empty():
    reset()
    body = client.get("/api/products", params={"page": "9"}).json()
    assert body["products"] == []
    assert body["total"] == 3


def test_negative_page_is_empty_not_wrapped():
    reset()
    body = client.get("/api/products", params={"page": "-1", "limit": "2"}).json()
    assert body["products"] == []
    assert body["page"] == -1


def test_non_numeric_paging_uses_defaults():
    reset()
    body = client.get("/api/products", params={"page": "abc", "limit": "xyz"}).json()
    assert body["page"] == 1
    assert len(body["products"]) == 3


def test_stats_on_seed_data():
    reset()
    r = client.get("/api/products/stats")
    assert r.status_code == 200
    assert r.json() == {"electronics": 2, "kitchen": 1}


def test_get_by_id_and_missing():
    reset()
    r = client.get("/api/products/1")
    assert r.status_code == 200
    assert r.json()["name"] == "Laptop"

    r = client.get("/api/products/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_create_normalizes_and_defaults():
    reset()
    r = client.post("/api/products", json={"name": "Mouse", "price": 20, "category": "Electronics"}, headers=KEY)
    assert r.status_code == 201
    p = r.json()
    assert p["category"] == "electronics"
    assert p["inStock"] is True
    assert p["description"] == ""
    assert p["price"] == 20
    assert len(app.state.store) == 4


def test_create_trims_text_fields():
    reset()
    r = client.post("/api/products", json={
        "name": "  Kettle ", "price": 30.5, "category": "  Kitchen ", "description": " hot ", "inStock": False,
    }, headers=KEY)
    p = r.json()
    assert p["name"] == "Kettle"
    assert p["category"] == "kitchen"
    assert p["description"] == "hot"
    assert p["inStock"] is False


def test_create_ignores_supplied_id():
    reset()
    r = client.post("/api/products", json={"id": "1", "name": "Clone", "price": 5, "category": "misc"}, headers=KEY)
    assert r.status_code == 201
    assert r.json()["id"] != "1"
    assert client.get("/api/products/1").json()["name"] == "Laptop"


def test_create_then_fetch_round_trip():
    reset()
    created = client.post("/api/products", json={
        "name": "Desk Lamp", "price": 25, "category": "home", "description": "LED",
    }, headers=KEY).json()
    fetched = client.get(f"/api/products/{created['id']}").json()
    assert fetched == created


def test_update_preserves_omitted_optional_fields():
    reset()
    r = client.put("/api/products/3", json={"name": "Espresso Maker", "price": 99, "category": "Kitchen"}, headers=KEY)
    assert r.status_code == 200
    p = r.json()
    assert p["id"] == "3"
    assert p["name"] == "Espresso Maker"
    assert p["inStock"] is False
    assert p["description"] == "Programmable coffee maker with timer"
    assert client.get("/api/products/3").json() == p


def test_update_overwrites_supplied_optional_fields():
    reset()
    p = client.put("/api/products/1", json={
        "name": "Laptop", "price": 1100, "category": "electronics", "description": "", "inStock": False,
    }, headers=KEY).json()
    assert p["description"] == ""
    assert p["inStock"] is False
    assert p["price"] == 1100


def test_update_missing_product():
    reset()
    r = client.put("/api/products/404", json={"name": "X", "price": 1, "category": "y"}, headers=KEY)
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_update_validates_before_lookup():
    reset()
    r = client.put("/api/products/404", json={"name": "X", "price": 0, "category": "y"}, headers=KEY)
    assert r.status_code == 400


def test_delete_then_delete_again():
    reset()
    r = client.delete("/api/products/2", headers=KEY)
    assert r.status_code == 204
    assert r.content == b""
    assert client.get("/api/products/2").status_code == 404

    r = client.delete("/api/products/2", headers=KEY)
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}
    assert len(app.state.store) == 2
