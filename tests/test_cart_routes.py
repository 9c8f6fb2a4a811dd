from fastapi.testclient import TestClient

from storefront.database.carts import JsonFileCartStore
from storefront.main import create_app

HEADPHONES = {"id": "1", "name": "Wireless Bluetooth Headphones", "price": 99.99, "quantity": 1}
TSHIRT = {"id": "3", "name": "Organic Cotton T-Shirt", "price": 29.99, "quantity": 2}


def test_get_empty_cart(client):
    response = client.get("/api/cart")

    assert response.status_code == 200
    payload = response.json()
    assert payload["success"] is True
    assert payload["message"] == "Cart retrieved successfully"
    assert payload["data"]["items"] == []
    assert payload["data"]["total"] == 0
    assert payload["data"]["item_count"] == 0
    assert "timestamp" in payload


def test_add_to_cart_merges_same_id(client):
    client.post("/api/cart", json=HEADPHONES)
    response = client.post("/api/cart", json={**HEADPHONES, "quantity": 2})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["items"]) == 1
    assert data["items"][0]["quantity"] == 3
    assert data["items"][0]["line_total"] == round(3 * 99.99, 2)
    assert data["total"] == round(3 * 99.99, 2)


def test_add_to_cart_defaults_quantity_to_one(client):
    body = {key: value for key, value in HEADPHONES.items() if key != "quantity"}

    response = client.post("/api/cart", json=body)

    assert response.status_code == 200
    assert response.json()["data"]["item_count"] == 1


def test_add_to_cart_rejects_invalid_quantity(client):
    for quantity in (0, -3, 101):
        response = client.post("/api/cart", json={**HEADPHONES, "quantity": quantity})

        assert response.status_code == 400
        payload = response.json()
        assert payload["success"] is False
        assert payload["error"] == "Invalid request data"
        fields = [error["field"] for error in payload["details"]["validation_errors"]]
        assert fields == ["quantity"]


def test_add_to_cart_rejects_missing_fields_and_bad_price(client):
    response = client.post("/api/cart", json={"id": "1", "price": -5, "quantity": 1})

    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["details"]["validation_errors"]}
    assert fields == {"name", "price"}


def test_add_to_cart_rejects_merge_over_ceiling(client):
    client.post("/api/cart", json={**HEADPHONES, "quantity": 90})

    response = client.post("/api/cart", json={**HEADPHONES, "quantity": 11})

    assert response.status_code == 400
    assert response.json()["message"] == "Total quantity cannot exceed 100 for a single item"
    assert client.get("/api/cart").json()["data"]["item_count"] == 90


def test_get_cart_item(client):
    client.post("/api/cart", json=TSHIRT)

    response = client.get("/api/cart/3")

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Organic Cotton T-Shirt"


def test_get_missing_cart_item_is_404(client):
    response = client.get("/api/cart/404")

    assert response.status_code == 404
    payload = response.json()
    assert payload["success"] is False
    assert payload["error"] == "Item not found in cart"
    assert payload["details"] == {"id": "404"}


def test_update_cart_item(client):
    client.post("/api/cart", json=HEADPHONES)
    client.post("/api/cart", json=TSHIRT)

    response = client.put("/api/cart/3", json={"quantity": 5})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["item_count"] == 6
    assert data["total"] == round(99.99 + 5 * 29.99, 2)


def test_update_rejects_zero_and_over_ceiling(client):
    client.post("/api/cart", json=HEADPHONES)

    for quantity in (0, -1, 101):
        response = client.put("/api/cart/1", json={"quantity": quantity})
        assert response.status_code == 400

    assert client.get("/api/cart/1").json()["data"]["quantity"] == 1


def test_update_missing_item_is_404(client):
    response = client.put("/api/cart/missing", json={"quantity": 2})

    assert response.status_code == 404


def test_remove_from_cart(client):
    client.post("/api/cart", json=HEADPHONES)
    client.post("/api/cart", json=TSHIRT)

    response = client.delete("/api/cart/1")

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == "Item removed from cart successfully"
    assert [item["id"] for item in payload["data"]["items"]] == ["3"]


def test_remove_missing_item_is_404(client):
    response = client.delete("/api/cart/missing")

    assert response.status_code == 404
    assert response.json()["message"] == "Item not found in cart"


def test_clear_cart(client):
    client.post("/api/cart", json=HEADPHONES)
    client.post("/api/cart", json=TSHIRT)

    response = client.delete("/api/cart")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["items"] == []
    assert data["total"] == 0
    assert data["item_count"] == 0


def test_cart_persists_through_file_store(tmp_path, settings):
    path = tmp_path / "cart.json"
    TestClient(create_app(settings, cart_store=JsonFileCartStore(path))).post("/api/cart", json=TSHIRT)

    reopened = TestClient(create_app(settings, cart_store=JsonFileCartStore(path)))

    assert reopened.get("/api/cart").json()["data"]["item_count"] == 2
