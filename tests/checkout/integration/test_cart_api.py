"""Integration tests for Cart API endpoints via TestClient."""

import pytest
from checkout.api.routes import cart_router
from checkout.cart.cart import ShoppingCart
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers

SESSION = {"X-Session-Id": "sess-api-001"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    register_exception_handlers(app)
    return TestClient(app)


def _add_line(client, artifact_id="art-001", value=10000.0, **overrides):
    body = {"artifact_id": artifact_id, "name": "Manunggul Jar", "value": value}
    body.update(overrides)
    response = client.post("/cart/lines", json=body, headers=SESSION)
    assert response.status_code == 201
    return response.json()["cart_id"]


class TestGetCart:
    def test_empty_cart(self, client):
        response = client.get("/cart", headers=SESSION)
        assert response.status_code == 200

        data = response.json()
        assert data["lines"] == []
        assert data["total"] == 0
        assert data["item_count"] == 0
        assert data["step"] == "Cart"
        assert data["shipping"] is None

    def test_session_header_is_required(self, client):
        response = client.get("/cart")
        assert response.status_code == 422

    def test_cart_contents(self, client):
        cart_id = _add_line(client, period="Neolithic", image_url="https://cdn.example.com/jar.jpg")

        data = client.get("/cart", headers=SESSION).json()
        assert data["item_count"] == 1
        assert data["added_artifact_ids"] == ["art-001"]
        line = data["lines"][0]
        assert line["cart_id"] == cart_id
        assert line["period"] == "Neolithic"
        assert line["subtotal"] == 10000.0


class TestCartLineEndpoints:
    def test_add_line(self, client):
        cart_id = _add_line(client)

        cart = current_domain.repository_for(ShoppingCart).get("sess-api-001")
        assert [line.cart_id for line in cart.lines] == [cart_id]

    def test_add_revoked_artifact_returns_400(self, client):
        response = client.post(
            "/cart/lines",
            json={"artifact_id": "art-001", "name": "Jar", "value": 1.0, "revoked": True},
            headers=SESSION,
        )
        assert response.status_code == 400

    def test_add_negative_value_returns_422(self, client):
        response = client.post(
            "/cart/lines",
            json={"artifact_id": "art-001", "name": "Jar", "value": -5},
            headers=SESSION,
        )
        assert response.status_code == 422

    def test_set_quantity(self, client):
        cart_id = _add_line(client, value=10000.0)

        response = client.put(f"/cart/lines/{cart_id}", json={"quantity": 3}, headers=SESSION)
        assert response.status_code == 200
        assert client.get("/cart", headers=SESSION).json()["total"] == 30000.0

    def test_set_quantity_zero_removes_line(self, client):
        cart_id = _add_line(client)
        client.put(f"/cart/lines/{cart_id}", json={"quantity": 0}, headers=SESSION)
        assert client.get("/cart", headers=SESSION).json()["lines"] == []

    def test_remove_line(self, client):
        cart_id = _add_line(client)

        response = client.delete(f"/cart/lines/{cart_id}", headers=SESSION)
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert client.get("/cart", headers=SESSION).json()["item_count"] == 0

    def test_remove_unknown_line_is_ok(self, client):
        response = client.delete("/cart/lines/missing", headers=SESSION)
        assert response.status_code == 200


class TestRestoreEndpoint:
    def test_restore_from_list(self, client):
        response = client.put(
            "/cart/lines",
            json={
                "lines": [
                    {"cartId": "art-001-1", "id": "art-001", "name": "Manunggul Jar", "value": 100, "quantity": 2}
                ]
            },
            headers=SESSION,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["item_count"] == 1
        assert data["total"] == 200.0

    def test_restore_from_corrupt_text(self, client):
        _add_line(client)
        response = client.put("/cart/lines", json={"lines": "{not json"}, headers=SESSION)

        assert response.status_code == 200
        assert response.json()["lines"] == []

    def test_restore_from_non_array(self, client):
        _add_line(client)
        response = client.put("/cart/lines", json={"lines": {"cart": []}}, headers=SESSION)

        assert response.status_code == 200
        assert response.json()["item_count"] == 0
