"""Integration tests for /api/cart via TestClient."""


def _add(client, headers, product, quantity=1):
    return client.post("/api/cart/add", json={"product_id": product.id, "quantity": quantity}, headers=headers)


class TestCartApi:
    def test_requires_authentication(self, client):
        assert client.get("/api/cart").status_code == 401

    def test_admin_has_a_cart_too(self, client, admin, auth_headers):
        response = client.get("/api/cart", headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json()["user_id"] == admin.id

    def test_empty_cart(self, client, shopper, auth_headers):
        response = client.get("/api/cart", headers=auth_headers(shopper))
        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["total_price"] == 0
        assert data["total_quantity"] == 0

    def test_add_accumulates(self, client, shopper, auth_headers, make_product):
        headers = auth_headers(shopper)
        product = make_product(name="Mouse", price=12.5)
        _add(client, headers, product, 2)
        response = _add(client, headers, product, 1)

        assert response.status_code == 200
        data = response.json()
        assert len(data["items"]) == 1
        assert data["items"][0]["quantity"] == 3
        assert data["items"][0]["product_name"] == "Mouse"
        assert data["total_price"] == 37.5

    def test_add_unknown_product(self, client, shopper, auth_headers):
        response = client.post(
            "/api/cart/add",
            json={"product_id": "missing", "quantity": 1},
            headers=auth_headers(shopper),
        )
        assert response.status_code == 404

    def test_add_with_zero_quantity(self, client, shopper, auth_headers, make_product):
        response = _add(client, auth_headers(shopper), make_product(), 0)
        assert response.status_code == 400
        assert response.json()["error"] == "Bad Request"

    def test_update_and_remove(self, client, shopper, auth_headers, make_product):
        headers = auth_headers(shopper)
        item_id = _add(client, headers, make_product(price=4.0), 1).json()["items"][0]["id"]

        response = client.put(f"/api/cart/items/{item_id}", json={"quantity": 5}, headers=headers)
        assert response.status_code == 200
        assert response.json()["total_price"] == 20.0

        response = client.delete(f"/api/cart/items/{item_id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_cannot_touch_another_users_line(self, client, shopper, make_user, auth_headers, make_product):
        other = make_user()
        item_id = _add(client, auth_headers(other), make_product(), 1).json()["items"][0]["id"]

        response = client.put(f"/api/cart/items/{item_id}", json={"quantity": 9}, headers=auth_headers(shopper))
        assert response.status_code == 404
        response = client.delete(f"/api/cart/items/{item_id}", headers=auth_headers(shopper))
        assert response.status_code == 404

    def test_clear(self, client, shopper, auth_headers, make_product):
        headers = auth_headers(shopper)
        _add(client, headers, make_product(name="A"), 1)
        _add(client, headers, make_product(name="B"), 2)

        response = client.delete("/api/cart", headers=headers)
        assert response.status_code == 200
        assert response.json()["items"] == []
