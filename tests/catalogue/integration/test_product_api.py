"""Integration tests for /api/products and /api/upload via TestClient."""


def _create(client, headers, **body):
    payload = {"name": "Mouse", "price": 19.99, "category": "Accessories", "brand": "Logi", "images": ["m.webp"]}
    payload.update(body)
    return client.post("/api/products", json=payload, headers=headers)


class TestProductReads:
    def test_list_is_public(self, client, make_product):
        make_product(name="Mouse")
        response = client.get("/api/products")
        assert response.status_code == 200
        data = response.json()
        assert data["total_elements"] == 1
        assert data["total_pages"] == 1
        assert data["content"][0]["images"] == ["mouse.webp"]

    def test_search(self, client, make_product):
        make_product(name="Mouse", price=20.0, category="Accessories")
        make_product(name="Keyboard", price=50.0, category="Accessories")
        response = client.get(
            "/api/products/search",
            params={"category": "Accessories", "min_price": 30, "sort": "price,desc"},
        )
        assert response.status_code == 200
        assert [p["name"] for p in response.json()["content"]] == ["Keyboard"]

    def test_get(self, client, make_product):
        product = make_product(name="Mouse")
        response = client.get(f"/api/products/{product.id}")
        assert response.status_code == 200
        assert response.json()["name"] == "Mouse"

    def test_get_unknown(self, client):
        response = client.get("/api/products/missing")
        assert response.status_code == 404
        assert response.json()["status_code"] == 404


class TestProductWrites:
    def test_create_requires_admin(self, client, shopper, auth_headers):
        assert _create(client, {}).status_code == 401
        assert _create(client, auth_headers(shopper)).status_code == 403

    def test_create(self, client, admin, auth_headers):
        response = _create(client, auth_headers(admin))
        assert response.status_code == 201
        data = response.json()
        assert data["sold_quantity"] == 0
        assert data["images"] == ["m.webp"]

    def test_create_with_negative_price(self, client, admin, auth_headers):
        assert _create(client, auth_headers(admin), price=-5).status_code == 400

    def test_update(self, client, admin, auth_headers, make_product):
        product = make_product(name="Mouse", price=20.0)
        response = client.put(
            f"/api/products/{product.id}",
            json={"price": 22.5, "images": ["x.webp", "y.webp"]},
            headers=auth_headers(admin),
        )
        assert response.status_code == 200
        assert response.json()["price"] == 22.5
        assert response.json()["images"] == ["x.webp", "y.webp"]

    def test_delete(self, client, admin, auth_headers, make_product):
        product = make_product()
        response = client.delete(f"/api/products/{product.id}", headers=auth_headers(admin))
        assert response.status_code == 204
        assert client.get(f"/api/products/{product.id}").status_code == 404


class TestUpload:
    def test_upload_images(self, client, admin, auth_headers):
        response = client.post(
            "/api/upload/img",
            files=[("files", ("a.png", b"\x89PNG....", "image/png")), ("files", ("b.webp", b"RIFF", "image/webp"))],
            headers=auth_headers(admin),
        )
        assert response.status_code == 201
        uploaded = response.json()["uploaded"]
        assert len(uploaded) == 2
        assert uploaded[0].endswith("_a.png")

    def test_upload_rejects_invalid_type(self, client, admin, auth_headers):
        response = client.post(
            "/api/upload/img",
            files=[("files", ("notes.txt", b"hello", "text/plain"))],
            headers=auth_headers(admin),
        )
        assert response.status_code == 400
        assert "notes.txt is not a valid image file" in response.json()["message"]

    def test_upload_without_files(self, client, admin, auth_headers):
        response = client.post("/api/upload/img", headers=auth_headers(admin))
        assert response.status_code == 400

    def test_upload_requires_admin(self, client, shopper, auth_headers):
        response = client.post(
            "/api/upload/img",
            files=[("files", ("a.png", b"\x89PNG", "image/png"))],
            headers=auth_headers(shopper),
        )
        assert response.status_code == 403
