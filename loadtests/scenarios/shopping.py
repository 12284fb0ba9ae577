"""Shopper load test scenarios.

Stateful SequentialTaskSet journeys for anonymous browsing and for a
shopper who registers, fills a cart and checks out. Steps execute in
order and each depends on the previous step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import registration_data, search_params, shipping_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class BrowseJourney(SequentialTaskSet):
    """List products -> Search -> View a product. No authentication."""

    def on_start(self):
        self.product_ids = []

    @task
    def list_products(self):
        with self.client.get(
            "/api/products",
            params={"page": 0, "size": 20, "sort": "created_at,desc"},
            catch_response=True,
            name="GET /api/products",
        ) as resp:
            if resp.status_code == 200:
                self.product_ids = [p["id"] for p in resp.json()["content"]]
            else:
                resp.failure(f"List products failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def search(self):
        with self.client.get(
            "/api/products/search",
            params=search_params(),
            catch_response=True,
            name="GET /api/products/search",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Search failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def view_product(self):
        if not self.product_ids:
            self.interrupt()
            return
        with self.client.get(
            f"/api/products/{random.choice(self.product_ids)}",
            catch_response=True,
            name="GET /api/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"View product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutJourney(SequentialTaskSet):
    """Register -> Login -> Browse -> Add to Cart (x2) -> Update Line -> Place Order -> View Orders.

    Each checkout writes one Order, bumps sold quantities and empties the cart.
    """

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        payload = registration_data()
        with self.client.post(
            "/api/auth/register",
            json=payload,
            catch_response=True,
            name="POST /api/auth/register",
        ) as resp:
            if resp.status_code == 201:
                self.state.email = payload["email"]
                self.state.password = payload["password"]
                self.state.name = payload["name"]
            else:
                resp.failure(f"Registration failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def login(self):
        with self.client.post(
            "/api/auth/login",
            json={"email": self.state.email, "password": self.state.password},
            catch_response=True,
            name="POST /api/auth/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["access_token"]
            else:
                resp.failure(f"Login failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        with self.client.get(
            "/api/products",
            params={"page": 0, "size": 50},
            catch_response=True,
            name="GET /api/products",
        ) as resp:
            if resp.status_code == 200 and resp.json()["content"]:
                self.state.product_ids = [p["id"] for p in resp.json()["content"]]
            else:
                resp.failure("No products to buy; seed the catalogue with AdminUser first")
                self.interrupt()

    def _add(self, name):
        payload = {"product_id": random.choice(self.state.product_ids), "quantity": random.randint(1, 3)}
        with self.client.post(
            "/api/cart/add",
            json=payload,
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/cart/add",
        ) as resp:
            if resp.status_code == 200:
                self.state.cart_item_ids = [line["id"] for line in resp.json()["items"]]
            else:
                resp.failure(f"{name} failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def add_first_item(self):
        self._add("Add to cart")

    @task
    def add_second_item(self):
        self._add("Add second item")

    @task
    def update_line(self):
        if not self.state.cart_item_ids:
            return
        with self.client.put(
            f"/api/cart/items/{self.state.cart_item_ids[0]}",
            json={"quantity": random.randint(1, 5)},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/cart/items/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update cart line failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def place_order(self):
        with self.client.post(
            "/api/orders",
            json=shipping_data(self.state.name),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_id = resp.json()["id"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def my_orders(self):
        with self.client.get(
            "/api/orders",
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/orders",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def maybe_cancel(self):
        if random.random() >= 0.2:
            return
        with self.client.put(
            f"/api/orders/{self.state.order_id}/cancel",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/orders/{id}/cancel",
        ) as resp:
            # An admin may have moved the order on already
            if resp.status_code not in (200, 409):
                resp.failure(f"Cancel order failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Browsing-heavy shopper traffic with occasional checkouts."""

    wait_time = between(1, 4)
    tasks = {BrowseJourney: 4, CheckoutJourney: 1}
