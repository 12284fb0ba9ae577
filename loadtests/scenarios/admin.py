"""Administrator load test scenarios.

The admin account must exist before the run:

    python src/manage.py create-admin --email admin@example.com --password secret123

Credentials are read from LOADTEST_ADMIN_EMAIL and LOADTEST_ADMIN_PASSWORD.
"""

import os

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import admin_status, product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import AdminState

ADMIN_EMAIL = os.environ.get("LOADTEST_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.environ.get("LOADTEST_ADMIN_PASSWORD", "secret123")


class CatalogueAndOrdersJourney(SequentialTaskSet):
    """Login -> Create Products (x3) -> Dashboard -> Pending Orders -> Advance Statuses."""

    def on_start(self):
        self.state = AdminState()

    @task
    def login(self):
        with self.client.post(
            "/api/auth/login",
            json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
            catch_response=True,
            name="POST /api/auth/login (admin)",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["access_token"]
            else:
                resp.failure(f"Admin login failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task(3)
    def create_product(self):
        with self.client.post(
            "/api/products",
            json=product_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_ids.append(resp.json()["id"])
            else:
                resp.failure(f"Create product failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def dashboard(self):
        with self.client.get(
            "/api/admin/dashboard",
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/admin/dashboard",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Dashboard failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def pending_orders(self):
        with self.client.get(
            "/api/orders/all",
            params={"status": "PENDING", "size": 20, "sort": "order_date,asc"},
            headers=self.state.headers,
            catch_response=True,
            name="GET /api/orders/all",
        ) as resp:
            if resp.status_code == 200:
                self.state.pending_order_ids = [o["id"] for o in resp.json()["content"]]
            else:
                resp.failure(f"List orders failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def advance_orders(self):
        for order_id in self.state.pending_order_ids[:5]:
            with self.client.put(
                f"/api/orders/{order_id}/status",
                json={"status": admin_status()},
                headers=self.state.headers,
                catch_response=True,
                name="PUT /api/orders/{id}/status",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Status update failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class AdminUser(HttpUser):
    """A small pool of administrators keeping the catalogue stocked."""

    wait_time = between(2, 6)
    weight = 1
    tasks = [CatalogueAndOrdersJourney]
