"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state. State tracks ids and
tokens returned by earlier steps so follow-up requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a single simulated shopper from registration to checkout."""

    email: str | None = None
    password: str | None = None
    name: str | None = None
    token: str | None = None
    product_ids: list[str] = field(default_factory=list)
    cart_item_ids: list[str] = field(default_factory=list)
    order_id: str | None = None

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


@dataclass
class AdminState:
    """Tracks an administrator session managing the catalogue and orders."""

    token: str | None = None
    product_ids: list[str] = field(default_factory=list)
    pending_order_ids: list[str] = field(default_factory=list)

    @property
    def headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}
