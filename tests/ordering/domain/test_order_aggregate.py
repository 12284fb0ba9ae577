"""Tests for the Order aggregate and the CartItem aggregate."""

import json

import pytest
from protean.exceptions import InvalidOperationError, ValidationError

from storefront.ordering.cart import CartItem
from storefront.ordering.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.ordering.order import Order, OrderStatus, parse_status


def _lines():
    return [
        {"product_id": "prod-a", "product_name": "A", "product_image": "a.webp", "quantity": 2, "price": 10.0},
        {"product_id": "prod-b", "product_name": "B", "product_image": None, "quantity": 1, "price": 25.0},
    ]


def _order(lines=None):
    return Order.place(
        user_id="user-1",
        lines=_lines() if lines is None else lines,
        shipping_address="1 Main St",
        receiver_name="Jane",
        receiver_phone="0901",
    )


class TestPlace:
    def test_total_is_sum_of_lines(self):
        order = _order()
        assert order.total_amount == 45.0
        assert order.status == OrderStatus.PENDING.value
        assert len(order.items) == 2
        assert order.order_date is not None

    def test_total_is_rounded_to_cents(self):
        lines = [{"product_id": "p", "product_name": "P", "quantity": 3, "price": 0.1}]
        assert _order(lines).total_amount == 0.3

    def test_lines_are_snapshots(self):
        order = _order()
        item = next(i for i in order.items if i.product_id == "prod-a")
        assert item.product_name == "A"
        assert item.product_image == "a.webp"
        assert item.subtotal == 20.0

    def test_empty_lines_rejected(self):
        with pytest.raises(InvalidOperationError):
            _order(lines=[])

    def test_raises_order_placed(self):
        order = _order()
        events = [e for e in order._events if isinstance(e, OrderPlaced)]
        assert len(events) == 1
        assert events[0].item_count == 3
        assert events[0].total_amount == 45.0
        assert {i["product_id"] for i in json.loads(events[0].items)} == {"prod-a", "prod-b"}

    def test_total_must_match_items(self):
        order = _order()
        with pytest.raises(ValidationError) as exc:
            order.total_amount = 99.0
        assert "total_amount" in exc.value.messages


class TestCancel:
    def test_pending_order_is_cancelled(self):
        order = _order()
        order.cancel(actor="jane@example.com")
        assert order.status == OrderStatus.CANCELLED.value
        assert order.updated_by == "jane@example.com"
        assert any(isinstance(e, OrderCancelled) for e in order._events)

    @pytest.mark.parametrize("status", ["CONFIRMED", "SHIPPED", "DELIVERED", "CANCELLED"])
    def test_non_pending_order_cannot_be_cancelled(self, status):
        order = _order()
        order.status = status
        with pytest.raises(InvalidOperationError):
            order.cancel(actor="jane@example.com")
        assert order.status == status


class TestChangeStatus:
    def test_any_transition_is_allowed(self):
        order = _order()
        order.change_status("DELIVERED", actor="admin@example.com")
        order.change_status("pending", actor="admin@example.com")
        assert order.status == OrderStatus.PENDING.value

        events = [e for e in order._events if isinstance(e, OrderStatusChanged)]
        assert [(e.previous_status, e.new_status) for e in events] == [
            ("PENDING", "DELIVERED"),
            ("DELIVERED", "PENDING"),
        ]

    def test_cancelled_order_can_be_reopened_by_admin(self):
        order = _order()
        order.cancel(actor="jane@example.com")
        order.change_status("CONFIRMED", actor="admin@example.com")
        assert order.status == "CONFIRMED"

    def test_unknown_status(self):
        with pytest.raises(ValidationError):
            parse_status("LOST")


class TestCartItem:
    def test_increase_accumulates(self):
        line = CartItem.create("cart-1", "prod-a", 2)
        line.increase(3)
        assert line.quantity == 5

    def test_quantity_must_be_positive(self):
        line = CartItem.create("cart-1", "prod-a", 1)
        with pytest.raises(ValidationError):
            line.set_quantity(0)
        with pytest.raises(ValidationError):
            line.increase(0)
        with pytest.raises(ValidationError):
            CartItem.create("cart-1", "prod-a", 0)
