"""Order aggregate with OrderItem entities.

Order lines are snapshots: product name, first image and unit price are
copied at placement time, and the order total is computed once from them.
Later catalogue changes never reach an existing order.
"""

import json
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.ordering.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.shared.clock import utc_now


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError({"status": [f"Unknown order status '{value}'. Expected one of: {allowed}"]}) from None


def line_total(price, quantity) -> float:
    return round(price * quantity, 2)


@storefront.entity(part_of="Order")
class OrderItem:
    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    product_image: String(max_length=500)
    quantity: Integer(required=True, min_value=1)
    price: Float(required=True, min_value=0.0)

    @property
    def subtotal(self) -> float:
        return line_total(self.price, self.quantity)


@storefront.aggregate
class Order:
    user_id: Identifier(required=True)
    status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items: HasMany(OrderItem)
    shipping_address: String(required=True, max_length=500)
    receiver_name: String(required=True, max_length=100)
    receiver_phone: String(required=True, max_length=20)
    total_amount: Float(required=True, min_value=0.0)
    order_date: DateTime()
    updated_at: DateTime()
    updated_by: String(max_length=254)

    @invariant.post
    def total_matches_line_items(self):
        if not self.items:
            return
        expected = round(sum(item.subtotal for item in self.items), 2)
        if abs(expected - (self.total_amount or 0.0)) > 0.005:
            raise ValidationError(
                {"total_amount": [f"Order total {self.total_amount} does not match line items ({expected})"]}
            )

    @classmethod
    def place(cls, user_id, lines, shipping_address, receiver_name, receiver_phone):
        """Create a PENDING order from priced lines.

        Args:
            lines: dicts with product_id, product_name, product_image,
                   quantity and price (the unit price at this moment).
        """
        if not lines:
            raise InvalidOperationError("Cart is empty")

        now = utc_now()
        total = round(sum(line_total(line["price"], line["quantity"]) for line in lines), 2)
        order = cls(
            user_id=str(user_id),
            status=OrderStatus.PENDING.value,
            shipping_address=shipping_address,
            receiver_name=receiver_name,
            receiver_phone=receiver_phone,
            total_amount=total,
            order_date=now,
            updated_at=now,
        )
        with atomic_change(order):
            for line in lines:
                order.add_items(OrderItem(**line))

        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=str(user_id),
                items=json.dumps(
                    [
                        {"product_id": str(line["product_id"]), "quantity": line["quantity"], "price": line["price"]}
                        for line in lines
                    ]
                ),
                item_count=sum(line["quantity"] for line in lines),
                total_amount=total,
                placed_at=now,
            )
        )
        return order

    def cancel(self, actor):
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise InvalidOperationError(f"Only PENDING orders can be cancelled; order is {self.status}")

        self.status = OrderStatus.CANCELLED.value
        self.updated_at = utc_now()
        self.updated_by = actor
        self.raise_(
            OrderCancelled(
                order_id=self.id,
                user_id=self.user_id,
                cancelled_by=actor,
                cancelled_at=self.updated_at,
            )
        )

    def change_status(self, new_status, actor):
        """Set any status. Administrators are not bound by the cancellation rule."""
        target = parse_status(new_status)
        previous = self.status

        self.status = target.value
        self.updated_at = utc_now()
        self.updated_by = actor
        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=previous,
                new_status=target.value,
                changed_by=actor,
                changed_at=self.updated_at,
            )
        )
