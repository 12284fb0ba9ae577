"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was converted into an order."""

    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    items: Text(required=True)  # JSON: list of {product_id, quantity, price}
    item_count: Integer(required=True)
    total_amount: Float(required=True)
    placed_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    __version__ = 1

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    cancelled_by: String(max_length=254)
    cancelled_at: DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An administrator set the order status."""

    __version__ = 1

    order_id: Identifier(required=True)
    previous_status: String(required=True, max_length=20)
    new_status: String(required=True, max_length=20)
    changed_by: String(max_length=254)
    changed_at: DateTime(required=True)
