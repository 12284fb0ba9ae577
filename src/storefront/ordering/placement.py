"""Order placement: converts the user's cart into an order.

Runs in a single unit of work: read the cart lines, snapshot each product
into an order line, persist the order, bump each product's sold quantity and
delete the consumed cart lines. Any failure rolls the whole thing back.
"""

import structlog
from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.ordering.cart import delete_lines, find_cart, lines_of
from storefront.ordering.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id: Identifier(required=True)
    shipping_address: String(required=True, max_length=500)
    receiver_name: String(required=True, max_length=100)
    receiver_phone: String(required=True, max_length=20)


def merge_quantities(lines) -> dict[str, int]:
    """Sum quantities per product, preserving first-seen order."""
    merged: dict[str, int] = {}
    for line in lines:
        key = str(line.product_id)
        merged[key] = merged.get(key, 0) + line.quantity
    return merged


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = find_cart(command.user_id)
        cart_lines = lines_of(cart.id) if cart is not None else []
        if not cart_lines:
            raise InvalidOperationError("Cart is empty")

        product_repo = current_domain.repository_for(Product)
        products = {}
        order_lines = []
        for product_id, quantity in merge_quantities(cart_lines).items():
            product = product_repo.get(product_id)
            products[product_id] = (product, quantity)
            order_lines.append(
                {
                    "product_id": product_id,
                    "product_name": product.name,
                    "product_image": product.primary_image,
                    "quantity": quantity,
                    "price": product.price,
                }
            )

        order = Order.place(
            user_id=command.user_id,
            lines=order_lines,
            shipping_address=command.shipping_address,
            receiver_name=command.receiver_name,
            receiver_phone=command.receiver_phone,
        )
        current_domain.repository_for(Order).add(order)

        for product, quantity in products.values():
            product.record_sale(quantity)
            product_repo.add(product)

        delete_lines(cart_lines)

        logger.info(
            "order.placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total_amount=order.total_amount,
            line_count=len(order_lines),
        )
        return str(order.id)
