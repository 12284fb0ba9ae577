"""Cart line management: commands and handler.

Every command is scoped to the acting user's own cart. A line id that does
not belong to that cart is reported as not found.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.ordering.cart import CartItem, delete_lines, find_cart, get_or_create_cart, lines_of

logger = structlog.get_logger(__name__)


@storefront.command(part_of="CartItem")
class AddToCart:
    user_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of="CartItem")
class UpdateCartItem:
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command(part_of="CartItem")
class RemoveCartItem:
    user_id: Identifier(required=True)
    item_id: Identifier(required=True)


@storefront.command(part_of="CartItem")
class ClearCart:
    user_id: Identifier(required=True)


def _owned_line(user_id, item_id) -> CartItem:
    cart = find_cart(user_id)
    repo = current_domain.repository_for(CartItem)
    try:
        line = repo.get(item_id)
    except ObjectNotFoundError:
        line = None
    if cart is None or line is None or str(line.cart_id) != str(cart.id):
        raise ObjectNotFoundError(f"Cart item {item_id} not found")
    return line


def _siblings(line) -> list[CartItem]:
    """Other lines in the same cart holding the same product."""
    return [
        other
        for other in lines_of(line.cart_id)
        if str(other.product_id) == str(line.product_id) and str(other.id) != str(line.id)
    ]


@storefront.command_handler(part_of=CartItem)
class CartItemHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        # Raises ObjectNotFoundError for unknown products
        current_domain.repository_for(Product).get(command.product_id)

        cart = get_or_create_cart(command.user_id)
        repo = current_domain.repository_for(CartItem)
        line = next((li for li in lines_of(cart.id) if str(li.product_id) == str(command.product_id)), None)
        if line is None:
            line = CartItem.create(cart.id, command.product_id, command.quantity)
        else:
            line.increase(command.quantity)
        repo.add(line)

        logger.info(
            "cart.item_added",
            cart_id=str(cart.id),
            product_id=str(command.product_id),
            quantity=line.quantity,
        )
        return str(line.id)

    @handle(UpdateCartItem)
    def update_item(self, command):
        line = _owned_line(command.user_id, command.item_id)
        line.set_quantity(command.quantity)
        # Duplicate lines for the same product collapse into this one
        delete_lines(_siblings(line))
        current_domain.repository_for(CartItem).add(line)

    @handle(RemoveCartItem)
    def remove_item(self, command):
        line = _owned_line(command.user_id, command.item_id)
        removed = delete_lines([line, *_siblings(line)])
        logger.info(
            "cart.item_removed",
            cart_id=str(line.cart_id),
            item_id=str(line.id),
            lines_removed=removed,
        )

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = find_cart(command.user_id)
        if cart is None:
            return
        removed = delete_lines(lines_of(cart.id))
        logger.info("cart.cleared", cart_id=str(cart.id), lines_removed=removed)
