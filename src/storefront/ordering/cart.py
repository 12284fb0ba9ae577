"""Cart and CartItem aggregates.

A user owns exactly one Cart, created on first access. Each line of the cart
is a CartItem aggregate of its own, referencing the cart by id, so removing a
line is a delete of that record rather than a change to a collection.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.shared.clock import as_utc, utc_now
from storefront.shared.paging import fetch_all

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@storefront.aggregate
class Cart:
    user_id: Identifier(required=True, unique=True)
    created_at: DateTime()

    @classmethod
    def open_for(cls, user_id):
        return cls(user_id=str(user_id), created_at=utc_now())


@storefront.aggregate
class CartItem:
    cart_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)
    added_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, cart_id, product_id, quantity):
        now = utc_now()
        return cls(
            cart_id=str(cart_id),
            product_id=str(product_id),
            quantity=quantity,
            added_at=now,
            updated_at=now,
        )

    def increase(self, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self.quantity += quantity
        self.updated_at = utc_now()

    def set_quantity(self, quantity):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        self.quantity = quantity
        self.updated_at = utc_now()


def find_cart(user_id) -> Cart | None:
    repo = current_domain.repository_for(Cart)
    return repo._dao.query.filter(user_id=str(user_id)).all().first


def get_or_create_cart(user_id) -> Cart:
    """Return the user's cart, creating and persisting it when absent."""
    cart = find_cart(user_id)
    if cart is None:
        cart = Cart.open_for(user_id)
        current_domain.repository_for(Cart).add(cart)
    return cart


def lines_of(cart_id) -> list[CartItem]:
    repo = current_domain.repository_for(CartItem)
    lines = fetch_all(repo._dao.query.filter(cart_id=str(cart_id)))
    return sorted(lines, key=lambda line: as_utc(line.added_at) or _EPOCH)


def delete_lines(lines) -> int:
    repo = current_domain.repository_for(CartItem)
    for line in lines:
        repo._dao.delete(line)
    return len(lines)


def discard_cart(user_id) -> int:
    """Delete a user's cart and its lines. Returns the number of lines removed."""
    cart = find_cart(user_id)
    if cart is None:
        return 0
    removed = delete_lines(lines_of(cart.id))
    current_domain.repository_for(Cart)._dao.delete(cart)
    return removed


def discard_lines_for_product(product_id) -> int:
    repo = current_domain.repository_for(CartItem)
    return delete_lines(fetch_all(repo._dao.query.filter(product_id=str(product_id))))
