"""Read-side views over carts and orders."""

from dataclasses import dataclass, field
from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.ordering.cart import get_or_create_cart, lines_of
from storefront.ordering.order import Order, line_total, parse_status
from storefront.shared.clock import as_utc
from storefront.shared.paging import Page, fetch_all, paginate_items, parse_sort

ORDER_SORT_FIELDS = {"order_date", "total_amount", "status", "updated_at"}
DEFAULT_ORDER_SORT = "-order_date"


@dataclass
class CartLineView:
    id: str
    product_id: str
    product_name: str
    product_image: str | None
    price: float
    quantity: int

    @property
    def subtotal(self) -> float:
        return line_total(self.price, self.quantity)


@dataclass
class CartView:
    id: str
    user_id: str
    items: list[CartLineView] = field(default_factory=list)

    @property
    def total_price(self) -> float:
        return round(sum(item.subtotal for item in self.items), 2)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)


def cart_view(user_id) -> CartView:
    """The user's cart priced at current product prices.

    Duplicate lines for one product are shown as a single line carrying the
    combined quantity and the id of the first line. Updating or removing that
    id acts on every line for the product.
    """
    cart = get_or_create_cart(user_id)
    product_repo = current_domain.repository_for(Product)

    merged: dict[str, CartLineView] = {}
    for line in lines_of(cart.id):
        key = str(line.product_id)
        if key in merged:
            merged[key].quantity += line.quantity
            continue
        try:
            product = product_repo.get(key)
        except ObjectNotFoundError:
            continue  # Product deleted after the line was added
        merged[key] = CartLineView(
            id=str(line.id),
            product_id=key,
            product_name=product.name,
            product_image=product.primary_image,
            price=product.price,
            quantity=line.quantity,
        )
    return CartView(id=str(cart.id), user_id=str(cart.user_id), items=list(merged.values()))


def _sorted_orders(orders, sort):
    order_by = parse_sort(sort, ORDER_SORT_FIELDS, DEFAULT_ORDER_SORT)
    key = order_by.lstrip("-")

    def sort_key(order):
        value = getattr(order, key)
        if isinstance(value, datetime):
            value = as_utc(value)
        return (value is None, value if value is not None else 0)

    return sorted(orders, key=sort_key, reverse=order_by.startswith("-"))


def orders_of_user(user_id, page: int = 0, size: int = 10, sort: str | None = None) -> Page:
    repo = current_domain.repository_for(Order)
    orders = fetch_all(repo._dao.query.filter(user_id=str(user_id)))
    return paginate_items(_sorted_orders(orders, sort), page, size)


def get_order_for(order_id, user_id, is_admin: bool) -> Order:
    """Load an order visible to the caller. Other users' orders are reported as not found."""
    order = current_domain.repository_for(Order).get(order_id)
    if not is_admin and str(order.user_id) != str(user_id):
        raise ObjectNotFoundError(f"Order {order_id} not found")
    return order


def all_orders(
    page: int = 0,
    size: int = 10,
    sort: str | None = None,
    status: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    search: str | None = None,
) -> Page:
    """Administrative order listing.

    ``start_date`` and ``end_date`` bound ``order_date`` inclusively; naive
    values are taken as UTC. ``search`` matches a case-insensitive substring
    of the receiver name, receiver phone or order id.
    """
    queryset = current_domain.repository_for(Order)._dao.query
    if status:
        queryset = queryset.filter(status=parse_status(status).value)
    orders = fetch_all(queryset)

    start, end = as_utc(start_date), as_utc(end_date)
    if start is not None:
        orders = [o for o in orders if o.order_date and as_utc(o.order_date) >= start]
    if end is not None:
        orders = [o for o in orders if o.order_date and as_utc(o.order_date) <= end]
    if search:
        needle = search.strip().lower()
        orders = [
            o
            for o in orders
            if needle in (o.receiver_name or "").lower()
            or needle in (o.receiver_phone or "").lower()
            or needle in str(o.id).lower()
        ]

    return paginate_items(_sorted_orders(orders, sort), page, size)
