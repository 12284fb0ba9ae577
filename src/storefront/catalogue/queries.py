"""Product listing, search and lookup."""

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.shared.paging import Page, fetch_all, paginate_items, parse_sort

PRODUCT_SORT_FIELDS = {"name", "price", "views", "sold_quantity", "created_at", "updated_at", "brand", "category"}
DEFAULT_PRODUCT_SORT = "-created_at"


def get_product(product_id: str) -> Product:
    return current_domain.repository_for(Product).get(product_id)


def _sorted(products: list[Product], sort: str | None) -> list[Product]:
    order_by = parse_sort(sort, PRODUCT_SORT_FIELDS, DEFAULT_PRODUCT_SORT)
    key = order_by.lstrip("-")

    def sort_key(product):
        value = getattr(product, key)
        if isinstance(value, str):
            value = value.lower()
        return (value is None, value if value is not None else 0)

    return sorted(products, key=sort_key, reverse=order_by.startswith("-"))


def list_products(page: int = 0, size: int = 10, sort: str | None = None) -> Page:
    products = fetch_all(current_domain.repository_for(Product)._dao.query)
    return paginate_items(_sorted(products, sort), page, size)


def search_products(
    page: int = 0,
    size: int = 10,
    sort: str | None = None,
    category: str | None = None,
    brand: str | None = None,
    name: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
) -> Page:
    """Filter products. Every supplied filter must match.

    ``category`` and ``brand`` match case-insensitively in full, ``name`` as a
    case-insensitive substring; the price bounds are inclusive.
    """
    products = fetch_all(current_domain.repository_for(Product)._dao.query)

    if category:
        products = [p for p in products if (p.category or "").lower() == category.strip().lower()]
    if brand:
        products = [p for p in products if (p.brand or "").lower() == brand.strip().lower()]
    if name:
        needle = name.strip().lower()
        products = [p for p in products if needle in (p.name or "").lower()]
    if min_price is not None:
        products = [p for p in products if p.price >= min_price]
    if max_price is not None:
        products = [p for p in products if p.price <= max_price]

    return paginate_items(_sorted(products, sort), page, size)
