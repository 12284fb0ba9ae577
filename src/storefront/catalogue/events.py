"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    price: Float(required=True)
    category: String(max_length=100)
    brand: String(max_length=100)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, max_length=255)
    price: Float(required=True)
    updated_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductSold:
    """Units of the product were ordered; ``sold_quantity`` is the new running total."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    sold_quantity: Integer(required=True)
