"""Tests for the Product aggregate."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.events import ProductCreated, ProductSold, ProductUpdated
from storefront.catalogue.product import Product


def _product(**overrides):
    kwargs = {"name": "Mouse", "price": 19.99, "image_urls": ["a.webp", "b.webp"]}
    kwargs.update(overrides)
    return Product.create(**kwargs)


class TestCreate:
    def test_defaults(self):
        product = _product()
        assert product.views == 0
        assert product.sold_quantity == 0
        assert product.created_at is not None

    def test_images_keep_order(self):
        product = _product()
        assert product.image_urls == ["a.webp", "b.webp"]
        assert product.primary_image == "a.webp"

    def test_without_images(self):
        product = _product(image_urls=None)
        assert product.image_urls == []
        assert product.primary_image is None

    def test_raises_product_created(self):
        product = _product(category="Accessories")
        events = [e for e in product._events if isinstance(e, ProductCreated)]
        assert len(events) == 1
        assert events[0].category == "Accessories"

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            _product(price=-1.0)


class TestUpdate:
    def test_partial_update(self):
        product = _product(brand="Logi")
        product.update(price=25.0)
        assert product.price == 25.0
        assert product.brand == "Logi"
        assert any(isinstance(e, ProductUpdated) for e in product._events)

    def test_images_replaced_wholesale(self):
        product = _product()
        product.update(image_urls=["c.webp"])
        assert product.image_urls == ["c.webp"]

    def test_empty_image_list_clears_images(self):
        product = _product()
        product.update(image_urls=[])
        assert product.image_urls == []


class TestRecordSale:
    def test_increments_sold_quantity(self):
        product = _product()
        product.record_sale(2)
        product.record_sale(3)
        assert product.sold_quantity == 5

        events = [e for e in product._events if isinstance(e, ProductSold)]
        assert [e.sold_quantity for e in events] == [2, 5]

    def test_rejects_non_positive_quantity(self):
        with pytest.raises(ValidationError):
            _product().record_sale(0)
