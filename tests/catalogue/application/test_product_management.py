"""Application tests for product commands and catalogue queries."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

from storefront.catalogue.management import DeleteProduct, UpdateProduct
from storefront.catalogue.queries import get_product, list_products, search_products
from storefront.ordering.cart import CartItem
from storefront.ordering.items import AddToCart
from storefront.ordering.placement import PlaceOrder
from storefront.ordering.queries import get_order_for


class TestCommands:
    def test_create_persists_images(self, make_product):
        product = make_product(name="Lamp", price=30.0, images=["lamp-1.webp", "lamp-2.webp"])
        assert get_product(product.id).image_urls == ["lamp-1.webp", "lamp-2.webp"]

    def test_update(self, make_product):
        product = make_product(name="Lamp", price=30.0)
        current_domain.process(
            UpdateProduct(product_id=product.id, price=35.5, image_urls=json.dumps(["new.webp"])),
            asynchronous=False,
        )

        updated = get_product(product.id)
        assert updated.price == 35.5
        assert updated.name == "Lamp"
        assert updated.image_urls == ["new.webp"]

    def test_update_unknown(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProduct(product_id="missing", price=1.0), asynchronous=False)

    def test_delete_removes_cart_lines_but_keeps_orders(self, make_user, make_product):
        user = make_user()
        other = make_user()
        product = make_product(name="Lamp", price=30.0)

        current_domain.process(AddToCart(user_id=user.id, product_id=product.id, quantity=1), asynchronous=False)
        current_domain.process(AddToCart(user_id=other.id, product_id=product.id, quantity=2), asynchronous=False)
        order_id = current_domain.process(
            PlaceOrder(user_id=other.id, shipping_address="1 Main", receiver_name="O", receiver_phone="0900"),
            asynchronous=False,
        )

        current_domain.process(DeleteProduct(product_id=product.id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            get_product(product.id)
        assert current_domain.repository_for(CartItem)._dao.query.all().total == 0

        order = get_order_for(order_id, other.id, is_admin=False)
        assert order.items[0].product_name == "Lamp"
        assert order.total_amount == 60.0


class TestQueries:
    @pytest.fixture()
    def catalogue(self, make_product):
        make_product(name="Red Shirt", price=15.0, category="Clothing", brand="Acme")
        make_product(name="Blue Shirt", price=25.0, category="Clothing", brand="Zeta")
        make_product(name="Desk Lamp", price=40.0, category="Home", brand="Acme")

    def test_list_sorted_by_price(self, catalogue):
        page = list_products(sort="price,desc")
        assert [p.price for p in page.items] == [40.0, 25.0, 15.0]

    def test_unknown_sort_field_falls_back(self, catalogue):
        assert list_products(sort="password,asc").total == 3

    def test_paging(self, catalogue):
        page = list_products(page=1, size=2, sort="name,asc")
        assert page.total == 3
        assert page.total_pages == 2
        assert [p.name for p in page.items] == ["Red Shirt"]

    def test_search_by_category_and_brand(self, catalogue):
        assert [p.name for p in search_products(category="clothing", brand="acme").items] == ["Red Shirt"]

    def test_search_by_name_substring(self, catalogue):
        assert search_products(name="SHIRT").total == 2

    def test_search_by_price_range_is_inclusive(self, catalogue):
        page = search_products(min_price=15.0, max_price=25.0, sort="price,asc")
        assert [p.price for p in page.items] == [15.0, 25.0]
