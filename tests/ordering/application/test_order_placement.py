"""Application tests for placing, cancelling and updating orders."""

from unittest.mock import patch

import pytest
from protean import current_domain
from protean.exceptions import InvalidOperationError, ObjectNotFoundError, ValidationError

from storefront.catalogue.management import UpdateProduct
from storefront.catalogue.queries import get_product
from storefront.ordering.cancellation import CancelOrder, UpdateOrderStatus
from storefront.ordering.cart import CartItem, find_cart, lines_of
from storefront.ordering.order import Order, OrderStatus
from storefront.ordering.queries import get_order_for


def _orders():
    return current_domain.repository_for(Order)._dao.query.all().items


class TestPlaceOrder:
    def test_example_cart(self, shopper, make_product, add_to_cart, place_order):
        a = make_product(name="A", price=10.0)
        b = make_product(name="B", price=25.0)
        add_to_cart(shopper, a, 2)
        add_to_cart(shopper, b, 1)

        order = get_order_for(place_order(shopper), shopper.id, is_admin=False)

        assert order.total_amount == 45.0
        assert order.status == OrderStatus.PENDING.value
        assert get_product(a.id).sold_quantity == 2
        assert get_product(b.id).sold_quantity == 1
        assert lines_of(find_cart(shopper.id).id) == []

    def test_empty_cart_fails_without_mutation(self, shopper, make_product, add_to_cart, place_order):
        with pytest.raises(InvalidOperationError):
            place_order(shopper)
        assert _orders() == []

    def test_cart_emptied_by_clear_fails(self, shopper, make_product, add_to_cart, place_order):
        from storefront.ordering.items import ClearCart

        add_to_cart(shopper, make_product(), 1)
        current_domain.process(ClearCart(user_id=shopper.id), asynchronous=False)
        with pytest.raises(InvalidOperationError):
            place_order(shopper)

    def test_later_price_change_does_not_alter_order(self, shopper, make_product, add_to_cart, place_order):
        product = make_product(name="A", price=10.0)
        add_to_cart(shopper, product, 3)
        order_id = place_order(shopper)

        current_domain.process(UpdateProduct(product_id=product.id, price=99.0, name="A v2"), asynchronous=False)

        order = get_order_for(order_id, shopper.id, is_admin=False)
        assert order.total_amount == 30.0
        assert order.items[0].price == 10.0
        assert order.items[0].product_name == "A"

    def test_duplicate_lines_become_one_order_line(self, shopper, make_product, add_to_cart, place_order):
        product = make_product(price=5.0)
        add_to_cart(shopper, product, 1)
        cart = find_cart(shopper.id)
        current_domain.repository_for(CartItem).add(CartItem.create(cart.id, product.id, 2))

        order = get_order_for(place_order(shopper), shopper.id, is_admin=False)
        assert len(order.items) == 1
        assert order.items[0].quantity == 3
        assert get_product(product.id).sold_quantity == 3

    def test_missing_product_aborts_everything(self, shopper, make_product, add_to_cart, place_order):
        kept = make_product(name="Kept", price=10.0)
        add_to_cart(shopper, kept, 1)
        cart = find_cart(shopper.id)
        current_domain.repository_for(CartItem).add(CartItem.create(cart.id, "ghost-product", 1))

        with pytest.raises(ObjectNotFoundError):
            place_order(shopper)

        assert _orders() == []
        assert get_product(kept.id).sold_quantity == 0
        assert len(lines_of(cart.id)) == 2

    def test_failure_after_writes_rolls_back(self, shopper, make_product, add_to_cart, place_order):
        product = make_product(price=10.0)
        add_to_cart(shopper, product, 2)
        cart = find_cart(shopper.id)

        with patch("storefront.ordering.placement.delete_lines", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                place_order(shopper)

        assert _orders() == []
        assert get_product(product.id).sold_quantity == 0
        assert [line.quantity for line in lines_of(cart.id)] == [2]


class TestCancelOrder:
    @pytest.fixture()
    def order_id(self, shopper, make_product, add_to_cart, place_order):
        add_to_cart(shopper, make_product(price=10.0), 1)
        return place_order(shopper)

    def test_owner_cancels_pending_order(self, shopper, order_id):
        current_domain.process(
            CancelOrder(order_id=order_id, user_id=shopper.id, actor=shopper.email),
            asynchronous=False,
        )
        assert get_order_for(order_id, shopper.id, is_admin=False).status == OrderStatus.CANCELLED.value

    def test_non_pending_order_is_left_unchanged(self, shopper, order_id):
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="SHIPPED", actor="admin"), asynchronous=False)

        with pytest.raises(InvalidOperationError):
            current_domain.process(
                CancelOrder(order_id=order_id, user_id=shopper.id, actor=shopper.email),
                asynchronous=False,
            )
        assert get_order_for(order_id, shopper.id, is_admin=False).status == OrderStatus.SHIPPED.value

    def test_other_users_order_is_not_found(self, make_user, order_id):
        stranger = make_user()
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                CancelOrder(order_id=order_id, user_id=stranger.id, actor=stranger.email),
                asynchronous=False,
            )


class TestUpdateOrderStatus:
    def test_records_actor(self, shopper, make_product, add_to_cart, place_order):
        add_to_cart(shopper, make_product(price=10.0), 1)
        order_id = place_order(shopper)

        current_domain.process(
            UpdateOrderStatus(order_id=order_id, status="CONFIRMED", actor="admin@example.com"),
            asynchronous=False,
        )

        order = get_order_for(order_id, None, is_admin=True)
        assert order.status == "CONFIRMED"
        assert order.updated_by == "admin@example.com"

    def test_status_is_case_insensitive(self, shopper, make_product, add_to_cart, place_order):
        add_to_cart(shopper, make_product(price=10.0), 1)
        order_id = place_order(shopper)

        current_domain.process(UpdateOrderStatus(order_id=order_id, status=" shipped ", actor="admin"), asynchronous=False)

        assert get_order_for(order_id, None, is_admin=True).status == OrderStatus.SHIPPED.value

    def test_unknown_status_is_rejected(self, shopper, make_product, add_to_cart, place_order):
        add_to_cart(shopper, make_product(price=10.0), 1)
        order_id = place_order(shopper)

        with pytest.raises(ValidationError):
            current_domain.process(UpdateOrderStatus(order_id=order_id, status="LOST", actor="admin"), asynchronous=False)
        assert get_order_for(order_id, None, is_admin=True).status == OrderStatus.PENDING.value
