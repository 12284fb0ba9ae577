"""Shared BDD fixtures and step definitions for ordering."""

import pytest
from protean import current_domain
from protean.exceptions import InvalidOperationError, ObjectNotFoundError
from pytest_bdd import given, parsers, then, when

from storefront.catalogue.queries import get_product
from storefront.ordering.items import AddToCart
from storefront.ordering.order import Order
from storefront.ordering.placement import PlaceOrder


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def products():
    """Products created in the scenario, keyed by name."""
    return {}


@pytest.fixture()
def placed():
    return {"order_id": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a shopper", target_fixture="buyer")
def a_shopper(make_user):
    return make_user(email="buyer@example.com", name="Buyer")


@given(parsers.cfparse('a product "{name}" priced at {price:f}'))
def a_product(make_product, products, name, price):
    products[name] = make_product(name=name, price=price)


@given(parsers.cfparse('the shopper has {quantity:d} of "{name}" in the cart'))
def shopper_has_in_cart(buyer, products, quantity, name):
    current_domain.process(
        AddToCart(user_id=buyer.id, product_id=products[name].id, quantity=quantity),
        asynchronous=False,
    )


@given("the shopper places an order")
@when("the shopper places an order")
def shopper_places_order(buyer, placed, error):
    try:
        placed["order_id"] = current_domain.process(
            PlaceOrder(
                user_id=buyer.id,
                shipping_address="19 Nguyen Huu Tho, District 7",
                receiver_name="Buyer",
                receiver_phone="0901234567",
            ),
            asynchronous=False,
        )
    except (InvalidOperationError, ObjectNotFoundError) as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(placed, status):
    order = current_domain.repository_for(Order).get(placed["order_id"])
    assert order.status == status


@then(parsers.cfparse('"{name}" has sold {quantity:d}'))
def product_has_sold(products, name, quantity):
    assert get_product(products[name].id).sold_quantity == quantity
