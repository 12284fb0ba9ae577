import pytest
from protean import current_domain

from storefront.ordering.items import AddToCart
from storefront.ordering.placement import PlaceOrder


@pytest.fixture()
def add_to_cart():
    def _add(user, product, quantity=1):
        return current_domain.process(
            AddToCart(user_id=user.id, product_id=product.id, quantity=quantity),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def place_order():
    def _place(user, receiver_name="Jane Doe", receiver_phone="0901234567"):
        return current_domain.process(
            PlaceOrder(
                user_id=user.id,
                shipping_address="19 Nguyen Huu Tho, District 7",
                receiver_name=receiver_name,
                receiver_phone=receiver_phone,
            ),
            asynchronous=False,
        )

    return _place
