"""FastAPI endpoints for the shopping cart and orders."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.schemas import PageResponse
from storefront.api.security import Principal, require_admin, require_shopper
from storefront.ordering.api.schemas import (
    AddToCartRequest,
    CartResponse,
    OrderResponse,
    PlaceOrderRequest,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
)
from storefront.ordering.cancellation import CancelOrder, UpdateOrderStatus
from storefront.ordering.items import AddToCart, ClearCart, RemoveCartItem, UpdateCartItem
from storefront.ordering.placement import PlaceOrder
from storefront.ordering.queries import all_orders, cart_view, get_order_for, orders_of_user

cart_router = APIRouter(prefix="/api/cart", tags=["cart"])
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


def _cart(principal: Principal) -> CartResponse:
    return CartResponse.from_view(cart_view(principal.user_id))


# --- Cart endpoints ---


@cart_router.get("", response_model=CartResponse)
async def get_cart(principal: Principal = Depends(require_shopper)) -> CartResponse:
    return _cart(principal)


@cart_router.post("/add", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, principal: Principal = Depends(require_shopper)) -> CartResponse:
    command = AddToCart(
        user_id=principal.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return _cart(principal)


@cart_router.put("/items/{item_id}", response_model=CartResponse)
async def update_cart_item(
    item_id: str,
    body: UpdateCartItemRequest,
    principal: Principal = Depends(require_shopper),
) -> CartResponse:
    command = UpdateCartItem(user_id=principal.user_id, item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart(principal)


@cart_router.delete("/items/{item_id}", response_model=CartResponse)
async def remove_cart_item(item_id: str, principal: Principal = Depends(require_shopper)) -> CartResponse:
    current_domain.process(RemoveCartItem(user_id=principal.user_id, item_id=item_id), asynchronous=False)
    return _cart(principal)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(principal: Principal = Depends(require_shopper)) -> CartResponse:
    current_domain.process(ClearCart(user_id=principal.user_id), asynchronous=False)
    return _cart(principal)


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, principal: Principal = Depends(require_shopper)) -> OrderResponse:
    command = PlaceOrder(
        user_id=principal.user_id,
        shipping_address=body.shipping_address,
        receiver_name=body.receiver_name,
        receiver_phone=body.receiver_phone,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(get_order_for(order_id, principal.user_id, is_admin=True))


@order_router.get("", response_model=PageResponse[OrderResponse])
async def my_orders(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort: str | None = None,
    principal: Principal = Depends(require_shopper),
) -> PageResponse[OrderResponse]:
    result = orders_of_user(principal.user_id, page=page, size=size, sort=sort)
    return PageResponse[OrderResponse].of(result, OrderResponse.from_order)


@order_router.get("/all", response_model=PageResponse[OrderResponse])
async def list_all_orders(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort: str | None = None,
    status: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    search: str | None = None,
    principal: Principal = Depends(require_admin),
) -> PageResponse[OrderResponse]:
    result = all_orders(
        page=page,
        size=size,
        sort=sort,
        status=status,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )
    return PageResponse[OrderResponse].of(result, OrderResponse.from_order)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(require_shopper)) -> OrderResponse:
    return OrderResponse.from_order(get_order_for(order_id, principal.user_id, principal.is_admin))


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(require_admin),
) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status.value, actor=principal.email)
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(get_order_for(order_id, principal.user_id, is_admin=True))


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, principal: Principal = Depends(require_shopper)) -> OrderResponse:
    command = CancelOrder(order_id=order_id, user_id=principal.user_id, actor=principal.email)
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(get_order_for(order_id, principal.user_id, principal.is_admin))
