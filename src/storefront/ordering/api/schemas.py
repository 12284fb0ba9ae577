"""Pydantic request/response schemas for the cart and order APIs."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from storefront.ordering.order import OrderStatus

# --- Request Schemas ---


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "b2c3d4e5-f6a7-8901", "quantity": 2}]}}

    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": "19 Nguyen Huu Tho, District 7, HCMC",
                    "receiver_name": "Jane Doe",
                    "receiver_phone": "0901234567",
                }
            ]
        }
    }

    shipping_address: str = Field(..., min_length=1, max_length=500)
    receiver_name: str = Field(..., min_length=1, max_length=100)
    receiver_phone: str = Field(..., min_length=1, max_length=20)


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus


# --- Response Schemas ---


class CartLineResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    product_image: str | None = None
    price: float
    quantity: int
    subtotal: float


class CartResponse(BaseModel):
    id: str
    user_id: str
    items: list[CartLineResponse]
    total_quantity: int
    total_price: float

    @classmethod
    def from_view(cls, view) -> CartResponse:
        return cls(
            id=view.id,
            user_id=view.user_id,
            items=[
                CartLineResponse(
                    id=line.id,
                    product_id=line.product_id,
                    product_name=line.product_name,
                    product_image=line.product_image,
                    price=line.price,
                    quantity=line.quantity,
                    subtotal=line.subtotal,
                )
                for line in view.items
            ],
            total_quantity=view.total_quantity,
            total_price=view.total_price,
        )


class OrderItemResponse(BaseModel):
    id: str
    product_id: str
    product_name: str
    product_image: str | None = None
    quantity: int
    price: float
    subtotal: float


class OrderResponse(BaseModel):
    id: str
    user_id: str
    status: str
    shipping_address: str
    receiver_name: str
    receiver_phone: str
    total_amount: float
    order_date: datetime | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None
    items: list[OrderItemResponse]

    @classmethod
    def from_order(cls, order) -> OrderResponse:
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            status=order.status,
            shipping_address=order.shipping_address,
            receiver_name=order.receiver_name,
            receiver_phone=order.receiver_phone,
            total_amount=order.total_amount,
            order_date=order.order_date,
            updated_at=order.updated_at,
            updated_by=order.updated_by,
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    product_image=item.product_image,
                    quantity=item.quantity,
                    price=item.price,
                    subtotal=item.subtotal,
                )
                for item in order.items
            ],
        )
