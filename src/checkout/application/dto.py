"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from checkout.domain.model.order import Order
from checkout.domain.model.value_objects import CustomerInfo, Money, ShippingAddress


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the customer asked for (product id + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class CartRequest:
    """Input: a proposed cart with shipping, customer and payment details."""

    items: list[CartItemSpec]
    shipping_address: ShippingAddress
    customer_info: CustomerInfo
    payment_method: str
    currency: str | None = None


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: what the caller gets back after placing an order."""

    order_id: int
    order_number: str
    total_amount: str
    currency: str
    status: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str
    image: str | None


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    customer: str
    email: str
    mobile: str
    shipping_address: str
    payment_method: str
    status: str
    payment_status: str
    currency: str
    exchange_rate: str
    items: list[OrderLineItemDTO]
    total_amount: str
    created_at: str


def _exact(money: Money) -> str:
    # full stored precision, never rounded
    return f"{money.amount} {money.currency}"


def to_summary_dto(order: Order) -> OrderSummaryDTO:
    return OrderSummaryDTO(
        order_id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        total_amount=_exact(order.total_amount),
        currency=order.currency,
        status=order.status.value,
    )


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        customer=order.customer_info.display_name,
        email=order.customer_info.email,
        mobile=order.customer_info.mobile,
        shipping_address=str(order.shipping_address),
        payment_method=order.payment_method.value,
        status=order.status.value,
        payment_status=order.payment_status.value,
        currency=order.currency,
        exchange_rate=str(order.exchange_rate),
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=_exact(item.unit_price),
                line_total=_exact(item.line_total),
                image=item.image,
            )
            for item in order.items
        ],
        total_amount=_exact(order.total_amount),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
