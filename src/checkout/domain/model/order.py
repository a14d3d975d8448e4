"""Order aggregate.

The Order is an aggregate root that owns its line items.  Line items are
snapshots (copies) of product data taken at placement time, so later
catalog edits can never alter a historical order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from checkout.domain.exceptions import ValidationError
from checkout.domain.model.value_objects import (
    CustomerInfo,
    Money,
    Quantity,
    ShippingAddress,
)


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


FINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


class PaymentMethod(Enum):
    CARD = "card"
    COD = "cod"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a product at order-creation time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # order currency, locked at placement
    image: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for placed orders.

    New orders go through ``Order.create()``, which checks the line items
    and the total.  The plain constructor is what repositories use to load
    stored orders as they were written.
    """

    id: int | None
    order_number: str
    items: list[OrderLineItem]
    total_amount: Money
    currency: str
    exchange_rate: Decimal
    shipping_address: ShippingAddress
    customer_info: CustomerInfo
    payment_method: PaymentMethod
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        items: list[OrderLineItem],
        total_amount: Money,
        exchange_rate: Decimal,
        shipping_address: ShippingAddress,
        customer_info: CustomerInfo,
        payment_method: PaymentMethod,
    ) -> Order:
        """Create a new order, enforcing all invariants.

        Card payments are authorized before an order is placed, so they
        start out ``completed``; cash on delivery stays ``pending``.
        """
        if not items:
            raise ValidationError("Order must contain at least one item")

        currency = total_amount.currency
        expected = Money.zero(currency)
        for item in items:
            expected = expected + item.line_total
        if expected != total_amount:
            raise ValidationError(
                f"Order total {total_amount} does not match line items {expected}"
            )

        if payment_method is PaymentMethod.COD:
            payment_status = PaymentStatus.PENDING
        else:
            payment_status = PaymentStatus.COMPLETED

        return Order(
            id=None,
            order_number=order_number,
            items=list(items),
            total_amount=total_amount,
            currency=currency,
            exchange_rate=exchange_rate,
            shipping_address=shipping_address,
            customer_info=customer_info,
            payment_method=payment_method,
            status=OrderStatus.PENDING,
            payment_status=payment_status,
        )

    # --- State transitions ----------------------------------------------------

    def update_status(self, new_status: OrderStatus) -> None:
        """Move the order along the fulfillment workflow.

        Delivered and cancelled orders are final.
        """
        if self.status in FINAL_STATUSES:
            raise ValidationError(
                f"Cannot change status of order {self.order_number}: "
                f"it is already {self.status.value}"
            )
        self.status = new_status

    def update_payment_status(self, new_status: PaymentStatus) -> None:
        self.payment_status = new_status

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)
