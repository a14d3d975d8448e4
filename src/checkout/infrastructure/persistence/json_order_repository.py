"""JSON-file-backed implementation of OrderRepository.

``order_number`` is treated as a unique key: adding an order whose number
is already present in the working set yields ``Retryable``.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from checkout.domain.exceptions import EntityNotFoundError
from checkout.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from checkout.domain.model.value_objects import (
    CustomerInfo,
    Money,
    Quantity,
    ShippingAddress,
)
from checkout.domain.repository.order_repository import (
    Fatal,
    OrderRepository,
    Retryable,
    Saved,
    SaveResult,
)
from checkout.domain.repository.unit_of_work import UnitOfWork
from checkout.infrastructure.persistence.json_store import JsonStore, as_json_uow

_COLLECTION = "orders"


class JsonOrderRepository(OrderRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    # --- OrderRepository interface --------------------------------------------

    def add(self, uow: UnitOfWork, order: Order) -> SaveResult:
        records = as_json_uow(uow).records(_COLLECTION)

        if any(r["order_number"] == order.order_number for r in records):
            return Retryable(
                reason=f"duplicate key: order_number={order.order_number}"
            )

        order.id = max((r["id"] for r in records), default=0) + 1
        try:
            raw = self._to_raw(order)
        except (TypeError, ValueError, AttributeError) as exc:
            order.id = None
            return Fatal(reason=f"cannot serialize order: {exc}")

        records.append(raw)
        as_json_uow(uow).mark_dirty(_COLLECTION)
        return Saved(order)

    def save(self, uow: UnitOfWork, order: Order) -> None:
        records = as_json_uow(uow).records(_COLLECTION)
        for i, raw in enumerate(records):
            if raw["id"] == order.id:
                records[i] = self._to_raw(order)
                as_json_uow(uow).mark_dirty(_COLLECTION)
                return
        raise EntityNotFoundError(f"Order #{order.id} not found")

    def get_for_update(self, uow: UnitOfWork, order_id: int) -> Order | None:
        for raw in as_json_uow(uow).records(_COLLECTION):
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._store.read(_COLLECTION):
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_number(self, order_number: str) -> Order | None:
        for raw in self._store.read(_COLLECTION):
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return [self._to_domain(raw) for raw in self._store.read(_COLLECTION)]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "status": order.status.value,
            "payment_method": order.payment_method.value,
            "payment_status": order.payment_status.value,
            "currency": order.currency,
            "exchange_rate": str(order.exchange_rate),
            "total_amount": str(order.total_amount.amount),
            "created_at": order.created_at.isoformat(),
            "shipping_address": {
                "street": order.shipping_address.street,
                "city": order.shipping_address.city,
                "country": order.shipping_address.country,
            },
            "customer_info": {
                "first_name": order.customer_info.first_name,
                "last_name": order.customer_info.last_name,
                "email": order.customer_info.email,
                "mobile": order.customer_info.mobile,
                "secondary_mobile": order.customer_info.secondary_mobile,
            },
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "image": item.image,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw["currency"]
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
                image=i.get("image"),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            items=items,
            total_amount=Money(Decimal(raw["total_amount"]), currency),
            currency=currency,
            exchange_rate=Decimal(raw["exchange_rate"]),
            shipping_address=ShippingAddress(**raw["shipping_address"]),
            customer_info=CustomerInfo(**raw["customer_info"]),
            payment_method=PaymentMethod(raw["payment_method"]),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
