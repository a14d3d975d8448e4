"""Domain service: Inventory Reservation.

This service coordinates the cross-aggregate operation of reserving
stock for a cart.  It lives in the domain layer because the logic is a
core business rule, not just orchestration.

Items are processed in the order the caller supplied.  Each product is
loaded, checked and decremented inside the caller's unit of work, so a
failure on any item leaves nothing behind once the unit of work rolls
back: either every line item is reserved or none are.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from checkout.domain.exceptions import InsufficientStockError, ProductNotFoundError
from checkout.domain.model.order import OrderLineItem
from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import Money, Quantity
from checkout.domain.repository.product_repository import ProductRepository
from checkout.domain.repository.unit_of_work import UnitOfWork

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReservationRequest:
    product_id: str
    quantity: int


@dataclass
class Reservation:
    """Accumulated line-item snapshots and running total for one cart."""

    currency: str
    items: list[OrderLineItem] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    total: Money = field(init=False)

    def __post_init__(self) -> None:
        self.total = Money.zero(self.currency)

    def add(self, line: OrderLineItem, product: Product) -> None:
        self.items.append(line)
        self.products.append(product)
        self.total = self.total + line.line_total


class InventoryReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve_for_cart(
        self,
        uow: UnitOfWork,
        requests: list[ReservationRequest],
        currency: str,
        exchange_rate: Decimal,
        cancelled=None,
    ) -> Reservation:
        """Validate and reserve stock for every requested line item.

        ``cancelled`` is an optional callable checked before each item;
        it raises to abandon the reservation.
        """
        reservation = Reservation(currency=currency)

        for req in requests:
            if cancelled is not None:
                cancelled()

            product = self._product_repo.get_for_update(uow, req.product_id)
            if product is None:
                raise ProductNotFoundError(req.product_id)

            if not product.has_stock_for(req.quantity):
                raise InsufficientStockError(
                    product_id=product.id,
                    product_name=product.name,
                    available=product.stock,
                    requested=req.quantity,
                )

            unit_price = product.price.convert(exchange_rate, currency)
            line = OrderLineItem(
                product_id=product.id,
                product_name=product.name,
                quantity=Quantity(req.quantity),
                unit_price=unit_price,  # <-- price snapshot
                image=product.thumbnail,
            )
            reservation.add(line, product)

            product.decrement_stock(req.quantity)
            self._product_repo.save(uow, product)
            log.debug(
                "Reserved %d x %s (stock now %d)",
                req.quantity, product.id, product.stock,
            )

        return reservation
