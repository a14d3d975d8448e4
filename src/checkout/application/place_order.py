"""Application service: Place Order use case.

Orchestrates the flow between the currency table, the two domain
services and the notifier:

    Validating -> Reserving -> Committing -> Succeeded | Aborted

Validation happens before any unit of work is opened.  Reservation and
commit share one unit of work; leaving it early for any reason rolls
back every stock decrement.  Notifications go out only after commit and
can never fail the order.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from checkout.application.dto import CartRequest, OrderSummaryDTO, to_summary_dto
from checkout.application.validate_cart import validate_cart
from checkout.domain.exceptions import (
    DomainException,
    InternalError,
    OperationCancelledError,
)
from checkout.domain.model.inventory_alert import (
    DEFAULT_CRITICAL_STOCK_THRESHOLD,
    DEFAULT_LOW_STOCK_THRESHOLD,
    InventoryAlert,
)
from checkout.domain.model.order import Order
from checkout.domain.model.product import Product
from checkout.domain.repository.currency_table import CurrencyTable
from checkout.domain.repository.order_repository import OrderRepository
from checkout.domain.repository.product_repository import ProductRepository
from checkout.domain.repository.unit_of_work import UnitOfWork
from checkout.domain.service.inventory_reservation_service import (
    InventoryReservationService,
    ReservationRequest,
)
from checkout.domain.service.order_commit_service import OrderCommitService
from checkout.domain.service.order_notifier import OrderNotifier
from checkout.domain.service.order_number_generator import OrderNumberGenerator

log = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        currency_table: CurrencyTable,
        notifier: OrderNotifier,
        order_numbers: OrderNumberGenerator | None = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        critical_stock_threshold: int = DEFAULT_CRITICAL_STOCK_THRESHOLD,
    ) -> None:
        self._uow_factory = uow_factory
        self._currency_table = currency_table
        self._notifier = notifier
        self._order_numbers = order_numbers or OrderNumberGenerator()
        self._reservations = InventoryReservationService(product_repo)
        self._committer = OrderCommitService(order_repo, self._order_numbers)
        self._low_stock_threshold = low_stock_threshold
        self._critical_stock_threshold = critical_stock_threshold

    def handle(
        self,
        request: CartRequest,
        cancel: threading.Event | None = None,
    ) -> OrderSummaryDTO:
        """Place an order for *request*.

        Steps:
        1. Validate the request and resolve the exchange rate.
        2. Reserve stock for every item inside one unit of work.
        3. Build the order from the snapshots, persist it and commit.
        4. Notify (best effort) and return a summary.

        If *cancel* is set before commit, the unit of work is rolled back
        and OperationCancelledError is raised.
        """
        log.debug("Validating cart with %d item(s)", len(request.items))
        cart = validate_cart(request, self._currency_table)

        def check_cancelled() -> None:
            if cancel is not None and cancel.is_set():
                raise OperationCancelledError("Order placement was cancelled")

        try:
            with self._uow_factory() as uow:
                log.debug("Reserving stock in %s", cart.currency)
                reservation = self._reservations.reserve_for_cart(
                    uow,
                    [ReservationRequest(s.product_id, s.quantity) for s in request.items],
                    currency=cart.currency,
                    exchange_rate=cart.exchange_rate,
                    cancelled=check_cancelled,
                )

                order = Order.create(
                    order_number=self._order_numbers.generate(),
                    items=reservation.items,
                    total_amount=reservation.total,
                    exchange_rate=cart.exchange_rate,
                    shipping_address=request.shipping_address,
                    customer_info=request.customer_info,
                    payment_method=cart.payment_method,
                )

                check_cancelled()
                log.debug("[Order: %s] Committing", order.order_number)
                saved = self._committer.commit(uow, order)
        except DomainException as exc:
            log.info("Order placement aborted (%s): %s", exc.kind, exc.message)
            raise
        except Exception as exc:
            log.exception("Error creating order")
            raise InternalError("Failed to create order") from exc

        log.info(
            "[Order: %s] Placed: %d item(s), total %s",
            saved.order_number, saved.item_count, saved.total_amount,
        )
        self._notify(saved, reservation.products)
        return to_summary_dto(saved)

    # --- Post-commit notifications --------------------------------------------

    def _notify(self, order: Order, products: list[Product]) -> None:
        try:
            self._notifier.notify_order_created(order)
        except Exception:
            log.warning(
                "[Order: %s] Order-created notification failed",
                order.order_number, exc_info=True,
            )

        seen: set[str] = set()
        for product in reversed(products):
            # the last snapshot of a repeated product holds its final stock
            if product.id in seen:
                continue
            seen.add(product.id)
            alert = InventoryAlert.for_product(
                product, self._low_stock_threshold, self._critical_stock_threshold
            )
            if alert is None:
                continue
            try:
                self._notifier.notify_inventory_alert(alert)
            except Exception:
                log.warning(
                    "Inventory alert for %s failed", product.id, exc_info=True
                )
