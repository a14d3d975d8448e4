"""Application service: Update Order Status use case.

Used by fulfillment and admin workflows after an order is placed.  The
change is committed in its own unit of work; the order-updated
notification is sent afterwards and never affects the outcome.
"""

from __future__ import annotations

import logging
from typing import Callable

from checkout.application.dto import OrderDTO, to_order_dto
from checkout.domain.exceptions import EntityNotFoundError, ValidationError
from checkout.domain.model.order import OrderStatus, PaymentStatus
from checkout.domain.repository.order_repository import OrderRepository
from checkout.domain.repository.unit_of_work import UnitOfWork
from checkout.domain.service.order_notifier import OrderNotifier

log = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        order_repo: OrderRepository,
        notifier: OrderNotifier,
    ) -> None:
        self._uow_factory = uow_factory
        self._order_repo = order_repo
        self._notifier = notifier

    def handle(
        self,
        order_id: int,
        status: str,
        payment_status: str | None = None,
    ) -> OrderDTO:
        new_status = _parse(OrderStatus, status, "order status")
        new_payment_status = (
            _parse(PaymentStatus, payment_status, "payment status")
            if payment_status is not None
            else None
        )

        with self._uow_factory() as uow:
            order = self._order_repo.get_for_update(uow, order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            order.update_status(new_status)
            if new_payment_status is not None:
                order.update_payment_status(new_payment_status)

            self._order_repo.save(uow, order)
            uow.commit()

        log.info("[Order: %s] Status set to %s", order.order_number, order.status.value)

        try:
            self._notifier.notify_order_updated(order)
        except Exception:
            log.warning(
                "[Order: %s] Order-updated notification failed",
                order.order_number, exc_info=True,
            )
        return to_order_dto(order)


def _parse(enum_cls, raw: str, label: str):
    try:
        return enum_cls(raw)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label} '{raw}' (expected one of: {allowed})")
