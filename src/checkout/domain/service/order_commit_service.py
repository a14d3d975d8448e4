"""Domain service: Order Commit.

Persists a freshly built order in the unit of work that already holds
its stock reservations, then commits both together.

An order-number collision is the only recoverable failure: the number is
regenerated and the write retried exactly once.  Anything else, or a
second failure, raises and leaves the unit of work to roll back.
"""

from __future__ import annotations

import logging

from checkout.domain.exceptions import OrderPersistenceError
from checkout.domain.model.order import Order
from checkout.domain.repository.order_repository import (
    Fatal,
    OrderRepository,
    Retryable,
    Saved,
)
from checkout.domain.repository.unit_of_work import UnitOfWork
from checkout.domain.service.order_number_generator import OrderNumberGenerator

log = logging.getLogger(__name__)


class OrderCommitService:

    def __init__(
        self,
        order_repo: OrderRepository,
        order_numbers: OrderNumberGenerator,
    ) -> None:
        self._order_repo = order_repo
        self._order_numbers = order_numbers

    def commit(self, uow: UnitOfWork, order: Order) -> Order:
        result = self._order_repo.add(uow, order)

        if isinstance(result, Retryable):
            previous = order.order_number
            order.order_number = self._order_numbers.regenerate()
            log.warning(
                "[Order: %s] Duplicate %s, retrying as %s",
                previous, result.field, order.order_number,
            )
            result = self._order_repo.add(uow, order)

        if not isinstance(result, Saved):
            self._log_failure(order, result)
            raise OrderPersistenceError("Failed to create order")

        uow.commit()
        log.info("[Order: %s] Committed", result.order.order_number)
        return result.order

    @staticmethod
    def _log_failure(order: Order, result: Retryable | Fatal) -> None:
        if isinstance(result, Retryable):
            log.error(
                "[Order: %s] Duplicate %s again after retry: %s",
                order.order_number, result.field, result.reason,
            )
        else:
            log.error(
                "[Order: %s] Persistence failed (field=%s): %s",
                order.order_number, result.field, result.reason,
            )
