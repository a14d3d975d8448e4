"""Dispatches notifications on a worker thread.

Wraps another notifier so the caller returns as soon as the event is
queued.  Failures in the wrapped notifier are logged, never raised.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor

from checkout.domain.model.inventory_alert import InventoryAlert
from checkout.domain.model.order import Order
from checkout.domain.service.order_notifier import OrderNotifier

log = logging.getLogger(__name__)


class BackgroundNotifier(OrderNotifier):

    def __init__(self, delegate: OrderNotifier, max_workers: int = 1) -> None:
        self._delegate = delegate
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="checkout-notify"
        )

    def notify_order_created(self, order: Order) -> None:
        self._submit(self._delegate.notify_order_created, order)

    def notify_order_updated(self, order: Order) -> None:
        self._submit(self._delegate.notify_order_updated, order)

    def notify_inventory_alert(self, alert: InventoryAlert) -> None:
        self._submit(self._delegate.notify_inventory_alert, alert)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _submit(self, fn, arg) -> None:
        future = self._executor.submit(fn, arg)
        future.add_done_callback(self._log_failure)

    @staticmethod
    def _log_failure(future: Future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            log.warning(
                "Background notification failed",
                exc_info=(type(exc), exc, exc.__traceback__),
            )
