"""Notification sink that publishes events as structured log records.

Events are emitted on the ``checkout.events`` logger as one JSON object
per line, shaped like the storefront's real-time dashboard events
(``new_order``, ``order_updated``, ``inventory_alert``).
"""

from __future__ import annotations

import json
import logging

from checkout.domain.model.inventory_alert import InventoryAlert
from checkout.domain.model.order import Order
from checkout.domain.service.order_notifier import OrderNotifier

events_log = logging.getLogger("checkout.events")


class LoggingOrderNotifier(OrderNotifier):

    def notify_order_created(self, order: Order) -> None:
        self._emit("new_order", self._order_payload(order))

    def notify_order_updated(self, order: Order) -> None:
        self._emit("order_updated", self._order_payload(order))

    def notify_inventory_alert(self, alert: InventoryAlert) -> None:
        self._emit(
            "inventory_alert",
            {
                "productId": alert.product_id,
                "message": alert.message,
                "severity": alert.severity.value,
                "currentStock": alert.current_stock,
            },
        )

    @staticmethod
    def _order_payload(order: Order) -> dict:
        return {
            "orderId": order.id,
            "orderNumber": order.order_number,
            "status": order.status.value,
            "paymentStatus": order.payment_status.value,
            "totalAmount": str(order.total_amount.amount),
            "currency": order.currency,
            "customer": order.customer_info.display_name,
        }

    @staticmethod
    def _emit(event_type: str, data: dict) -> None:
        events_log.info(json.dumps({"type": event_type, "data": data}, ensure_ascii=False))
