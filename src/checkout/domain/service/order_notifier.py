"""Abstract notification sink.

Notifications are fire-and-forget: callers ignore return values and
never let a notifier failure affect an order that is already committed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from checkout.domain.model.inventory_alert import InventoryAlert
from checkout.domain.model.order import Order


class OrderNotifier(ABC):

    @abstractmethod
    def notify_order_created(self, order: Order) -> None:
        """Announce a newly committed order."""

    @abstractmethod
    def notify_order_updated(self, order: Order) -> None:
        """Announce a status change on an existing order."""

    @abstractmethod
    def notify_inventory_alert(self, alert: InventoryAlert) -> None:
        """Announce that a product's stock has run low."""
