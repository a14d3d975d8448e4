"""Low-stock alerts raised when an order draws a product down.

Thresholds mirror the storefront's admin alerts: out of stock is
critical, at or below the critical threshold is high, at or below the
low threshold is medium.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from checkout.domain.model.product import Product

DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_CRITICAL_STOCK_THRESHOLD = 5


class AlertSeverity(Enum):
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class InventoryAlert:
    product_id: str
    product_name: str
    current_stock: int
    severity: AlertSeverity
    message: str

    @staticmethod
    def for_product(
        product: Product,
        low_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        critical_threshold: int = DEFAULT_CRITICAL_STOCK_THRESHOLD,
    ) -> InventoryAlert | None:
        """Build the alert for *product*'s current stock, or None if healthy."""
        stock = product.stock
        if stock <= 0:
            severity = AlertSeverity.CRITICAL
            message = f"Out of stock: {product.name}"
        elif stock <= critical_threshold:
            severity = AlertSeverity.HIGH
            message = f"Critical low stock: {product.name} - Only {stock} remaining"
        elif stock <= low_threshold:
            severity = AlertSeverity.MEDIUM
            message = f"Low stock alert: {product.name} running low - {stock} remaining"
        else:
            return None

        return InventoryAlert(
            product_id=product.id,
            product_name=product.name,
            current_stock=stock,
            severity=severity,
            message=message,
        )
