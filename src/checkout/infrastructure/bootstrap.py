"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import threading
from functools import partial

from checkout.application.list_orders import ListOrdersHandler
from checkout.application.place_order import PlaceOrderHandler
from checkout.application.show_inventory import ShowInventoryHandler
from checkout.application.show_order import ShowOrderHandler
from checkout.application.update_order_status import UpdateOrderStatusHandler
from checkout.domain.service.order_notifier import OrderNotifier
from checkout.infrastructure.config import Settings
from checkout.infrastructure.currency.static_currency_table import StaticCurrencyTable
from checkout.infrastructure.notification.background_notifier import BackgroundNotifier
from checkout.infrastructure.notification.logging_notifier import LoggingOrderNotifier
from checkout.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from checkout.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from checkout.infrastructure.persistence.json_store import JsonStore, JsonUnitOfWork


def settings() -> Settings:
    return Settings.from_env()


def store(config: Settings | None = None) -> JsonStore:
    return JsonStore((config or settings()).data_dir)


def product_repository(config: Settings | None = None) -> JsonProductRepository:
    return JsonProductRepository(store(config))


def order_repository(config: Settings | None = None) -> JsonOrderRepository:
    return JsonOrderRepository(store(config))


_background: BackgroundNotifier | None = None
_background_guard = threading.Lock()


def notifier(config: Settings | None = None) -> OrderNotifier:
    """Notifier for the handlers; the background one is shared per process."""
    global _background
    config = config or settings()
    if not config.async_notifications:
        return LoggingOrderNotifier()
    with _background_guard:
        if _background is None:
            _background = BackgroundNotifier(LoggingOrderNotifier())
        return _background


def shutdown_notifiers() -> None:
    """Drain and stop the shared background notifier, if one was started."""
    global _background
    with _background_guard:
        background, _background = _background, None
    if background is not None:
        background.shutdown(wait=True)


def place_order_handler(config: Settings | None = None) -> PlaceOrderHandler:
    config = config or settings()
    json_store = store(config)
    return PlaceOrderHandler(
        uow_factory=partial(JsonUnitOfWork, json_store),
        product_repo=JsonProductRepository(json_store),
        order_repo=JsonOrderRepository(json_store),
        currency_table=StaticCurrencyTable(),
        notifier=notifier(config),
        low_stock_threshold=config.low_stock_threshold,
        critical_stock_threshold=config.critical_stock_threshold,
    )


def update_order_status_handler(config: Settings | None = None) -> UpdateOrderStatusHandler:
    config = config or settings()
    json_store = store(config)
    return UpdateOrderStatusHandler(
        uow_factory=partial(JsonUnitOfWork, json_store),
        order_repo=JsonOrderRepository(json_store),
        notifier=notifier(config),
    )


def show_order_handler(config: Settings | None = None) -> ShowOrderHandler:
    return ShowOrderHandler(order_repository(config))


def list_orders_handler(config: Settings | None = None) -> ListOrdersHandler:
    return ListOrdersHandler(order_repository(config))


def show_inventory_handler(config: Settings | None = None) -> ShowInventoryHandler:
    config = config or settings()
    return ShowInventoryHandler(
        product_repository(config), low_stock_threshold=config.low_stock_threshold
    )
