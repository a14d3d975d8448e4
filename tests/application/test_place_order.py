"""Tests for the PlaceOrder use case.

These run against in-memory fakes whose unit of work really snapshots
and rolls back, so every failure path can be checked for leftovers.
"""

from __future__ import annotations

import random
import threading
from decimal import Decimal

import pytest

from checkout.application.dto import CartItemSpec, CartRequest
from checkout.application.place_order import PlaceOrderHandler
from checkout.domain.exceptions import (
    InsufficientStockError,
    InternalError,
    OperationCancelledError,
    OrderPersistenceError,
    ProductNotFoundError,
    UnsupportedCurrencyError,
    ValidationError,
)
from checkout.domain.model.inventory_alert import AlertSeverity
from checkout.domain.model.order import PaymentStatus
from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import (
    CustomerInfo,
    Money,
    ShippingAddress,
)
from checkout.domain.service.order_number_generator import OrderNumberGenerator
from checkout.infrastructure.currency.static_currency_table import (
    SUPPORTED_CURRENCIES,
    StaticCurrencyTable,
)
from tests.fakes import (
    CountingUowFactory,
    FailingNotifier,
    FakeCurrencyTable,
    FakeDatabase,
    FakeOrderRepository,
    FakeProductRepository,
    RecordingNotifier,
)


def _product(pid: str, price: str = "10.00", stock: int = 5) -> Product:
    return Product(id=pid, name=f"Product {pid}", price=Money.of(price), stock=stock)


def _setup(
    *products: Product,
    collisions: int = 0,
    fatal: str | None = None,
    notifier=None,
    currency_table=None,
    product_repo_cls=FakeProductRepository,
):
    """Wire up a handler with in-memory fakes and return all the pieces."""
    db = FakeDatabase(list(products))
    uow_factory = CountingUowFactory(db)
    order_repo = FakeOrderRepository(db, collisions=collisions, fatal=fatal)
    notifier = notifier or RecordingNotifier()
    handler = PlaceOrderHandler(
        uow_factory=uow_factory,
        product_repo=product_repo_cls(db),
        order_repo=order_repo,
        currency_table=currency_table or FakeCurrencyTable(),
        notifier=notifier,
        order_numbers=OrderNumberGenerator(clock=lambda: 1718000000.0, rng=random.Random(3)),
    )
    return db, uow_factory, order_repo, notifier, handler


def _cart(*items: tuple[str, int], currency: str | None = None, payment: str = "cod") -> CartRequest:
    return CartRequest(
        items=[CartItemSpec(pid, qty) for pid, qty in items],
        shipping_address=ShippingAddress("12 Rainbow St", "Amman", "Jordan"),
        customer_info=CustomerInfo(email="lina@example.com", mobile="0791234567", first_name="Lina"),
        payment_method=payment,
        currency=currency,
    )


# ── Happy path ───────────────────────────────────────────────────────────────


class TestPlaceOrderHappyPath:

    def test_single_item_order(self):
        db, _, _, _, handler = _setup(_product("A", price="10.00", stock=5))

        result = handler.handle(_cart(("A", 2)))

        assert result.total_amount == "20.00 USD"
        assert result.currency == "USD"
        assert result.status == "pending"
        assert result.order_number == "ORD1718000000000"
        assert db.stock_of("A") == 3

    def test_order_persisted_with_snapshot_lines(self):
        db, _, _, _, handler = _setup(_product("A", price="10.00"), _product("B", price="4.25", stock=8))

        result = handler.handle(_cart(("A", 1), ("B", 2)))

        order = db.orders[result.order_id]
        assert [(i.product_id, i.quantity.value) for i in order.items] == [("A", 1), ("B", 2)]
        assert order.total_amount == Money.of("18.50")
        assert order.customer_info.email == "lina@example.com"
        assert db.commits == 1

    def test_card_payment_completed_cod_pending(self):
        db, _, _, _, handler = _setup(_product("A", stock=10))

        card = handler.handle(_cart(("A", 1), payment="card"))
        cod = handler.handle(_cart(("A", 1), payment="cod"))

        assert db.orders[card.order_id].payment_status == PaymentStatus.COMPLETED
        assert db.orders[cod.order_id].payment_status == PaymentStatus.PENDING

    def test_price_snapshot_survives_catalog_change(self):
        db, _, _, _, handler = _setup(_product("A", price="10.00"))

        result = handler.handle(_cart(("A", 1)))
        db.products["A"].price = Money.of("99.00")

        order = db.orders[result.order_id]
        assert order.items[0].unit_price == Money.of("10.00")
        assert order.total_amount == Money.of("10.00")

    def test_large_cart_placed_in_one_unit_of_work(self):
        products = [_product(f"P{i}", price="1.00", stock=1) for i in range(60)]
        db, uow_factory, _, _, handler = _setup(*products)

        result = handler.handle(_cart(*[(p.id, 1) for p in products]))

        assert len(db.orders[result.order_id].items) == 60
        assert result.total_amount == "60.00 USD"
        assert uow_factory.created == 1
        assert db.rollbacks == 0


# ── Currency conversion ──────────────────────────────────────────────────────


class TestCurrencyConversion:

    def test_converts_with_table_rate(self):
        db, _, _, _, handler = _setup(_product("A", price="10.00"))

        result = handler.handle(_cart(("A", 2), currency="GBP"))

        order = db.orders[result.order_id]
        assert order.currency == "GBP"
        assert order.exchange_rate == Decimal("0.86")
        assert order.total_amount == Money.of("17.20", "GBP")

    def test_summary_total_keeps_three_decimal_precision(self):
        db, _, _, _, handler = _setup(_product("A", price="15.99"), currency_table=StaticCurrencyTable())

        result = handler.handle(_cart(("A", 1), currency="KWD"))

        assert result.total_amount == "5.2767 KWD"
        assert db.orders[result.order_id].total_amount == Money.of("5.2767", "KWD")

    @pytest.mark.parametrize("currency", [c.code for c in SUPPORTED_CURRENCIES])
    def test_every_supported_currency(self, currency):
        table = StaticCurrencyTable()
        db, _, _, _, handler = _setup(_product("A", price="15.99", stock=3), currency_table=table)

        result = handler.handle(_cart(("A", 3), currency=currency))

        rate = table.get_exchange_rate(currency)
        order = db.orders[result.order_id]
        assert order.items[0].unit_price == Money(Decimal("15.99") * rate, currency)
        assert order.total_amount == Money(Decimal("15.99") * rate * 3, currency)
        assert db.stock_of("A") == 0

    def test_unsupported_currency_rejected_before_reservation(self):
        db, uow_factory, _, _, handler = _setup(_product("A"))

        with pytest.raises(UnsupportedCurrencyError, match="Invalid currency"):
            handler.handle(_cart(("A", 1), currency="XYZ"))

        assert uow_factory.created == 0
        assert db.stock_of("A") == 5


# ── Reservation failures ─────────────────────────────────────────────────────


class TestReservationFailures:

    def test_insufficient_stock(self):
        db, _, _, notifier, handler = _setup(_product("A", stock=5))

        with pytest.raises(InsufficientStockError) as exc_info:
            handler.handle(_cart(("A", 10)))

        assert exc_info.value.available == 5
        assert exc_info.value.requested == 10
        assert db.stock_of("A") == 5
        assert db.orders == {}
        assert notifier.created == []

    def test_missing_product_after_valid_one(self):
        db, _, _, _, handler = _setup(_product("A", stock=5))

        with pytest.raises(ProductNotFoundError) as exc_info:
            handler.handle(_cart(("A", 1), ("B", 1)))

        assert exc_info.value.product_id == "B"
        assert db.stock_of("A") == 5
        assert db.orders == {}

    @pytest.mark.parametrize("failing_index", [0, 1, 2, 3])
    def test_failure_at_any_position_leaves_no_trace(self, failing_index):
        products = [_product(pid, stock=5) for pid in "ABCD"]
        db, _, _, _, handler = _setup(*products)
        items = [(pid, 1) for pid in "ABCD"]
        items[failing_index] = (items[failing_index][0], 6)

        with pytest.raises(InsufficientStockError):
            handler.handle(_cart(*items))

        assert all(db.stock_of(pid) == 5 for pid in "ABCD")
        assert db.orders == {}
        assert db.commits == 0

    def test_failed_attempt_can_be_repeated_identically(self):
        db, _, _, _, handler = _setup(_product("A", stock=1))

        for _ in range(2):
            with pytest.raises(InsufficientStockError):
                handler.handle(_cart(("A", 2)))

        assert db.stock_of("A") == 1
        assert db.orders == {}


# ── Commit and retry ─────────────────────────────────────────────────────────


class TestCommitRetry:

    def test_single_collision_is_retried(self):
        db, _, order_repo, _, handler = _setup(_product("A", stock=5), collisions=1)

        result = handler.handle(_cart(("A", 2)))

        assert len(order_repo.attempted_numbers) == 2
        assert result.order_number.startswith("ORD1718000000000-")
        assert db.commits == 1
        assert db.stock_of("A") == 3

    def test_two_collisions_fail_and_roll_back(self):
        db, _, order_repo, notifier, handler = _setup(_product("A", stock=5), collisions=2)

        with pytest.raises(OrderPersistenceError, match="Failed to create order"):
            handler.handle(_cart(("A", 2)))

        assert len(order_repo.attempted_numbers) == 2
        assert db.stock_of("A") == 5
        assert db.orders == {}
        assert notifier.created == []

    def test_fatal_write_failure_not_retried(self):
        db, _, order_repo, _, handler = _setup(_product("A"), fatal="items: not serializable")

        with pytest.raises(OrderPersistenceError):
            handler.handle(_cart(("A", 1)))

        assert len(order_repo.attempted_numbers) == 1
        assert db.stock_of("A") == 5


# ── Validation ───────────────────────────────────────────────────────────────


class TestValidation:

    @pytest.mark.parametrize("request_, message", [
        (CartRequest([], ShippingAddress("s", "c", "k"), CustomerInfo("e", "m"), "cod"), "at least one item"),
        (CartRequest([CartItemSpec("A", 0)], ShippingAddress("s", "c", "k"), CustomerInfo("e", "m"), "cod"), "must be positive"),
        (CartRequest([CartItemSpec("", 1)], ShippingAddress("s", "c", "k"), CustomerInfo("e", "m"), "cod"), "reference a product"),
        (CartRequest([CartItemSpec("A", 1)], ShippingAddress("s", "c", "k"), CustomerInfo("e", ""), "cod"), "email and mobile"),
        (CartRequest([CartItemSpec("A", 1)], ShippingAddress("s", "", "k"), CustomerInfo("e", "m"), "cod"), "shipping address"),
        (CartRequest([CartItemSpec("A", 1)], ShippingAddress("s", "c", "k"), CustomerInfo("e", "m"), "cheque"), "payment method"),
    ])
    def test_rejected_before_unit_of_work(self, request_, message):
        db, uow_factory, _, _, handler = _setup(_product("A"))

        with pytest.raises(ValidationError, match=message):
            handler.handle(request_)

        assert uow_factory.created == 0
        assert db.stock_of("A") == 5


# ── Notifications ────────────────────────────────────────────────────────────


class TestNotifications:

    def test_order_created_notified_after_commit(self):
        db, _, _, notifier, handler = _setup(_product("A", stock=50))

        result = handler.handle(_cart(("A", 1)))

        [order] = notifier.created
        assert order.id == result.order_id
        assert notifier.alerts == []

    def test_notifier_failure_does_not_fail_order(self, caplog):
        db, _, _, _, handler = _setup(_product("A", stock=5), notifier=FailingNotifier())

        with caplog.at_level("WARNING"):
            result = handler.handle(_cart(("A", 2)))

        assert result.order_id in db.orders
        assert db.stock_of("A") == 3
        assert "notification failed" in caplog.text

    def test_low_stock_alerts_one_per_product(self):
        db, _, _, notifier, handler = _setup(
            _product("A", stock=12), _product("B", stock=20), _product("C", stock=1),
        )

        handler.handle(_cart(("A", 2), ("B", 1), ("A", 4), ("C", 1)))

        alerts = {a.product_id: a for a in notifier.alerts}
        assert set(alerts) == {"A", "C"}
        assert len(notifier.alerts) == 2
        assert alerts["A"].current_stock == 6
        assert alerts["A"].severity is AlertSeverity.MEDIUM
        assert alerts["C"].severity is AlertSeverity.CRITICAL


# ── Cancellation and unexpected errors ───────────────────────────────────────


class TestCancellation:

    def test_cancelled_before_start(self):
        db, _, _, notifier, handler = _setup(_product("A"))
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(OperationCancelledError):
            handler.handle(_cart(("A", 1)), cancel=cancel)

        assert db.stock_of("A") == 5
        assert db.orders == {}
        assert notifier.created == []

    def test_cancelled_mid_reservation(self):
        cancel = threading.Event()

        class CancellingRepository(FakeProductRepository):
            def get_for_update(self, uow, product_id):
                if product_id == "B":
                    cancel.set()
                return super().get_for_update(uow, product_id)

        db, _, _, _, handler = _setup(
            _product("A"), _product("B"), _product("C"),
            product_repo_cls=CancellingRepository,
        )

        with pytest.raises(OperationCancelledError):
            handler.handle(_cart(("A", 1), ("B", 1), ("C", 1)), cancel=cancel)

        assert [db.stock_of(pid) for pid in "ABC"] == [5, 5, 5]
        assert db.commits == 0


class TestUnexpectedErrors:

    def test_unexpected_error_wrapped_and_rolled_back(self):

        class BrokenRepository(FakeProductRepository):
            def save(self, uow, product):
                raise RuntimeError("disk on fire")

        db, _, _, _, handler = _setup(_product("A"), product_repo_cls=BrokenRepository)

        with pytest.raises(InternalError, match="Failed to create order") as exc_info:
            handler.handle(_cart(("A", 1)))

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert db.stock_of("A") == 5
        assert db.rollbacks == 1
