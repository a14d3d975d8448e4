"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from checkout.application.dto import CartItemSpec, CartRequest, OrderDTO
from checkout.domain.exceptions import DomainException
from checkout.domain.model.order import OrderStatus, PaymentMethod, PaymentStatus
from checkout.domain.model.value_objects import BASE_CURRENCY, CustomerInfo, ShippingAddress
from checkout.infrastructure.bootstrap import (
    list_orders_handler,
    place_order_handler,
    show_order_handler,
    update_order_status_handler,
)


def _fail(exc: DomainException) -> click.ClickException:
    return click.ClickException(f"{exc.kind}: {exc}")


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'p1:3,p2:5' into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(CartItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


@click.command("place")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--street", required=True, help="Shipping street.")
@click.option("--city", required=True, help="Shipping city.")
@click.option("--country", required=True, help="Shipping country.")
@click.option("--email", required=True, help="Customer email.")
@click.option("--mobile", required=True, help="Customer mobile number.")
@click.option("--first-name", default=None, help="Customer first name.")
@click.option("--last-name", default=None, help="Customer last name.")
@click.option("--secondary-mobile", default=None, help="Alternative mobile number.")
@click.option(
    "--payment-method",
    type=click.Choice([m.value for m in PaymentMethod]),
    default=PaymentMethod.COD.value,
    show_default=True,
    help="Card payments must already be authorized.",
)
@click.option("--currency", default=BASE_CURRENCY, show_default=True, help="Order currency code.")
def order_place(
    items: str,
    street: str,
    city: str,
    country: str,
    email: str,
    mobile: str,
    first_name: str | None,
    last_name: str | None,
    secondary_mobile: str | None,
    payment_method: str,
    currency: str,
) -> None:
    """Place an order, reserving stock for every item."""
    request = CartRequest(
        items=_parse_items(items),
        shipping_address=ShippingAddress(street=street, city=city, country=country),
        customer_info=CustomerInfo(
            email=email,
            mobile=mobile,
            first_name=first_name,
            last_name=last_name,
            secondary_mobile=secondary_mobile,
        ),
        payment_method=payment_method,
        currency=currency.upper(),
    )

    try:
        summary = place_order_handler().handle(request)
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order {summary.order_number} placed  (id={summary.order_id}, status={summary.status})")
    click.echo(f"Total: {summary.total_amount}")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  (id={dto.id}, status={dto.status})")
    click.echo(f"Customer: {dto.customer} <{dto.email}>, {dto.mobile}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Payment:  {dto.payment_method} ({dto.payment_status})")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Rate:     1 {BASE_CURRENCY} = {dto.exchange_rate} {dto.currency}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*59}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*59}")
    click.echo(f"  {'Order Total':<30} {dto.total_amount:>29}")


@click.command("show")
@click.option("--id", "order_id", type=int, default=None, help="Order ID to display.")
@click.option("--number", "order_number", default=None, help="Order number to display.")
def order_show(order_id: int | None, order_number: str | None) -> None:
    """Show details of an existing order."""
    try:
        dto = show_order_handler().handle(order_id=order_id, order_number=order_number)
    except DomainException as exc:
        raise _fail(exc)

    _display_order(dto)


@click.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in OrderStatus]),
    default=None,
    help="Only show orders in this status.",
)
def order_list(status: str | None) -> None:
    """List orders, newest first."""
    orders = list_orders_handler().handle(status=status)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<22} {'Status':<11} {'Total':>16}  Customer")
    click.echo("-" * 72)
    for o in orders:
        click.echo(f"{o.id:<6} {o.order_number:<22} {o.status:<11} {o.total_amount:>16}  {o.customer}")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--set", "status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New order status.",
)
@click.option(
    "--payment",
    "payment_status",
    type=click.Choice([s.value for s in PaymentStatus]),
    default=None,
    help="New payment status.",
)
def order_status(order_id: int, status: str, payment_status: str | None) -> None:
    """Update an order's status."""
    try:
        dto = update_order_status_handler().handle(
            order_id, status, payment_status=payment_status
        )
    except DomainException as exc:
        raise _fail(exc)

    click.echo(f"Order {dto.order_number} is now {dto.status} (payment {dto.payment_status}).")
