import click

from checkout.infrastructure.bootstrap import shutdown_notifiers
from checkout.infrastructure.cli.order_commands import (
    order_list,
    order_place,
    order_show,
    order_status,
)
from checkout.infrastructure.cli.product_commands import product_list
from checkout.infrastructure.config import Settings
from checkout.infrastructure.logging_config import setup_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Checkout: transactional order placement."""
    config = Settings.from_env()
    setup_logging("DEBUG" if verbose else config.log_level, config.log_file)
    ctx.call_on_close(shutdown_notifiers)


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Browse the product catalog."""


# Register subcommands
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_list)
