"""CLI commands for the product catalog (read-only)."""

from __future__ import annotations

import click

from checkout.infrastructure.bootstrap import show_inventory_handler


@click.command("list")
def product_list() -> None:
    """List products with their stock levels."""
    lines = show_inventory_handler().handle()

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<8} {'Name':<24} {'Price':>12} {'Stock':>7}  Status")
    click.echo("-" * 68)
    for line in lines:
        click.echo(
            f"{line.product_id:<8} {line.name:<24} {line.price:>12} {line.stock:>7}  {line.status}"
        )
