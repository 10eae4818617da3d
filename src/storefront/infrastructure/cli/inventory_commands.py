"""CLI commands for inventory inspection."""

from __future__ import annotations

import click

from storefront.application.show_inventory import ShowInventoryHandler
from storefront.infrastructure.bootstrap import product_repository


@click.command("show")
def inventory_show() -> None:
    """Show current inventory levels."""
    handler = ShowInventoryHandler(product_repo=product_repository())
    lines = handler.handle()

    if not lines:
        click.echo("No products found.")
        return

    click.echo(
        f"{'ID':<6} {'Product':<20} {'Quantity':>9} {'Reserved':>10} {'Available':>10}"
    )
    click.echo("-" * 59)
    for line in lines:
        click.echo(
            f"{line.product_id:<6} {line.product_name:<20} {line.quantity:>9} "
            f"{line.reserved:>10} {line.available:>10}"
        )
