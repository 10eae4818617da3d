import click
import structlog

from storefront.domain.model.principal import Principal, Role
from storefront.infrastructure.cli.category_commands import (
    category_add,
    category_delete,
    category_list,
    category_products,
    category_show,
    category_update,
)
from storefront.infrastructure.cli.inventory_commands import inventory_show
from storefront.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_mine,
    order_payment,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from storefront.infrastructure.config import Settings
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--user-id",
    envvar="STOREFRONT_USER_ID",
    default="anonymous",
    show_default=True,
    help="ID of the authenticated caller.",
)
@click.option(
    "--role",
    envvar="STOREFRONT_ROLE",
    type=click.Choice([r.value for r in Role]),
    default=Role.CUSTOMER.value,
    show_default=True,
    help="Role of the authenticated caller.",
)
@click.pass_context
def cli(ctx: click.Context, user_id: str, role: str) -> None:
    """Storefront — orders, products and inventory"""
    configure_logging(Settings.from_env())
    structlog.contextvars.bind_contextvars(principal_id=user_id, role=role)
    ctx.obj = Principal(id=user_id, role=Role(role))


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Inspect inventory."""


@cli.group()
def category() -> None:
    """Manage categories."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_mine)
order.add_command(order_payment)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
inventory.add_command(inventory_show)
category.add_command(category_add)
category.add_command(category_delete)
category.add_command(category_list)
category.add_command(category_products)
category.add_command(category_show)
category.add_command(category_update)
