"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from storefront.application.create_order import CreateOrderHandler
from storefront.application.delete_order import DeleteOrderHandler
from storefront.application.dto import AddressSpec, OrderDTO, OrderItemSpec, OrderPageDTO
from storefront.application.list_orders import ListOrdersHandler, ListUserOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order import UpdateOrderHandler
from storefront.application.update_payment import UpdatePaymentHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import (
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingMethod,
)
from storefront.domain.repository.order_repository import OrderQuery
from storefront.infrastructure.bootstrap import order_repository, product_repository
from storefront.infrastructure.cli.errors import to_click_error


def _choices(enum_cls) -> click.Choice:
    return click.Choice([member.value for member in enum_cls])


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '1:3,2:5:blue' into OrderItemSpec list (productId:qty[:variant])."""
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        parts = [p.strip() for p in entry.strip().split(":")]
        if len(parts) not in (2, 3) or not parts[0]:
            raise click.BadParameter(
                f"Invalid item format '{entry.strip()}'. Expected 'ProductId:Quantity[:Variant]'."
            )
        try:
            qty = int(parts[1])
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{parts[1]}' for product '{parts[0]}'."
            )
        variant = parts[2] if len(parts) == 3 else None
        specs.append(OrderItemSpec(product_id=parts[0], quantity=qty, variant=variant))
    return specs


def _parse_address(raw: str) -> AddressSpec:
    """Parse 'street;city;state;postal code[;country]' into an AddressSpec."""
    parts = [p.strip() for p in raw.split(";")]
    if len(parts) not in (4, 5):
        raise click.BadParameter(
            f"Invalid address '{raw}'. Expected 'Street;City;State;PostalCode[;Country]'."
        )
    return AddressSpec(*parts)


def _parse_details(pairs: tuple[str, ...]) -> dict[str, str]:
    details: dict[str, str] = {}
    for pair in pairs:
        if "=" not in pair:
            raise click.BadParameter(f"Invalid detail '{pair}'. Expected 'key=value'.")
        key, value = pair.split("=", 1)
        details[key.strip()] = value.strip()
    return details


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Bill to:  {dto.billing_address}")
    click.echo(f"Payment:  {dto.payment_method}   Shipping: {dto.shipping_method}")
    if dto.tracking_number:
        click.echo(f"Tracking: {dto.tracking_number}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Variant':<10} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.variant or '':<10} {item.quantity:>5} "
            f"{item.price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Subtotal':<38} {dto.subtotal:>20}")
    click.echo(f"  {'Shipping':<38} {dto.shipping_cost:>20}")
    click.echo(f"  {'Tax':<38} {dto.tax:>20}")
    click.echo(f"  {'Order Total':<38} {dto.total_amount:>20}")


def _display_page(page: OrderPageDTO) -> None:
    if not page.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Customer':<12} {'Status':<12} {'Payment':<12} {'Total':>10}  Created")
    click.echo("-" * 78)
    for dto in page.orders:
        click.echo(
            f"{dto.id:<6} {dto.user_id:<12} {dto.status:<12} {dto.payment_status:<12} "
            f"{dto.total_amount:>10}  {dto.created_at}"
        )
    click.echo(
        f"Page {page.current_page}/{page.total_pages} "
        f"({page.count} shown, {page.total} total)"
    )


def _listing_options(command):
    """Options shared by the two listing commands."""
    options = [
        click.option("--status", type=_choices(OrderStatus), default=None, help="Filter by status."),
        click.option("--page", type=int, default=1, show_default=True),
        click.option("--limit", type=int, default=10, show_default=True),
        click.option("--sort-by", default="created_at", show_default=True),
        click.option(
            "--order", "direction", type=click.Choice(["asc", "desc"]),
            default="desc", show_default=True,
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductId:Qty[:Variant],...'.")
@click.option("--ship-to", required=True, help="'Street;City;State;PostalCode[;Country]'.")
@click.option("--bill-to", default=None, help="Billing address (defaults to --ship-to).")
@click.option("--payment-method", required=True, type=_choices(PaymentMethod))
@click.option(
    "--shipping-method", type=_choices(ShippingMethod),
    default=ShippingMethod.STANDARD.value, show_default=True,
)
@click.option("--notes", default=None, help="Free-form notes.")
@click.pass_obj
def order_create(
    principal,
    items: str,
    ship_to: str,
    bill_to: str | None,
    payment_method: str,
    shipping_method: str,
    notes: str | None,
) -> None:
    """Create a new order (reserves inventory)."""
    specs = _parse_items(items)
    shipping_address = _parse_address(ship_to)
    billing_address = _parse_address(bill_to) if bill_to else None

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(
            principal,
            item_specs=specs,
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=payment_method,
            shipping_method=shipping_method,
            notes=notes,
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Order #{dto.id} created — inventory reserved.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(principal, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(principal, order_id)
    except DomainException as exc:
        raise to_click_error(exc)

    _display_order(dto)


@click.command("list")
@_listing_options
@click.option("--user", "user_id", default=None, help="Filter by customer ID.")
@click.option("--start-date", type=click.DateTime(), default=None, help="Created on/after.")
@click.option("--end-date", type=click.DateTime(), default=None, help="Created on/before.")
@click.pass_obj
def order_list(
    principal,
    status: str | None,
    page: int,
    limit: int,
    sort_by: str,
    direction: str,
    user_id: str | None,
    start_date: datetime | None,
    end_date: datetime | None,
) -> None:
    """List all orders (administrators only)."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        query = OrderQuery(
            status=OrderStatus(status) if status else None,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
            page=page,
            limit=limit,
            sort_by=sort_by,
            descending=direction == "desc",
        )
        result = handler.handle(principal, query)
    except DomainException as exc:
        raise to_click_error(exc)

    _display_page(result)


@click.command("mine")
@_listing_options
@click.pass_obj
def order_mine(
    principal,
    status: str | None,
    page: int,
    limit: int,
    sort_by: str,
    direction: str,
) -> None:
    """List the caller's own orders."""
    handler = ListUserOrdersHandler(order_repo=order_repository())

    try:
        query = OrderQuery(
            status=OrderStatus(status) if status else None,
            page=page,
            limit=limit,
            sort_by=sort_by,
            descending=direction == "desc",
        )
        result = handler.handle(principal, query)
    except DomainException as exc:
        raise to_click_error(exc)

    _display_page(result)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", required=True, type=_choices(OrderStatus), help="New status.")
@click.option("--tracking-number", default=None, help="Carrier tracking number.")
@click.option("--notes", default=None, help="Replace the order notes.")
@click.pass_obj
def order_status(
    principal,
    order_id: int,
    status: str,
    tracking_number: str | None,
    notes: str | None,
) -> None:
    """Change an order's status (cancel releases stock, ship consumes it)."""
    handler = UpdateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(
            principal,
            order_id,
            status=status,
            tracking_number=tracking_number,
            notes=notes,
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("payment")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", required=True, type=_choices(PaymentStatus), help="Payment status.")
@click.option("--detail", "details", multiple=True, help="Payment detail as key=value (repeatable).")
@click.pass_obj
def order_payment(principal, order_id: int, status: str, details: tuple[str, ...]) -> None:
    """Record the payment status of an order."""
    handler = UpdatePaymentHandler(order_repo=order_repository())

    try:
        dto = handler.handle(
            principal,
            order_id,
            payment_status=status,
            payment_details=_parse_details(details),
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(
        f"Order #{dto.id} payment is {dto.payment_status} (order status={dto.status})."
    )


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.pass_obj
def order_delete(principal, order_id: int) -> None:
    """Delete a pending order (releases reserved inventory)."""
    handler = DeleteOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(principal, order_id)
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Order #{order_id} deleted.")
