"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.list_products import ListProductsHandler
from storefront.application.show_product import ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductPage, ProductQuery
from storefront.infrastructure.bootstrap import category_repository, product_repository
from storefront.infrastructure.cli.errors import to_click_error


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--sku", required=True, help="Stock keeping unit.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
@click.option("--category", "categories", multiple=True, help="Category ID (repeatable).")
@click.option("--published/--unpublished", default=False, help="Visible in the storefront.")
@click.pass_obj
def product_add(
    principal,
    name: str,
    price: str,
    sku: str,
    quantity: int,
    categories: tuple[str, ...],
    published: bool,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(
        product_repo=product_repository(),
        category_repo=category_repository(),
    )

    try:
        product = handler.handle(
            principal,
            name=name,
            price=price,
            sku=sku,
            quantity=quantity,
            category_ids=list(categories),
            is_published=published,
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.inventory.quantity} in stock)"
    )


def display_products(page: ProductPage) -> None:
    if not page.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'SKU':<12} {'Price':>10} {'Available':>10}")
    click.echo("-" * 62)
    for p in page.products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.sku:<12} {str(p.price):>10} "
            f"{p.inventory.available:>10}"
        )
    click.echo(
        f"Page {page.page}/{page.total_pages} "
        f"({page.count} shown, {page.total} total)"
    )


def catalog_listing_options(command):
    """Options shared by the product listing commands."""
    options = [
        click.option("--min-price", default=None, help="Lowest price (e.g. 10.00)."),
        click.option("--max-price", default=None, help="Highest price (e.g. 50.00)."),
        click.option("--in-stock", is_flag=True, help="Only products with stock available."),
        click.option("--all", "include_unpublished", is_flag=True,
                     help="Include unpublished products (administrators only)."),
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


def build_product_query(
    category_id: str | None,
    min_price: str | None,
    max_price: str | None,
    in_stock: bool,
    include_unpublished: bool,
    page: int,
    limit: int,
    sort_by: str,
    direction: str,
) -> ProductQuery:
    return ProductQuery(
        category_id=category_id,
        min_price=Money.of(min_price) if min_price is not None else None,
        max_price=Money.of(max_price) if max_price is not None else None,
        in_stock=in_stock,
        published_only=not include_unpublished,
        page=page,
        limit=limit,
        sort_by=sort_by,
        descending=direction == "desc",
    )


@click.command("list")
@catalog_listing_options
@click.option("--category", "category_id", default=None, help="Filter by category ID.")
@click.pass_obj
def product_list(principal, category_id: str | None, **listing) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository())

    try:
        result = handler.handle(principal, build_product_query(category_id, **listing))
    except DomainException as exc:
        raise to_click_error(exc)

    display_products(result)


@click.command("show")
@click.option("--id", "id_or_slug", required=True, help="Product ID or slug.")
@click.pass_obj
def product_show(principal, id_or_slug: str) -> None:
    """Show one product."""
    handler = ShowProductHandler(product_repo=product_repository())

    try:
        p = handler.handle(principal, id_or_slug)
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Product #{p.id}  {p.name}  ({p.slug})")
    click.echo(f"SKU:        {p.sku}")
    click.echo(f"Price:      {p.price}")
    click.echo(f"Published:  {'yes' if p.is_published else 'no'}")
    click.echo(f"Categories: {', '.join(p.category_ids) or '-'}")
    click.echo(
        f"Stock:      {p.inventory.quantity} owned, {p.inventory.reserved} reserved, "
        f"{p.inventory.available} available"
    )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--quantity", default=None, type=int, help="New total units in stock.")
@click.option("--publish", is_flag=True, help="Make the product visible.")
@click.option("--unpublish", is_flag=True, help="Hide the product.")
@click.pass_obj
def product_update(
    principal,
    product_id: str,
    name: str | None,
    price: str | None,
    quantity: int | None,
    publish: bool,
    unpublish: bool,
) -> None:
    """Update a product's name, price, stock or visibility."""
    if publish and unpublish:
        raise click.UsageError("--publish and --unpublish are mutually exclusive")
    published = True if publish else False if unpublish else None

    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        product = handler.handle(
            principal,
            product_id=product_id,
            name=name,
            price=price,
            quantity=quantity,
            is_published=published,
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(
        f"Product #{product.id} updated: {product.name} at {product.price}, "
        f"{product.inventory.available} available"
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(principal, product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(principal, product_id=product_id)
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Product #{product_id} deleted.")
