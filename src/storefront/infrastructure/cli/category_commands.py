"""CLI commands for the Category aggregate."""

from __future__ import annotations

import click

from storefront.application.add_category import AddCategoryHandler
from storefront.application.delete_category import DeleteCategoryHandler
from storefront.application.list_products import ListCategoryProductsHandler
from storefront.application.show_category import ShowCategoryHandler
from storefront.application.update_category import UpdateCategoryHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import category_repository, product_repository
from storefront.infrastructure.cli.errors import to_click_error
from storefront.infrastructure.cli.product_commands import (
    build_product_query,
    catalog_listing_options,
    display_products,
)


@click.command("add")
@click.option("--name", required=True, help="Category name.")
@click.option("--description", default="", help="Optional description.")
@click.pass_obj
def category_add(principal, name: str, description: str) -> None:
    """Add a new category."""
    handler = AddCategoryHandler(category_repo=category_repository())

    try:
        category = handler.handle(principal, name=name, description=description)
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Category #{category.id} '{category.name}' added ({category.slug})")


@click.command("list")
def category_list() -> None:
    """List all categories."""
    categories = category_repository().list_all()

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Slug':<20}")
    click.echo("-" * 48)
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<20} {c.slug:<20}")


@click.command("show")
@click.option("--id", "id_or_slug", required=True, help="Category ID or slug.")
def category_show(id_or_slug: str) -> None:
    """Show one category."""
    handler = ShowCategoryHandler(category_repo=category_repository())

    try:
        category = handler.handle(id_or_slug)
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Category #{category.id}  {category.name}  ({category.slug})")
    if category.description:
        click.echo(category.description)


@click.command("update")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.pass_obj
def category_update(
    principal,
    category_id: str,
    name: str | None,
    description: str | None,
) -> None:
    """Rename or re-describe a category."""
    handler = UpdateCategoryHandler(category_repo=category_repository())

    try:
        category = handler.handle(
            principal, category_id, name=name, description=description
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Category #{category.id} updated: {category.name} ({category.slug})")


@click.command("delete")
@click.option("--id", "category_id", required=True, help="Category ID.")
@click.pass_obj
def category_delete(principal, category_id: str) -> None:
    """Delete a category no product is assigned to."""
    handler = DeleteCategoryHandler(
        category_repo=category_repository(),
        product_repo=product_repository(),
    )

    try:
        handler.handle(principal, category_id)
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Category #{category_id} deleted.")


@click.command("products")
@catalog_listing_options
@click.option("--id", "id_or_slug", required=True, help="Category ID or slug.")
@click.pass_obj
def category_products(principal, id_or_slug: str, **listing) -> None:
    """List the products in a category."""
    handler = ListCategoryProductsHandler(
        category_repo=category_repository(),
        product_repo=product_repository(),
    )

    try:
        result = handler.handle(principal, id_or_slug, build_product_query(None, **listing))
    except DomainException as exc:
        raise to_click_error(exc)

    display_products(result)
