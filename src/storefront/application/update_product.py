"""Application service: Update Product use case (administrators only)."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.principal import Principal
from storefront.domain.model.product import Product, slugify
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal,
        product_id: str,
        name: str | None = None,
        price: str | None = None,
        quantity: int | None = None,
        is_published: bool | None = None,
    ) -> Product:
        """Update catalog fields and/or the stock level of a product.

        Price changes do NOT affect existing orders — they captured a
        price snapshot at creation time.  The reserved count is never
        set directly; only orders move it.
        """
        principal.require_admin()

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if name is not None:
            clash = self._product_repo.get_by_slug(slugify(name))
            if clash is not None and clash.id != product.id:
                raise ValidationError("Product with this name already exists")
            product.rename(name)
        if price is not None:
            product.update_price(Money.of(price))
        if quantity is not None:
            product.inventory.restock(quantity)
        if is_published is not None:
            product.is_published = is_published

        self._product_repo.save(product)
        return product
