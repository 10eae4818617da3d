"""Application service: Add Product use case (administrators only)."""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.principal import Principal
from storefront.domain.model.product import Product, slugify
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(
        self,
        principal: Principal,
        name: str,
        price: str,
        sku: str,
        quantity: int,
        category_ids: list[str] | None = None,
        is_published: bool = False,
    ) -> Product:
        """Add a new product to the catalog with its initial stock."""
        principal.require_admin()

        if name and self._product_repo.get_by_slug(slugify(name)) is not None:
            raise ValidationError("Product with this name already exists")

        for category_id in category_ids or []:
            if self._category_repo.get_by_id(category_id) is None:
                raise EntityNotFoundError(f"Category not found with ID: {category_id}")

        product = Product.create(
            id=self._product_repo.next_id(),
            name=name,
            sku=sku,
            price=Money.of(price),
            quantity=quantity,
            category_ids=category_ids,
            is_published=is_published,
        )
        self._product_repo.save(product)
        logger.info("product.added", product_id=product.id, quantity=quantity)
        return product
