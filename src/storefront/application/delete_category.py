"""Application service: Delete Category use case (administrators only).

A category still assigned to products cannot be deleted; reassign or
delete those products first.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.principal import Principal
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class DeleteCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, principal: Principal, category_id: str) -> None:
        principal.require_admin()

        if self._category_repo.get_by_id(category_id) is None:
            raise EntityNotFoundError(f"Category not found with ID: {category_id}")

        in_use = [p for p in self._product_repo.list_all() if category_id in p.category_ids]
        if in_use:
            raise ValidationError(
                f"Category {category_id} is assigned to {len(in_use)} product(s)",
                [f"{p.name} (#{p.id})" for p in in_use],
            )

        self._category_repo.delete(category_id)
        logger.info("category.deleted", category_id=category_id)
