"""Application service: Update Category use case (administrators only)."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.category import Category
from storefront.domain.model.principal import Principal
from storefront.domain.model.product import slugify
from storefront.domain.repository.category_repository import CategoryRepository


class UpdateCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(
        self,
        principal: Principal,
        category_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> Category:
        principal.require_admin()

        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category not found with ID: {category_id}")

        if name is not None:
            clash = self._category_repo.get_by_slug(slugify(name))
            if clash is not None and clash.id != category.id:
                raise ValidationError(f"Category '{name.strip()}' already exists")
            category.rename(name)
        if description is not None:
            category.description = description.strip()

        self._category_repo.save(category)
        return category
