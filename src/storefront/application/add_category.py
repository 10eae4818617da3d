"""Application service: Add Category use case (administrators only)."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.category import Category
from storefront.domain.model.principal import Principal
from storefront.domain.model.product import slugify
from storefront.domain.repository.category_repository import CategoryRepository


class AddCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self, principal: Principal, name: str, description: str = "") -> Category:
        principal.require_admin()

        if name and self._category_repo.get_by_slug(slugify(name)) is not None:
            raise ValidationError(f"Category '{name.strip()}' already exists")

        category = Category.create(
            id=self._category_repo.next_id(),
            name=name,
            description=description,
        )
        self._category_repo.save(category)
        return category
