"""Application service: Show Category use case (query)."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository


class ShowCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self, id_or_slug: str) -> Category:
        category = self._category_repo.get_by_id(id_or_slug)
        if category is None:
            category = self._category_repo.get_by_slug(id_or_slug)
        if category is None:
            raise EntityNotFoundError(f"Category '{id_or_slug}' not found")
        return category
