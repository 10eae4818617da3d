"""Application services: catalog listings (queries).

``ListProductsHandler`` is the storefront listing, published products
only unless an administrator asks for the whole catalog;
``ListCategoryProductsHandler`` is the same listing narrowed to one
category, addressed by ID or slug.
"""

from __future__ import annotations

from dataclasses import replace

from storefront.application.show_category import ShowCategoryHandler
from storefront.domain.model.principal import Principal
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import (
    ProductPage,
    ProductQuery,
    ProductRepository,
)


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, principal: Principal, query: ProductQuery | None = None) -> ProductPage:
        query = query or ProductQuery()
        if not query.published_only:
            principal.require_admin()
        return self._product_repo.find(query)


class ListCategoryProductsHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal,
        id_or_slug: str,
        query: ProductQuery | None = None,
    ) -> ProductPage:
        category = ShowCategoryHandler(self._category_repo).handle(id_or_slug)
        query = replace(query or ProductQuery(), category_id=category.id)
        return ListProductsHandler(self._product_repo).handle(principal, query)
