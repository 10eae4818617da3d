"""Application service: Show Product use case (query)."""

from __future__ import annotations

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.principal import Principal
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, principal: Principal, id_or_slug: str) -> Product:
        """Look a product up by ID, then by slug.

        Unpublished products exist only for administrators.
        """
        product = self._product_repo.get_by_id(id_or_slug)
        if product is None:
            product = self._product_repo.get_by_slug(id_or_slug)
        if product is None or not (product.is_published or principal.is_admin):
            raise EntityNotFoundError(f"Product '{id_or_slug}' not found")
        return product
