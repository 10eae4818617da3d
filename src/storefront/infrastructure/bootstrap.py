"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(settings: Settings | None = None) -> JsonProductRepository:
    settings = settings or Settings.from_env()
    return JsonProductRepository(settings.data_dir / "products.json")


def category_repository(settings: Settings | None = None) -> JsonCategoryRepository:
    settings = settings or Settings.from_env()
    return JsonCategoryRepository(settings.data_dir / "categories.json")


def order_repository(settings: Settings | None = None) -> JsonOrderRepository:
    settings = settings or Settings.from_env()
    return JsonOrderRepository(settings.data_dir / "orders.json")
