"""Abstract repository for Product aggregate, plus the catalog query it answers.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money

MAX_PAGE_SIZE = 100

SORT_KEYS: dict[str, Callable[[Product], Any]] = {
    "created_at": lambda p: p.created_at,
    "name": lambda p: p.name.lower(),
    "price": lambda p: p.price.amount,
    "id": lambda p: int(p.id),
}


@dataclass(frozen=True)
class ProductQuery:
    """Filtering, sorting and pagination for catalog listings.

    The storefront shows published products only; ``published_only=False``
    is the administrator's view of the whole catalog.
    """

    category_id: str | None = None
    min_price: Money | None = None
    max_price: Money | None = None
    in_stock: bool = False
    published_only: bool = True
    page: int = 1
    limit: int = 10
    sort_by: str = "created_at"
    descending: bool = True

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be a positive integer")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if self.sort_by not in SORT_KEYS:
            raise ValidationError(
                f"Cannot sort by '{self.sort_by}'. "
                f"Choose one of: {', '.join(sorted(SORT_KEYS))}"
            )
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise ValidationError("Minimum price cannot exceed maximum price")

    def matches(self, product: Product) -> bool:
        if self.published_only and not product.is_published:
            return False
        if self.category_id is not None and self.category_id not in product.category_ids:
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.in_stock and product.inventory.available <= 0:
            return False
        return True

    def select(self, products: list[Product]) -> ProductPage:
        """Apply the query to an in-memory collection of products."""
        matching = [p for p in products if self.matches(p)]
        matching.sort(key=SORT_KEYS[self.sort_by], reverse=self.descending)
        offset = (self.page - 1) * self.limit
        return ProductPage(
            products=matching[offset:offset + self.limit],
            total=len(matching),
            page=self.page,
            limit=self.limit,
        )


@dataclass(frozen=True)
class ProductPage:

    products: list[Product] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def count(self) -> int:
        return len(self.products)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_slug(self, slug: str) -> Product | None:
        """Return a product by its slug, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def find(self, query: ProductQuery) -> ProductPage:
        """Return one page of products matching the query."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product.

        Implementations must compare ``product.version`` with the stored
        version and raise ``ConcurrencyError`` if they differ; on success
        the version is incremented on both the record and ``product``.
        """

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product from the catalog."""
