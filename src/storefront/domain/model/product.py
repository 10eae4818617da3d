"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is adjusted, products are added and removed from the
catalog.  Orders only hold a snapshot of name and price.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.inventory import Inventory
from storefront.domain.model.value_objects import Money

MAX_NAME_LENGTH = 100

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """'Blue Widget (XL)' -> 'blue-widget-xl'."""
    return _NON_SLUG_CHARS.sub("-", name.lower()).strip("-")


@dataclass
class Product:
    """A product in the catalog, carrying its own inventory ledger.

    ``version`` is bumped by the repository on every successful save; a
    save based on an older version is rejected so concurrent inventory
    writers can never overwrite each other.
    """

    id: str
    name: str
    sku: str
    price: Money
    inventory: Inventory
    category_ids: list[str] = field(default_factory=list)
    is_published: bool = False
    version: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @staticmethod
    def create(
        id: str,
        name: str,
        sku: str,
        price: Money,
        quantity: int,
        category_ids: list[str] | None = None,
        is_published: bool = False,
    ) -> Product:
        """Create a new product, enforcing catalog rules."""
        name = _clean_name(name)
        if not sku or not sku.strip():
            raise ValidationError("SKU is required")
        return Product(
            id=id,
            name=name,
            sku=sku.strip(),
            price=price,
            inventory=Inventory(quantity=quantity),
            category_ids=list(category_ids or []),
            is_published=is_published,
        )

    def rename(self, new_name: str) -> None:
        self.name = _clean_name(new_name)

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price


def _clean_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Product name is required")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Product name cannot exceed {MAX_NAME_LENGTH} characters")
    return name
