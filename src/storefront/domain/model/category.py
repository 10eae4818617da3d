"""Category aggregate — groups products in the catalog."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import slugify


@dataclass
class Category:

    id: str
    name: str
    description: str = ""

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @staticmethod
    def create(id: str, name: str, description: str = "") -> Category:
        return Category(id=id, name=_clean_name(name), description=description.strip())

    def rename(self, new_name: str) -> None:
        self.name = _clean_name(new_name)


def _clean_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Category name is required")
    return name.strip()
