"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ConcurrencyError
from storefront.domain.model.inventory import Inventory
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import (
    ProductPage,
    ProductQuery,
    ProductRepository,
)
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        records = self._file.load()
        if not records:
            return "1"
        return str(max(int(r["id"]) for r in records) + 1)

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_slug(self, slug: str) -> Product | None:
        for product in self.list_all():
            if product.slug == slug:
                return product
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def find(self, query: ProductQuery) -> ProductPage:
        return query.select(self.list_all())

    def save(self, product: Product) -> None:
        with self._file.locked():
            records = self._file.load()
            index = next(
                (i for i, raw in enumerate(records) if raw["id"] == product.id), None
            )
            stored_version = records[index]["version"] if index is not None else 0
            if stored_version != product.version:
                raise ConcurrencyError(
                    f"Product {product.id} was modified concurrently "
                    f"(expected version {product.version}, found {stored_version})"
                )

            product.version += 1
            if index is None:
                records.append(self._to_raw(product))
            else:
                records[index] = self._to_raw(product)
            self._file.persist(records)

    def delete(self, product_id: str) -> None:
        with self._file.locked():
            records = [r for r in self._file.load() if r["id"] != product_id]
            self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "slug": product.slug,
            "sku": product.sku,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "inventory": {
                "quantity": product.inventory.quantity,
                "reserved": product.inventory.reserved,
                "available": product.inventory.available,
            },
            "category_ids": list(product.category_ids),
            "is_published": product.is_published,
            "version": product.version,
            "created_at": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        # "available" is written for readers of the file but never read back.
        inventory = raw["inventory"]
        return Product(
            id=raw["id"],
            name=raw["name"],
            sku=raw["sku"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            inventory=Inventory(
                quantity=inventory["quantity"],
                reserved=inventory.get("reserved", 0),
            ),
            category_ids=list(raw.get("category_ids", [])),
            is_published=raw.get("is_published", False),
            version=raw.get("version", 0),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
