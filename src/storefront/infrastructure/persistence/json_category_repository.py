"""JSON-file-backed implementation of CategoryRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def next_id(self) -> str:
        records = self._file.load()
        if not records:
            return "1"
        return str(max(int(r["id"]) for r in records) + 1)

    def get_by_id(self, category_id: str) -> Category | None:
        for raw in self._file.load():
            if raw["id"] == category_id:
                return self._to_domain(raw)
        return None

    def get_by_slug(self, slug: str) -> Category | None:
        for category in self.list_all():
            if category.slug == slug:
                return category
        return None

    def list_all(self) -> list[Category]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, category: Category) -> None:
        with self._file.locked():
            records = [r for r in self._file.load() if r["id"] != category.id]
            records.append(
                {
                    "id": category.id,
                    "name": category.name,
                    "slug": category.slug,
                    "description": category.description,
                }
            )
            records.sort(key=lambda r: int(r["id"]))
            self._file.persist(records)

    def delete(self, category_id: str) -> None:
        with self._file.locked():
            self._file.persist([r for r in self._file.load() if r["id"] != category_id])

    @staticmethod
    def _to_domain(raw: dict) -> Category:
        return Category(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
        )
