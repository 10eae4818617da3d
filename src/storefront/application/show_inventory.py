"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    quantity: int
    reserved: int
    available: int


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[InventoryLineDTO]:
        return [
            InventoryLineDTO(
                product_id=product.id,
                product_name=product.name,
                quantity=product.inventory.quantity,
                reserved=product.inventory.reserved,
                available=product.inventory.available,
            )
            for product in self._product_repo.list_all()
        ]
