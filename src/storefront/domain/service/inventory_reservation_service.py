"""Domain service: Inventory Reservation.

Coordinates the cross-aggregate work of reserving, releasing and
consuming product stock on behalf of an order.

Reservation is two-phase: a validation pass over every requested item
(no mutation, all problems collected), then a reservation pass.  Each
ledger write is a version-checked save of one product, retried on a
write conflict, so a stale read never overwrites a concurrent writer.
If the reservation pass still fails part-way (another order took the
stock in between), the reservations already made are released.  Releasing
or consuming an order's stock is all-or-nothing in the same way.
"""

from __future__ import annotations

from typing import Callable

import structlog

from storefront.domain.exceptions import (
    ConcurrencyError,
    DomainException,
    EntityNotFoundError,
    ValidationError,
)
from storefront.domain.model.inventory import Inventory
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)

MAX_WRITE_ATTEMPTS = 5

LedgerOperation = Callable[[Inventory, int], None]


class InventoryReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    # --- Order-level operations -----------------------------------------------

    def validate_availability(self, requests: list[tuple[str, int]]) -> dict[str, Product]:
        """Check every (product_id, quantity) request without mutating anything.

        Quantities for the same product are accumulated, so asking for the
        same product twice cannot sneak past the check.  Returns the loaded
        products keyed by ID; raises ValidationError listing every problem.
        """
        errors: list[str] = []
        products: dict[str, Product] = {}
        demanded: dict[str, int] = {}

        for product_id, qty in requests:
            product = products.get(product_id) or self._product_repo.get_by_id(product_id)
            if product is None:
                errors.append(f"Product not found with ID: {product_id}")
                continue
            products[product_id] = product
            wanted = demanded.get(product_id, 0) + qty
            if product.inventory.available < wanted:
                errors.append(f"Insufficient inventory for product: {product.name}")
                continue
            demanded[product_id] = wanted

        if errors:
            logger.info("inventory.validation_failed", errors=errors)
            raise ValidationError("Order validation failed", errors)
        return products

    def reserve_items(self, requests: list[tuple[str, int]]) -> dict[str, Product]:
        """Validate then reserve stock for every request, all or nothing."""
        products = self.validate_availability(requests)

        reserved: list[tuple[str, int]] = []
        try:
            for product_id, qty in requests:
                self.reserve(product_id, qty)
                reserved.append((product_id, qty))
        except DomainException:
            logger.warning("inventory.reservation_rolled_back", reserved=reserved)
            for product_id, qty in reversed(reserved):
                self.release(product_id, qty)
            raise
        return products

    def release_for_order(self, order: Order) -> None:
        """Give back the stock held by every line item (cancel or delete)."""
        self._apply_to_order(order, self.release, undo=self.reserve)

    def consume_for_order(self, order: Order) -> None:
        """Permanently deduct the stock held by every line item (shipped)."""
        self._apply_to_order(order, self.consume, undo=self.restore)

    def _apply_to_order(
        self,
        order: Order,
        apply: Callable[[str, int], Product | None],
        undo: Callable[[str, int], Product | None],
    ) -> None:
        """Apply ``apply`` to every line item; undo the applied ones on failure.

        Either every line item is applied or none is, so retrying a failed
        cancel or ship never counts the same units twice.
        """
        applied: list[tuple[str, int]] = []
        try:
            for item in order.items:
                if apply(item.product_id, item.quantity.value) is not None:
                    applied.append((item.product_id, item.quantity.value))
        except DomainException:
            logger.warning(
                "inventory.order_update_rolled_back", order_id=order.id, applied=applied
            )
            for product_id, qty in reversed(applied):
                undo(product_id, qty)
            raise

    # --- Single-product ledger operations -------------------------------------

    def reserve(self, product_id: str, quantity: int) -> Product:
        product = self._apply(product_id, quantity, Inventory.reserve, "reserve")
        if product is None:
            raise EntityNotFoundError(f"Product not found with ID: {product_id}")
        return product

    def release(self, product_id: str, quantity: int) -> Product | None:
        return self._apply(product_id, quantity, Inventory.release, "release")

    def consume(self, product_id: str, quantity: int) -> Product | None:
        return self._apply(product_id, quantity, Inventory.consume, "consume")

    def restore(self, product_id: str, quantity: int) -> Product | None:
        return self._apply(product_id, quantity, Inventory.restore, "restore")

    def _apply(
        self,
        product_id: str,
        quantity: int,
        operation: LedgerOperation,
        name: str,
    ) -> Product | None:
        """Read, mutate and save one product, retrying on write conflicts.

        A product deleted from the catalog is skipped (returns None): its
        counters no longer exist to be kept consistent.
        """
        log = logger.bind(product_id=product_id, quantity=quantity, operation=name)
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                log.warning("inventory.product_missing")
                return None

            operation(product.inventory, quantity)
            try:
                self._product_repo.save(product)
            except ConcurrencyError:
                log.warning("inventory.write_conflict", attempt=attempt)
                continue

            log.info(
                f"inventory.{name}d",
                quantity_on_hand=product.inventory.quantity,
                reserved=product.inventory.reserved,
                available=product.inventory.available,
            )
            return product

        raise ConcurrencyError(
            f"Could not {name} inventory for product {product_id} "
            f"after {MAX_WRITE_ATTEMPTS} attempts"
        )
