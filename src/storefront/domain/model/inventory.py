"""Inventory ledger — stock and reservation counters embedded in a Product.

``available`` is never stored: it is derived from ``quantity`` and
``reserved`` every time it is read, so no caller can set it out of step.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import InsufficientInventoryError, ValidationError


@dataclass
class Inventory:
    """Stock counters for a single product.

    - ``quantity``: units physically owned
    - ``reserved``: units committed to orders that have not shipped yet
    """

    quantity: int
    reserved: int = 0

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValidationError("Inventory quantity cannot be negative")
        if self.reserved < 0:
            raise ValidationError("Reserved quantity cannot be negative")

    @property
    def available(self) -> int:
        return max(0, self.quantity - self.reserved)

    def reserve(self, quantity: int) -> None:
        """Commit stock to a pending order.

        Raises InsufficientInventoryError if not enough stock is available.
        """
        _check_positive(quantity, "Reservation")
        if quantity > self.available:
            raise InsufficientInventoryError(
                f"Insufficient inventory (need {quantity}, have {self.available} available)"
            )
        self.reserved += quantity

    def release(self, quantity: int) -> None:
        """Return reserved stock to the available pool (cancel/delete)."""
        _check_positive(quantity, "Release")
        self.reserved = max(0, self.reserved - quantity)

    def consume(self, quantity: int) -> None:
        """Turn a reservation into a permanent deduction (order shipped).

        Both ``quantity`` and ``reserved`` drop by the same amount, so
        ``available`` is unchanged.
        """
        _check_positive(quantity, "Consume")
        self.quantity = max(0, self.quantity - quantity)
        self.reserved = max(0, self.reserved - quantity)

    def restore(self, quantity: int) -> None:
        """Undo a consume: the units are owned and held again."""
        _check_positive(quantity, "Restore")
        self.quantity += quantity
        self.reserved += quantity

    def restock(self, quantity: int) -> None:
        """Set the total quantity owned (admin stock adjustment)."""
        if quantity < 0:
            raise ValidationError("Inventory quantity cannot be negative")
        if quantity < self.reserved:
            raise ValidationError(
                f"Inventory quantity {quantity} is below the {self.reserved} units "
                f"already reserved"
            )
        self.quantity = quantity


def _check_positive(quantity: int, operation: str) -> None:
    if quantity <= 0:
        raise ValidationError(f"{operation} quantity must be positive")
