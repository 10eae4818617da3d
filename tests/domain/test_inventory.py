"""Unit tests for the Inventory ledger."""

import pytest

from storefront.domain.exceptions import InsufficientInventoryError, ValidationError
from storefront.domain.model.inventory import Inventory


class TestInventoryReserve:

    def test_reserve_reduces_available(self):
        inv = Inventory(quantity=100)
        inv.reserve(3)
        assert inv.reserved == 3
        assert inv.available == 97

    def test_reserve_all_available(self):
        inv = Inventory(quantity=10)
        inv.reserve(10)
        assert inv.available == 0

    def test_reserve_more_than_available_rejected(self):
        inv = Inventory(quantity=10, reserved=5)
        with pytest.raises(InsufficientInventoryError, match="need 6, have 5"):
            inv.reserve(6)
        assert inv.reserved == 5

    def test_reserve_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Inventory(quantity=10).reserve(0)


class TestInventoryRelease:

    def test_release_restores_available(self):
        inv = Inventory(quantity=100, reserved=3)
        inv.release(3)
        assert inv.reserved == 0
        assert inv.available == 100

    def test_release_never_goes_below_zero(self):
        inv = Inventory(quantity=100, reserved=2)
        inv.release(5)
        assert inv.reserved == 0
        assert inv.available == 100

    def test_release_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Inventory(quantity=100, reserved=2).release(-1)


class TestInventoryConsume:

    def test_consume_keeps_available_unchanged(self):
        inv = Inventory(quantity=100, reserved=3)
        before = inv.available
        inv.consume(3)
        assert inv.quantity == 97
        assert inv.reserved == 0
        assert inv.available == before == 97

    def test_restore_undoes_consume(self):
        inv = Inventory(quantity=100, reserved=3)
        inv.consume(3)
        inv.restore(3)
        assert (inv.quantity, inv.reserved, inv.available) == (100, 3, 97)


class TestInventoryRestock:

    def test_restock_sets_quantity(self):
        inv = Inventory(quantity=10, reserved=4)
        inv.restock(50)
        assert inv.quantity == 50
        assert inv.available == 46

    def test_restock_below_reserved_rejected(self):
        inv = Inventory(quantity=10, reserved=4)
        with pytest.raises(ValidationError, match="already reserved"):
            inv.restock(3)

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Inventory(quantity=-1)


class TestInventoryAvailable:

    def test_available_is_quantity_minus_reserved(self):
        assert Inventory(quantity=100, reserved=25).available == 75

    def test_available_is_floored_at_zero(self):
        # Legacy data can hold more reservations than stock.
        assert Inventory(quantity=5, reserved=8).available == 0
