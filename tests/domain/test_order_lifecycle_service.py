"""Unit tests for the OrderLifecycleService domain service."""

import pytest
from structlog.testing import capture_logs

from storefront.domain.exceptions import ConcurrencyError, InvalidStateError
from storefront.domain.model.order import OrderStatus
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from storefront.domain.service.order_lifecycle_service import OrderLifecycleService
from tests.builders import make_item, make_order, make_product
from tests.fakes import FakeOrderRepository, FakeProductRepository


def _setup(reserved: int = 3):
    product_repo = FakeProductRepository([make_product("1", quantity=100, reserved=reserved)])
    order_repo = FakeOrderRepository()
    order = make_order([make_item("1", qty=3)])
    order_repo.save(order)
    lifecycle = OrderLifecycleService(order_repo, InventoryReservationService(product_repo))
    return product_repo, order_repo, order, lifecycle


def _counters(repo):
    inv = repo.get_by_id("1").inventory
    return inv.quantity, inv.reserved, inv.available


class TestCancel:

    def test_cancel_releases_reservation(self):
        repo, order_repo, order, lifecycle = _setup()
        assert lifecycle.change_status(order, OrderStatus.CANCELLED) is True
        assert order_repo.get_by_id(order.id).status == OrderStatus.CANCELLED
        assert _counters(repo) == (100, 0, 100)

    def test_cancel_twice_releases_once(self):
        # A second product reservation must survive a repeated cancel.
        repo, _, order, lifecycle = _setup(reserved=10)
        lifecycle.change_status(order, OrderStatus.CANCELLED)
        assert lifecycle.change_status(order, OrderStatus.CANCELLED) is False
        assert _counters(repo) == (100, 7, 93)

    def test_cancel_from_processing_releases(self):
        repo, _, order, lifecycle = _setup()
        lifecycle.change_status(order, OrderStatus.PROCESSING)
        lifecycle.change_status(order, OrderStatus.CANCELLED)
        assert _counters(repo) == (100, 0, 100)

    def test_cancel_from_stale_copy_moves_no_stock(self):
        repo, order_repo, order, lifecycle = _setup(reserved=10)
        stale = order_repo.get_by_id(order.id)
        lifecycle.change_status(order, OrderStatus.CANCELLED)

        with pytest.raises(ConcurrencyError):
            lifecycle.change_status(stale, OrderStatus.CANCELLED)

        assert _counters(repo) == (100, 7, 93)


class TestShip:

    def test_ship_consumes_and_keeps_available(self):
        repo, order_repo, order, lifecycle = _setup()
        available_before = _counters(repo)[2]

        lifecycle.change_status(order, OrderStatus.SHIPPED, tracking_number="1Z999")

        assert _counters(repo) == (97, 0, 97)
        assert _counters(repo)[2] == available_before
        assert order_repo.get_by_id(order.id).tracking_number == "1Z999"

    def test_cancel_after_ship_rejected_without_side_effects(self):
        repo, _, order, lifecycle = _setup()
        lifecycle.change_status(order, OrderStatus.SHIPPED)

        with pytest.raises(InvalidStateError):
            lifecycle.change_status(order, OrderStatus.CANCELLED)

        assert order.status == OrderStatus.SHIPPED
        assert _counters(repo) == (97, 0, 97)

    def test_failed_consume_restores_status_and_stock(self):
        repo = FakeProductRepository([
            make_product("1", "Widget", quantity=100, reserved=3),
            make_product("2", "Gadget", quantity=50, reserved=2),
        ])
        order_repo = FakeOrderRepository()
        order = make_order([make_item("1", qty=3), make_item("2", "Gadget", qty=2)])
        order_repo.save(order)
        reservations = InventoryReservationService(repo)
        real_consume = reservations.consume

        def consume_fails_on_gadget(product_id, quantity):
            if product_id == "2":
                raise ConcurrencyError("stale")
            return real_consume(product_id, quantity)

        reservations.consume = consume_fails_on_gadget
        lifecycle = OrderLifecycleService(order_repo, reservations)

        with pytest.raises(ConcurrencyError):
            lifecycle.change_status(order, OrderStatus.SHIPPED)

        assert order_repo.get_by_id(order.id).status == OrderStatus.PENDING
        assert _counters(repo) == (100, 3, 97)
        assert repo.get_by_id("2").inventory.reserved == 2


class TestOtherTransitions:

    def test_processing_and_delivered_touch_no_inventory(self):
        repo, _, order, lifecycle = _setup()
        lifecycle.change_status(order, OrderStatus.PROCESSING)
        assert _counters(repo) == (100, 3, 97)
        lifecycle.change_status(order, OrderStatus.SHIPPED)
        lifecycle.change_status(order, OrderStatus.DELIVERED)
        assert order.status == OrderStatus.DELIVERED
        assert _counters(repo) == (97, 0, 97)

    def test_invalid_transition_is_logged(self):
        _, _, order, lifecycle = _setup()
        with capture_logs() as logs:
            with pytest.raises(InvalidStateError):
                lifecycle.change_status(order, OrderStatus.DELIVERED)
        assert any(
            entry["event"] == "order.invalid_transition" and entry["log_level"] == "warning"
            for entry in logs
        )
