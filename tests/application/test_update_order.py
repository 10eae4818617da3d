"""Integration tests for the UpdateOrder, UpdatePayment and DeleteOrder use cases."""

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.application.delete_order import DeleteOrderHandler
from storefront.application.dto import OrderItemSpec
from storefront.application.update_order import UpdateOrderHandler
from storefront.application.update_payment import UpdatePaymentHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidStateError,
    ValidationError,
)
from tests.builders import ADMIN, ALICE, HOME, make_product
from tests.fakes import FakeOrderRepository, FakeProductRepository


@pytest.fixture
def repos():
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository([make_product("1", "Widget", quantity=100)])
    CreateOrderHandler(order_repo, product_repo).handle(
        ALICE,
        item_specs=[OrderItemSpec("1", 3)],
        shipping_address=HOME,
        payment_method="credit_card",
        shipping_method="standard",
    )
    return order_repo, product_repo


def _stock(product_repo):
    inv = product_repo.get_by_id("1").inventory
    return inv.quantity, inv.reserved, inv.available


class TestUpdateOrder:

    def test_cancel_restores_inventory(self, repos):
        order_repo, product_repo = repos
        handler = UpdateOrderHandler(order_repo, product_repo)

        dto = handler.handle(ADMIN, 1, status="cancelled")

        assert dto.status == "cancelled"
        assert _stock(product_repo) == (100, 0, 100)
        assert order_repo.get_by_id(1).status.value == "cancelled"

    def test_cancel_twice_is_harmless(self, repos):
        order_repo, product_repo = repos
        handler = UpdateOrderHandler(order_repo, product_repo)

        handler.handle(ADMIN, 1, status="cancelled")
        dto = handler.handle(ADMIN, 1, status="cancelled")

        assert dto.status == "cancelled"
        assert _stock(product_repo) == (100, 0, 100)

    def test_ship_with_tracking_number(self, repos):
        order_repo, product_repo = repos
        handler = UpdateOrderHandler(order_repo, product_repo)

        dto = handler.handle(ADMIN, 1, status="shipped", tracking_number="1Z999")

        assert dto.tracking_number == "1Z999"
        assert _stock(product_repo) == (97, 0, 97)

    def test_notes_only_update(self, repos):
        order_repo, product_repo = repos
        dto = UpdateOrderHandler(order_repo, product_repo).handle(ADMIN, 1, notes="Gift wrap")
        assert dto.notes == "Gift wrap"
        assert dto.status == "pending"

    def test_illegal_transition_leaves_order_untouched(self, repos):
        order_repo, product_repo = repos
        handler = UpdateOrderHandler(order_repo, product_repo)
        handler.handle(ADMIN, 1, status="shipped")
        handler.handle(ADMIN, 1, status="delivered")

        with pytest.raises(InvalidStateError, match="from delivered to processing"):
            handler.handle(ADMIN, 1, status="processing")
        assert order_repo.get_by_id(1).status.value == "delivered"

    def test_unknown_status(self, repos):
        order_repo, product_repo = repos
        with pytest.raises(ValidationError, match="Invalid order status 'lost'"):
            UpdateOrderHandler(order_repo, product_repo).handle(ADMIN, 1, status="lost")

    def test_customer_cannot_update(self, repos):
        order_repo, product_repo = repos
        with pytest.raises(ForbiddenError):
            UpdateOrderHandler(order_repo, product_repo).handle(ALICE, 1, status="cancelled")
        assert _stock(product_repo) == (100, 3, 97)

    def test_missing_order(self, repos):
        order_repo, product_repo = repos
        with pytest.raises(EntityNotFoundError, match="Order #42 not found"):
            UpdateOrderHandler(order_repo, product_repo).handle(ADMIN, 42, status="shipped")


class TestUpdatePayment:

    def test_paid_moves_pending_order_to_processing(self, repos):
        order_repo, _ = repos
        dto = UpdatePaymentHandler(order_repo).handle(
            ADMIN, 1, payment_status="paid", payment_details={"transaction_id": "tx-9"},
        )
        assert dto.payment_status == "paid"
        assert dto.status == "processing"
        assert order_repo.get_by_id(1).payment_details == {"transaction_id": "tx-9"}

    def test_refund_does_not_change_status(self, repos):
        order_repo, _ = repos
        dto = UpdatePaymentHandler(order_repo).handle(ADMIN, 1, payment_status="refunded")
        assert dto.status == "pending"

    def test_unknown_payment_status(self, repos):
        order_repo, _ = repos
        with pytest.raises(ValidationError, match="Invalid payment status"):
            UpdatePaymentHandler(order_repo).handle(ADMIN, 1, payment_status="maybe")

    def test_customer_cannot_record_payment(self, repos):
        order_repo, _ = repos
        with pytest.raises(ForbiddenError, match="Administrator role required"):
            UpdatePaymentHandler(order_repo).handle(ALICE, 1, payment_status="paid")


class TestDeleteOrder:

    def test_pending_order_is_deleted_and_stock_released(self, repos):
        order_repo, product_repo = repos

        DeleteOrderHandler(order_repo, product_repo).handle(ADMIN, 1)

        assert order_repo.get_by_id(1) is None
        assert _stock(product_repo) == (100, 0, 100)

    def test_non_pending_order_cannot_be_deleted(self, repos):
        order_repo, product_repo = repos
        UpdateOrderHandler(order_repo, product_repo).handle(ADMIN, 1, status="processing")

        with pytest.raises(InvalidStateError, match="Only pending orders"):
            DeleteOrderHandler(order_repo, product_repo).handle(ADMIN, 1)
        assert order_repo.get_by_id(1) is not None
        assert _stock(product_repo) == (100, 3, 97)

    def test_missing_order(self, repos):
        order_repo, product_repo = repos
        with pytest.raises(EntityNotFoundError):
            DeleteOrderHandler(order_repo, product_repo).handle(ADMIN, 99)

    def test_customer_cannot_delete(self, repos):
        order_repo, product_repo = repos
        with pytest.raises(ForbiddenError):
            DeleteOrderHandler(order_repo, product_repo).handle(ALICE, 1)
