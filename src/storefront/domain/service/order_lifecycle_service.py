"""Domain service: Order Lifecycle.

Moves an order between statuses and applies the inventory side effect
each change implies:

- to ``cancelled``: release the reservation of every line item
- to ``shipped``: consume the reservation of every line item
- anything else: status only

Requesting the status an order already has does nothing, so cancelling
twice never releases stock twice.  Changes outside
``ALLOWED_TRANSITIONS`` are rejected before any inventory is touched.

The new status is saved before the inventory is touched.  The save is
version-checked, so of two requests that loaded the same order only one
gets to move stock; the other fails with ``ConcurrencyError``.  If the
inventory update then fails, the previous status is saved back.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import ConcurrencyError, DomainException
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = structlog.get_logger(__name__)


class OrderLifecycleService:

    def __init__(
        self,
        order_repo: OrderRepository,
        reservations: InventoryReservationService,
    ) -> None:
        self._order_repo = order_repo
        self._reservations = reservations

    def change_status(
        self,
        order: Order,
        new_status: OrderStatus,
        tracking_number: str | None = None,
    ) -> bool:
        """Apply and save ``new_status`` on ``order``.  Returns False for a no-op."""
        log = logger.bind(
            order_id=order.id,
            current_status=order.status.value,
            new_status=new_status.value,
        )

        if new_status == order.status:
            log.info("order.status_unchanged")
            return False

        if not order.can_transition_to(new_status):
            log.warning("order.invalid_transition")
        order.ensure_can_transition_to(new_status)

        previous_status, previous_tracking = order.status, order.tracking_number
        order.transition_to(new_status)
        if new_status == OrderStatus.SHIPPED and tracking_number:
            order.tracking_number = tracking_number

        try:
            self._order_repo.save(order)
        except ConcurrencyError:
            log.warning("order.status_conflict")
            raise

        try:
            if new_status == OrderStatus.CANCELLED:
                self._reservations.release_for_order(order)
            elif new_status == OrderStatus.SHIPPED:
                self._reservations.consume_for_order(order)
        except DomainException:
            log.warning("order.status_reverted")
            order.status = previous_status
            order.tracking_number = previous_tracking
            order.touch()
            self._order_repo.save(order)
            raise

        log.info("order.status_changed")
        return True
