"""Application service: Delete Order use case (administrators only).

Only pending orders may be deleted.  The order is cancelled first, which
releases its reservations and, being a version-checked save, stops a
concurrent cancel or delete from releasing them again.  Then the
cancelled order is removed.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from storefront.domain.service.order_lifecycle_service import OrderLifecycleService

logger = structlog.get_logger(__name__)


class DeleteOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(self, principal: Principal, order_id: int) -> None:
        principal.require_admin()

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.ensure_deletable()

        lifecycle = OrderLifecycleService(
            self._order_repo, InventoryReservationService(self._product_repo)
        )
        lifecycle.change_status(order, OrderStatus.CANCELLED)
        self._order_repo.delete(order)
        logger.info("order.deleted", order_id=order_id)
