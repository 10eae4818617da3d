"""Application service: Update Order use case (administrators only).

Status changes go through the lifecycle service so their inventory side
effects (release on cancel, consume on ship) happen with them.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.application.mapping import parse_choice, to_order_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)
from storefront.domain.service.order_lifecycle_service import OrderLifecycleService


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo

    def handle(
        self,
        principal: Principal,
        order_id: int,
        status: OrderStatus | str | None = None,
        tracking_number: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        principal.require_admin()

        new_status = parse_choice(OrderStatus, status, "order status") if status else None

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if tracking_number:
            order.tracking_number = tracking_number
        if notes is not None:
            order.notes = notes

        changed = False
        if new_status is not None:
            lifecycle = OrderLifecycleService(
                self._order_repo, InventoryReservationService(self._product_repo)
            )
            # Saves the order itself when the status actually changes.
            changed = lifecycle.change_status(order, new_status, tracking_number=tracking_number)
        if not changed:
            order.touch()
            self._order_repo.save(order)

        return to_order_dto(order)
