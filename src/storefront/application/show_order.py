"""Application service: Show Order use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.application.mapping import to_order_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal, order_id: int) -> OrderDTO:
        """Return an order to its owner or to an administrator."""
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        order.ensure_visible_to(principal)
        return to_order_dto(order)
