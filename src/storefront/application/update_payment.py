"""Application service: Update Order Payment use case (administrators only).

Only the payment status is tracked; no gateway is contacted.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO
from storefront.application.mapping import parse_choice, to_order_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.order import PaymentStatus
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdatePaymentHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        principal: Principal,
        order_id: int,
        payment_status: PaymentStatus | str,
        payment_details: dict[str, str] | None = None,
    ) -> OrderDTO:
        """Record a payment status; a paid pending order moves to processing."""
        principal.require_admin()

        new_status = parse_choice(PaymentStatus, payment_status, "payment status")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.record_payment(new_status, payment_details)
        self._order_repo.save(order)

        logger.info(
            "order.payment_updated",
            order_id=order_id,
            payment_status=new_status.value,
            status=order.status.value,
        )
        return to_order_dto(order)
