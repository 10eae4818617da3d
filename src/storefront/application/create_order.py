"""Application service: Create Order use case.

Orchestrates the flow between repositories, the reservation service and
the Order aggregate.  Stock is validated for every item before anything
is reserved; the order is only persisted once every reservation holds.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import AddressSpec, OrderDTO, OrderItemSpec
from storefront.application.mapping import parse_choice, to_address, to_order_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    PaymentMethod,
    ShippingMethod,
)
from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.inventory_reservation_service import (
    InventoryReservationService,
)

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

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
        item_specs: list[OrderItemSpec],
        shipping_address: AddressSpec,
        payment_method: PaymentMethod | str,
        shipping_method: ShippingMethod | str,
        billing_address: AddressSpec | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Create a new pending order for ``principal``.

        Steps:
        1. Validate the request shape (items, addresses, methods).
        2. Validate stock for all items, then reserve it (all or nothing).
        3. Build line items with *current* names and prices (snapshot).
        4. Compute totals, persist and return a DTO.
        """
        log = logger.bind(user_id=principal.id)
        log.info("order.creation_started", item_count=len(item_specs))

        if not item_specs:
            raise ValidationError("Order must contain at least one item")

        quantities = [Quantity(spec.quantity) for spec in item_specs]
        ship_to = to_address(shipping_address)
        bill_to = to_address(billing_address) if billing_address else ship_to
        payment = parse_choice(PaymentMethod, payment_method, "payment method")
        shipping = parse_choice(ShippingMethod, shipping_method, "shipping method")

        requests = [
            (spec.product_id, qty.value) for spec, qty in zip(item_specs, quantities)
        ]
        reservations = InventoryReservationService(self._product_repo)
        products = reservations.reserve_items(requests)

        try:
            line_items = [
                OrderLineItem(
                    product_id=spec.product_id,
                    name=products[spec.product_id].name,
                    price=products[spec.product_id].price,  # <-- price snapshot
                    quantity=qty,
                    variant=spec.variant or None,
                )
                for spec, qty in zip(item_specs, quantities)
            ]
            order = Order.create(
                user_id=principal.id,
                items=line_items,
                shipping_address=ship_to,
                billing_address=bill_to,
                payment_method=payment,
                shipping_method=shipping,
                notes=notes,
            )
            self._order_repo.save(order)
        except Exception:
            log.warning("order.creation_aborted")
            for product_id, qty in requests:
                reservations.release(product_id, qty)
            raise

        log.info("order.created", order_id=order.id, total=str(order.total_amount))
        return to_order_dto(order)
