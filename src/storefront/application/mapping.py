"""Conversions between raw input, domain objects and DTOs."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from storefront.application.dto import (
    AddressSpec,
    OrderDTO,
    OrderLineItemDTO,
    OrderPageDTO,
)
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import Address
from storefront.domain.repository.order_repository import OrderPage

E = TypeVar("E", bound=Enum)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


def parse_choice(enum_cls: type[E], value: E | str, label: str) -> E:
    """Coerce a raw string (or an enum member) into ``enum_cls``."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label} '{value}'. Expected one of: {allowed}")


def to_address(spec: AddressSpec) -> Address:
    return Address(
        street=spec.street,
        city=spec.city,
        state=spec.state,
        postal_code=spec.postal_code,
        country=spec.country,
    )


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        payment_method=order.payment_method.value,
        shipping_method=order.shipping_method.value,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                name=item.name,
                variant=item.variant,
                quantity=item.quantity.value,
                price=str(item.price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        item_count=order.item_count,
        subtotal=str(order.subtotal),
        shipping_cost=str(order.shipping_cost),
        tax=str(order.tax),
        total_amount=str(order.total_amount),
        shipping_address=str(order.shipping_address),
        billing_address=str(order.billing_address),
        tracking_number=order.tracking_number,
        notes=order.notes,
        created_at=order.created_at.strftime(TIMESTAMP_FORMAT),
        updated_at=order.updated_at.strftime(TIMESTAMP_FORMAT),
    )


def to_order_page_dto(page: OrderPage) -> OrderPageDTO:
    return OrderPageDTO(
        orders=[to_order_dto(o) for o in page.orders],
        count=page.count,
        total=page.total,
        total_pages=page.total_pages,
        current_page=page.page,
    )
