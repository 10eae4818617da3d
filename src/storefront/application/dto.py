"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product ID + quantity)."""

    product_id: str
    quantity: int
    variant: str | None = None


@dataclass(frozen=True)
class AddressSpec:
    """Input: a postal address as entered by the customer."""

    street: str
    city: str
    state: str
    postal_code: str
    country: str = "USA"


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    name: str
    variant: str | None
    quantity: int
    price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    user_id: str
    status: str
    payment_status: str
    payment_method: str
    shipping_method: str
    items: list[OrderLineItemDTO]
    item_count: int
    subtotal: str
    shipping_cost: str
    tax: str
    total_amount: str
    shipping_address: str
    billing_address: str
    tracking_number: str | None
    notes: str | None
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class OrderPageDTO:
    """Output: one page of an order listing."""

    orders: list[OrderDTO]
    count: int
    total: int
    total_pages: int
    current_page: int
