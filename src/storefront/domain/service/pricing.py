"""Pricing calculator: subtotal, shipping, tax and total for a set of items.

A pure function of its inputs.  Decimal addition is exact, so the result
does not depend on the order in which line items are listed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Protocol

from storefront.domain.model.value_objects import Money, Quantity

TAX_RATE = Decimal("0.07")

SHIPPING_RATES: dict[str, Money] = {
    "standard": Money.of("5.99"),
    "express": Money.of("15.99"),
    "overnight": Money.of("29.99"),
}
DEFAULT_SHIPPING_RATE = SHIPPING_RATES["standard"]


class PricedItem(Protocol):
    price: Money
    quantity: Quantity


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Money
    shipping_cost: Money
    tax: Money
    total: Money


def shipping_cost_for(shipping_method: Enum | str | None) -> Money:
    """Fixed rate per method; anything unrecognised ships at the standard rate."""
    key = shipping_method.value if isinstance(shipping_method, Enum) else shipping_method
    return SHIPPING_RATES.get(key, DEFAULT_SHIPPING_RATE)


def compute_totals(
    items: Iterable[PricedItem],
    shipping_method: Enum | str | None,
) -> OrderTotals:
    subtotal = Money.zero()
    for item in items:
        subtotal = subtotal + item.price * item.quantity.value

    shipping_cost = shipping_cost_for(shipping_method)
    tax = subtotal.percent(TAX_RATE)
    return OrderTotals(
        subtotal=subtotal,
        shipping_cost=shipping_cost,
        tax=tax,
        total=subtotal + shipping_cost + tax,
    )
