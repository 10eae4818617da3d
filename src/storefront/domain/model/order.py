"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items, its computed
totals and its status.  Which status changes are legal is decided here;
the inventory side effects of a change are driven by the lifecycle
service before the transition is applied.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ForbiddenError, InvalidStateError, ValidationError
from storefront.domain.model.principal import Principal
from storefront.domain.model.value_objects import Address, Money, Quantity
from storefront.domain.service.pricing import compute_totals


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(Enum):
    CREDIT_CARD = "credit_card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank_transfer"


class ShippingMethod(Enum):
    STANDARD = "standard"
    EXPRESS = "express"
    OVERNIGHT = "overnight"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLineItem:
    """Snapshot of a product's name and price at order-creation time."""

    product_id: str
    name: str
    price: Money  # locked at order-creation time
    quantity: Quantity
    variant: str | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules and computes totals.  The ``__init__`` is intentionally
    simple so the repository can reconstitute persisted orders without
    re-validating.

    Like ``Product``, an order carries a ``version``: saving or deleting a
    copy loaded before someone else's save fails with ``ConcurrencyError``.
    """

    id: int | None
    user_id: str
    items: list[OrderLineItem]
    shipping_address: Address
    billing_address: Address
    payment_method: PaymentMethod
    shipping_method: ShippingMethod
    subtotal: Money = field(default_factory=Money.zero)
    shipping_cost: Money = field(default_factory=Money.zero)
    tax: Money = field(default_factory=Money.zero)
    total_amount: Money = field(default_factory=Money.zero)
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_details: dict[str, str] = field(default_factory=dict)
    tracking_number: str | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 0  # bumped by the repository on every save

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderLineItem],
        shipping_address: Address,
        billing_address: Address,
        payment_method: PaymentMethod,
        shipping_method: ShippingMethod,
        notes: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not user_id:
            raise ValidationError("Order must belong to a user")
        if not items:
            raise ValidationError("Order must contain at least one item")

        order = Order(
            id=None,
            user_id=user_id,
            items=list(items),
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=payment_method,
            shipping_method=shipping_method,
            notes=notes,
        )
        order.recalculate_totals()
        return order

    # --- Totals ---------------------------------------------------------------

    def recalculate_totals(self) -> None:
        totals = compute_totals(self.items, self.shipping_method)
        self.subtotal = totals.subtotal
        self.shipping_cost = totals.shipping_cost
        self.tax = totals.tax
        self.total_amount = totals.total

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[self.status]

    def ensure_can_transition_to(self, new_status: OrderStatus) -> None:
        if not self.can_transition_to(new_status):
            raise InvalidStateError(
                f"Cannot change order status from {self.status.value} "
                f"to {new_status.value}"
            )

    def transition_to(self, new_status: OrderStatus) -> None:
        """Apply a status change allowed by ``ALLOWED_TRANSITIONS``.

        Inventory effects (release on cancel, consume on ship) must happen
        *before* calling this, coordinated by the lifecycle service.
        """
        self.ensure_can_transition_to(new_status)
        self.status = new_status
        self.touch()

    def record_payment(
        self,
        payment_status: PaymentStatus,
        details: dict[str, str] | None = None,
    ) -> None:
        """Set the payment status; a paid pending order starts processing."""
        self.payment_status = payment_status
        if details:
            self.payment_details = dict(details)
        if payment_status == PaymentStatus.PAID and self.status == OrderStatus.PENDING:
            self.status = OrderStatus.PROCESSING
        self.touch()

    def ensure_deletable(self) -> None:
        if self.status != OrderStatus.PENDING:
            raise InvalidStateError("Only pending orders can be deleted")

    # --- Access ---------------------------------------------------------------

    def is_visible_to(self, principal: Principal) -> bool:
        return principal.is_admin or principal.id == self.user_id

    def ensure_visible_to(self, principal: Principal) -> None:
        if not self.is_visible_to(principal):
            raise ForbiddenError("Not authorized to access this order")

    def touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
