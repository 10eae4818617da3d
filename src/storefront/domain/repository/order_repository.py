"""Abstract repository for Order aggregate, plus the query it answers."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import Order, OrderStatus

MAX_PAGE_SIZE = 100

SORT_KEYS: dict[str, Callable[[Order], Any]] = {
    "created_at": lambda o: o.created_at,
    "updated_at": lambda o: o.updated_at,
    "total_amount": lambda o: o.total_amount.amount,
    "status": lambda o: o.status.value,
    "id": lambda o: o.id or 0,
}


@dataclass(frozen=True)
class OrderQuery:
    """Filtering, sorting and pagination for order listings.

    ``start_date``/``end_date`` bound ``created_at`` inclusively; dates
    without a timezone are taken as UTC.
    """

    status: OrderStatus | None = None
    user_id: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    page: int = 1
    limit: int = 10
    sort_by: str = "created_at"
    descending: bool = True

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be a positive integer")
        if not 1 <= self.limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")
        if self.sort_by not in SORT_KEYS:
            raise ValidationError(
                f"Cannot sort by '{self.sort_by}'. "
                f"Choose one of: {', '.join(sorted(SORT_KEYS))}"
            )
        for name in ("start_date", "end_date"):
            value = getattr(self, name)
            if value is not None and value.tzinfo is None:
                object.__setattr__(self, name, value.replace(tzinfo=timezone.utc))

    def matches(self, order: Order) -> bool:
        if self.status is not None and order.status != self.status:
            return False
        if self.user_id is not None and order.user_id != self.user_id:
            return False
        if self.start_date is not None and order.created_at < self.start_date:
            return False
        if self.end_date is not None and order.created_at > self.end_date:
            return False
        return True

    def select(self, orders: list[Order]) -> OrderPage:
        """Apply the query to an in-memory collection of orders."""
        matching = [o for o in orders if self.matches(o)]
        matching.sort(key=SORT_KEYS[self.sort_by], reverse=self.descending)
        offset = (self.page - 1) * self.limit
        return OrderPage(
            orders=matching[offset:offset + self.limit],
            total=len(matching),
            page=self.page,
            limit=self.limit,
        )


@dataclass(frozen=True)
class OrderPage:

    orders: list[Order] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def count(self) -> int:
        return len(self.orders)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def find(self, query: OrderQuery) -> OrderPage:
        """Return one page of orders matching the query."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order (assigns an ID to new orders).

        Implementations must compare ``order.version`` with the stored
        version (0 when there is no stored record) and raise
        ``ConcurrencyError`` if they differ; on success the version is
        incremented on both the record and ``order``.
        """

    @abstractmethod
    def delete(self, order: Order) -> None:
        """Remove an order, with the same version check as ``save``."""
