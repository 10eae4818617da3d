"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ConcurrencyError
from storefront.domain.model.order import (
    Order,
    OrderLineItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    ShippingMethod,
)
from storefront.domain.model.value_objects import Address, Money, Quantity
from storefront.domain.repository.order_repository import (
    OrderPage,
    OrderQuery,
    OrderRepository,
)
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def find(self, query: OrderQuery) -> OrderPage:
        return query.select([self._to_domain(raw) for raw in self._file.load()])

    def save(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.load()
            index = self._check_version(orders, order)

            if order.id is None:
                order.id = self.next_id()
            order.version += 1

            if index is None:
                orders.append(self._to_raw(order))
            else:
                orders[index] = self._to_raw(order)
            self._file.persist(orders)

    def delete(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.load()
            index = self._check_version(orders, order)
            if index is not None:
                del orders[index]
                self._file.persist(orders)

    @staticmethod
    def _check_version(orders: list[dict], order: Order) -> int | None:
        """Return the index of the stored record, if any, after the version check."""
        index = next(
            (i for i, raw in enumerate(orders) if raw["id"] == order.id), None
        )
        stored_version = orders[index].get("version", 0) if index is not None else 0
        if stored_version != order.version:
            raise ConcurrencyError(
                f"Order #{order.id} was modified concurrently "
                f"(expected version {order.version}, found {stored_version})"
            )
        return index

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "payment_method": order.payment_method.value,
            "payment_details": dict(order.payment_details),
            "shipping_method": order.shipping_method.value,
            "shipping_address": _address_to_raw(order.shipping_address),
            "billing_address": _address_to_raw(order.billing_address),
            "items": [
                {
                    "product_id": item.product_id,
                    "name": item.name,
                    "price": str(item.price.amount),
                    "currency": item.price.currency,
                    "quantity": item.quantity.value,
                    "variant": item.variant,
                }
                for item in order.items
            ],
            "subtotal": str(order.subtotal.amount),
            "shipping_cost": str(order.shipping_cost.amount),
            "tax": str(order.tax.amount),
            "total_amount": str(order.total_amount.amount),
            "tracking_number": order.tracking_number,
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "version": order.version,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                product_id=i["product_id"],
                name=i["name"],
                price=Money(Decimal(i["price"]), i.get("currency", "USD")),
                quantity=Quantity(i["quantity"]),
                variant=i.get("variant"),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            shipping_address=Address(**raw["shipping_address"]),
            billing_address=Address(**raw["billing_address"]),
            payment_method=PaymentMethod(raw["payment_method"]),
            shipping_method=ShippingMethod(raw["shipping_method"]),
            subtotal=Money(Decimal(raw["subtotal"])),
            shipping_cost=Money(Decimal(raw["shipping_cost"])),
            tax=Money(Decimal(raw["tax"])),
            total_amount=Money(Decimal(raw["total_amount"])),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            payment_details=dict(raw.get("payment_details") or {}),
            tracking_number=raw.get("tracking_number"),
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            version=raw.get("version", 0),
        )


def _address_to_raw(address: Address) -> dict:
    return {
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "postal_code": address.postal_code,
        "country": address.country,
    }
