"""Application services: order listings (queries).

``ListOrdersHandler`` is the administrator view over every order;
``ListUserOrdersHandler`` is the caller's own order history.
"""

from __future__ import annotations

from dataclasses import replace

from storefront.application.dto import OrderPageDTO
from storefront.application.mapping import to_order_page_dto
from storefront.domain.model.principal import Principal
from storefront.domain.repository.order_repository import OrderQuery, OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal, query: OrderQuery | None = None) -> OrderPageDTO:
        principal.require_admin()
        page = self._order_repo.find(query or OrderQuery())
        return to_order_page_dto(page)


class ListUserOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, principal: Principal, query: OrderQuery | None = None) -> OrderPageDTO:
        # Scoped to the caller whatever user filter was asked for.
        query = replace(query or OrderQuery(), user_id=principal.id)
        page = self._order_repo.find(query)
        return to_order_page_dto(page)
