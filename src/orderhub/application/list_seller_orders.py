"""Application service: List Seller Orders use case (query).

Builds a seller-relative view of shared orders: each order holding at
least one of the seller's products is returned once, showing only that
seller's items.  The order total is left untouched.
"""

from __future__ import annotations

from orderhub.application.dto import OrderDTO
from orderhub.application.order_views import to_order_dto
from orderhub.domain.model.principal import Principal
from orderhub.domain.repository.unit_of_work import UnitOfWork
from orderhub.domain.service.access_policy import ensure_can_view_seller_orders


class ListSellerOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, principal: Principal, seller_id: str | None = None) -> list[OrderDTO]:
        seller_id = seller_id or principal.user_id
        ensure_can_view_seller_orders(principal, seller_id)

        with self._uow:
            order_ids = self._uow.orders.find_order_ids_by_seller(seller_id)
            if not order_ids:
                return []

            orders = self._uow.orders.list_by_ids(order_ids)
            for order in orders:
                order.items = self._uow.orders.get_items(order.id, seller_id=seller_id)

            return [to_order_dto(order, self._uow.products) for order in orders]
