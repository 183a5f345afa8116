"""Application service: List Orders use case (query).

Admins see every order; everybody else sees only what they bought.
"""

from __future__ import annotations

from orderhub.application.dto import OrderDTO
from orderhub.application.order_views import to_order_dto
from orderhub.domain.model.principal import Principal
from orderhub.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, principal: Principal) -> list[OrderDTO]:
        with self._uow:
            if principal.is_admin:
                orders = self._uow.orders.list_all()
            else:
                orders = self._uow.orders.list_by_buyer(principal.user_id)

            return [to_order_dto(order, self._uow.products) for order in orders]
