"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orderhub.application.dto import OrderDTO
from orderhub.application.order_views import to_order_dto
from orderhub.domain.exceptions import EntityNotFoundError
from orderhub.domain.model.principal import Principal
from orderhub.domain.repository.unit_of_work import UnitOfWork
from orderhub.domain.service.access_policy import ensure_can_access_order


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str, principal: Principal) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order {order_id} not found")

            ensure_can_access_order(principal, order, "access")
            return to_order_dto(order, self._uow.products)
