"""Application service: Cancel Order use case.

Cancellation is the compensating inverse of creation: every item's
quantity goes back to its product's stock, and the status change and
all restorations commit together.  Restorations are relative writes,
so orders placed concurrently on the same products do not block a
cancel.  Only pending, paid and processing orders can be cancelled.
"""

from __future__ import annotations

import logging

from orderhub.application.dto import OrderDTO
from orderhub.application.show_order import ShowOrderHandler
from orderhub.domain.exceptions import EntityNotFoundError
from orderhub.domain.model.principal import Principal
from orderhub.domain.repository.unit_of_work import UnitOfWork
from orderhub.domain.service.access_policy import ensure_can_access_order

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str, principal: Principal) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order {order_id} not found")

            ensure_can_access_order(principal, order, "cancel")

            # Guard first: nothing is restored for a non-cancellable order.
            order.cancel()

            for product_id, quantity in order.quantities_by_product().items():
                self._uow.products.adjust_stock(
                    product_id, quantity, actor_id=principal.user_id
                )

            self._uow.orders.save(order)
            self._uow.commit()

        logger.info("Order %s cancelled by %s", order_id, principal.user_id)
        return ShowOrderHandler(self._uow).handle(order_id, principal)
