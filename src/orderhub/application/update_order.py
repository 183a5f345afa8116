"""Application service: Update Order use case.

Buyers may only edit delivery details of their own orders.  Admins may
edit any updatable field, status included, without the lifecycle graph
being enforced; such overrides are logged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from orderhub.application.dto import OrderDTO
from orderhub.application.show_order import ShowOrderHandler
from orderhub.domain.exceptions import EntityNotFoundError
from orderhub.domain.model.principal import Principal
from orderhub.domain.repository.unit_of_work import UnitOfWork
from orderhub.domain.service.access_policy import (
    ensure_can_access_order,
    ensure_can_patch,
)

logger = logging.getLogger(__name__)


class UpdateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: str,
        patch: Mapping[str, object],
        principal: Principal,
    ) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order {order_id} not found")

            ensure_can_access_order(principal, order, "update")
            ensure_can_patch(principal, patch.keys())

            previous_status = order.status
            order.apply_patch(patch)
            if (
                order.status != previous_status
                and not previous_status.can_transition_to(order.status)
            ):
                logger.warning(
                    "Status override on order %s by %s: %s -> %s is outside the lifecycle",
                    order.id,
                    principal.user_id,
                    previous_status.value,
                    order.status.value,
                )

            self._uow.orders.save(order)
            self._uow.commit()

        logger.info(
            "Order %s updated by %s (fields: %s)",
            order_id,
            principal.user_id,
            ", ".join(sorted(patch)) or "none",
        )
        return ShowOrderHandler(self._uow).handle(order_id, principal)
