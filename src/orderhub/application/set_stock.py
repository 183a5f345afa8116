"""Application service: Set Stock use case.

Direct stock edits belong to the product's seller (or an admin).  Stock
moves made by order creation and cancellation do not go through here.
"""

from __future__ import annotations

from orderhub.application.dto import ProductDTO
from orderhub.application.order_views import to_product_dto
from orderhub.domain.exceptions import EntityNotFoundError, ForbiddenError
from orderhub.domain.model.principal import Principal
from orderhub.domain.repository.unit_of_work import UnitOfWork


class SetStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, quantity: int, principal: Principal) -> ProductDTO:
        with self._uow:
            product = self._uow.products.find_product(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product {product_id} not found")

            if not principal.is_admin and product.seller_id != principal.user_id:
                raise ForbiddenError(
                    f"You are not allowed to update the stock of product {product_id}"
                )

            updated = self._uow.products.set_stock(
                product_id, quantity, actor_id=principal.user_id
            )
            self._uow.commit()

        return to_product_dto(updated)
