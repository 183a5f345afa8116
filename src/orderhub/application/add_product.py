"""Application service: Add Product use case."""

from __future__ import annotations

from orderhub.application.dto import ProductDTO
from orderhub.application.order_views import to_product_dto
from orderhub.domain.model.product import Product
from orderhub.domain.model.value_objects import Money
from orderhub.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        title: str,
        price: str,
        currency: str,
        stock_quantity: int,
        seller_id: str,
        active: bool = True,
    ) -> ProductDTO:
        """Register a new product in the directory."""
        product = Product.create(
            title=title,
            price=Money.of(price, currency),
            stock_quantity=stock_quantity,
            seller_id=seller_id,
            active=active,
        )

        with self._uow:
            self._uow.products.add(product)
            self._uow.commit()

        return to_product_dto(product)
