"""Application service: Create Order use case.

Orchestrates the product directory and the order store inside one unit
of work: validate every requested product, snapshot prices, persist the
order and decrement stock.  Either all of it commits or none of it does.
"""

from __future__ import annotations

import logging

from orderhub.application.dto import OrderDTO, OrderItemSpec
from orderhub.application.show_order import ShowOrderHandler
from orderhub.domain.exceptions import (
    InvalidArgumentError,
    StockConflictError,
    UnprocessableError,
)
from orderhub.domain.model.order import Order, OrderItem
from orderhub.domain.model.principal import Principal
from orderhub.domain.model.product import Product
from orderhub.domain.model.value_objects import Quantity
from orderhub.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        buyer_id: str,
        item_specs: list[OrderItemSpec],
        shipping_address: str | None = None,
        zip_code: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Create a new pending order for *buyer_id*.

        Steps:
        1. Resolve each product; it must exist, be active, have enough
           stock and share the currency of the first item.
        2. Build OrderItems with *current* prices (snapshot).
        3. Let the Order aggregate freeze the total.
        4. Persist the order and decrement stock conditionally.
        5. Re-read the committed order through the retrieval path.
        """
        if not item_specs:
            raise InvalidArgumentError("Order must contain at least one item")
        quantities = [Quantity(spec.quantity) for spec in item_specs]

        with self._uow:
            items: list[OrderItem] = []
            observed: dict[str, Product] = {}
            requested: dict[str, int] = {}
            currency: str | None = None

            for spec, quantity in zip(item_specs, quantities):
                product = self._available_product(spec.product_id)
                observed.setdefault(product.id, product)

                # the same product may appear on several lines
                requested[product.id] = requested.get(product.id, 0) + quantity.value
                if requested[product.id] > product.stock_quantity:
                    raise UnprocessableError(
                        f"Insufficient stock for product {product.title} "
                        f"(requested {requested[product.id]}, "
                        f"available {product.stock_quantity})"
                    )

                if currency is None:
                    currency = product.price.currency
                elif product.price.currency != currency:
                    raise UnprocessableError(
                        f"Currency mismatch: order is in {currency} but product "
                        f"{product.title} is priced in {product.price.currency}"
                    )

                items.append(OrderItem.snapshot(product, quantity))

            order = Order.create(
                buyer_id=buyer_id,
                items=items,
                shipping_address=shipping_address,
                zip_code=zip_code,
                notes=notes,
            )
            self._uow.orders.add(order)

            for product_id, quantity in requested.items():
                product = observed[product_id]
                try:
                    self._uow.products.set_stock(
                        product_id,
                        product.stock_quantity - quantity,
                        actor_id=buyer_id,
                        expected_quantity=product.stock_quantity,
                    )
                except StockConflictError as exc:
                    raise UnprocessableError(
                        f"Insufficient stock for product {product.title}"
                    ) from exc

            self._uow.commit()

        logger.info(
            "Order %s created for buyer %s (%d items, total %s)",
            order.id,
            buyer_id,
            len(order.items),
            order.total_amount,
        )
        return ShowOrderHandler(self._uow).handle(order.id, Principal(buyer_id))

    def _available_product(self, product_id: str) -> Product:
        product = self._uow.products.find_product(product_id)
        if product is None or not product.is_available:
            raise UnprocessableError(f"Product {product_id} is unavailable")
        return product
