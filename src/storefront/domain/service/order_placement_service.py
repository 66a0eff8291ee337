"""Domain service: Order Placement.

Turns an OrderSubmission into a priced, persisted Order. It lives in the
domain layer because pricing from live products and deducting stock are
core business rules, not just orchestration.

The two-phase approach (validate-then-mutate) ensures stock is never
left partially decremented when one line of a submission fails.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import ProductUnavailable
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.product import Product
from storefront.domain.model.submission import OrderSubmission
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class OrderPlacementService:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def place(self, submission: OrderSubmission) -> Order:
        """Create a pending order for *submission*.

        Phase 1 — load and validate: every product must exist, be
                  active and have enough stock.  Fails fast before any
                  mutation.
        Phase 2 — price, deduct and persist: build line snapshots from
                  the current prices, take the stock, save.  If the
                  order cannot be saved the stock is put back.

        Callers must serialise calls for the stock check to be atomic.
        """
        # Phase 1: load all products and validate
        reserved: list[tuple[Product, int]] = []

        for line in submission.items:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                raise ProductUnavailable(line.product_id)
            product.ensure_purchasable(line.quantity.value)
            reserved.append((product, line.quantity.value))

        # Phase 2: price from live products, then deduct
        order_lines = [
            OrderLine(
                product_id=product.id,
                product_name=product.name,
                unit_price=product.price,  # <-- price snapshot
                quantity=line.quantity,
            )
            for (product, _), line in zip(reserved, submission.items)
        ]
        order = Order.create(
            customer_name=submission.customer_name,
            customer_email=submission.customer_email,
            customer_phone=submission.customer_phone,
            delivery_address=submission.delivery_address,
            delivery_city=submission.delivery_city,
            delivery_postal_code=submission.delivery_postal_code,
            notes=submission.notes,
            lines=order_lines,
        )

        for product, qty in reserved:
            product.take_stock(qty)
        self._product_repo.save_all([product for product, _ in reserved])
        try:
            self._order_repo.save(order)
        except Exception:
            # Put the stock back so the failed placement leaves no trace.
            for product, qty in reserved:
                product.set_stock(product.stock_quantity + qty)
            self._product_repo.save_all([product for product, _ in reserved])
            logger.warning("Order save failed, stock restored", line_count=len(reserved))
            raise

        logger.info(
            "Order placed",
            order_id=order.id,
            total=str(order.total_amount),
            line_count=len(order.lines),
        )
        return order
