"""Application service: Change Order Status use case.

Looks an order up by ID and runs the requested move through the
lifecycle controller, so admin tools that only know the ID get the
same edge checks as a detail view holding the whole order.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.application.order_lifecycle import OrderLifecycleController
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.gateways import OrderGateway


class ChangeOrderStatusHandler:

    def __init__(
        self,
        order_gateway: OrderGateway,
        controller: OrderLifecycleController | None = None,
    ) -> None:
        self._order_gateway = order_gateway
        self._controller = controller or OrderLifecycleController(order_gateway)

    def handle(self, order_id: str, status: OrderStatus | str) -> OrderDTO:
        order, _ = self._order_gateway.get_order_detail(order_id)
        self._controller.apply_status(order, status)

        # Refresh the detail view against what the gateway now holds.
        refreshed, lines = self._order_gateway.get_order_detail(order_id)
        next_statuses = [
            s.value for s in OrderLifecycleController.allowed_targets(refreshed)
        ]
        return OrderDTO.from_domain(refreshed, lines, next_statuses)
