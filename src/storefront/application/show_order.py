"""Application service: Show Order and List Orders use cases (queries)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, OrderSummaryDTO
from storefront.application.order_lifecycle import OrderLifecycleController
from storefront.domain.repository.gateways import OrderGateway


class ShowOrderHandler:

    def __init__(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway

    def handle(self, order_id: str) -> OrderDTO:
        order, lines = self._order_gateway.get_order_detail(order_id)
        next_statuses = [
            status.value for status in OrderLifecycleController.allowed_targets(order)
        ]
        return OrderDTO.from_domain(order, lines, next_statuses)


class ListOrdersHandler:

    def __init__(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway

    def handle(self) -> list[OrderSummaryDTO]:
        return [OrderSummaryDTO.from_domain(o) for o in self._order_gateway.list_orders()]
