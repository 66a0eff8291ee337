"""Application service: the Order Lifecycle Controller.

Every admin status change goes through ``apply_status``, which checks
the move against the allowed-edge table before anything is sent to the
order gateway. A rejected move never reaches the gateway.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from storefront.domain.exceptions import InvalidTransition, SubmissionInProgress
from storefront.domain.model.order import ALLOWED_TRANSITIONS, Order, OrderStatus
from storefront.domain.repository.gateways import OrderGateway

logger = structlog.get_logger(__name__)

OrderObserver = Callable[[Order], None]


class OrderLifecycleController:

    def __init__(self, order_gateway: OrderGateway) -> None:
        self._order_gateway = order_gateway
        self._observers: list[OrderObserver] = []
        self._in_flight: set[str] = set()

    # --- Observers ------------------------------------------------------------

    def subscribe(self, observer: OrderObserver) -> None:
        """Register a callback that receives each updated order."""
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: OrderObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # --- Transitions ----------------------------------------------------------

    @staticmethod
    def allowed_targets(order: Order) -> list[OrderStatus]:
        """Statuses an admin may move *order* to, in lifecycle order."""
        targets = ALLOWED_TRANSITIONS[order.status]
        return [status for status in OrderStatus if status in targets]

    def apply_status(self, order: Order, target: OrderStatus | str) -> Order:
        """Move *order* to *target* and return the updated snapshot.

        Applying the order's current status is a no-op that returns the
        same order.
        """
        target = OrderStatus.parse(target)
        if target == order.status:
            return order

        if not order.can_transition_to(target):
            logger.warning(
                "Status change rejected",
                order_id=order.id,
                current=order.status.value,
                target=target.value,
            )
            raise InvalidTransition(order.status.value, target.value)

        if order.id in self._in_flight:
            raise SubmissionInProgress(f"A status change for order {order.id} is already in progress")

        self._in_flight.add(order.id)
        try:
            updated = self._order_gateway.set_order_status(order.id, target)
        finally:
            self._in_flight.discard(order.id)

        logger.info(
            "Order status changed",
            order_id=order.id,
            previous=order.status.value,
            status=updated.status.value,
        )
        for observer in list(self._observers):
            observer(updated)
        return updated
