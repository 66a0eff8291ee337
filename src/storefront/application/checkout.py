"""Application service: the Checkout Assembler.

Turns the cart plus the checkout form into an OrderSubmission, hands it
to the order gateway and, only once the gateway has accepted it, clears
the cart. Any failure leaves the cart untouched so the customer can
retry without re-entering anything.
"""

from __future__ import annotations

import structlog

from storefront.application.cart_store import CartStore
from storefront.domain.exceptions import EmptyCart, SubmissionInProgress
from storefront.domain.model.order import Order
from storefront.domain.model.submission import CheckoutForm, OrderSubmission
from storefront.domain.repository.gateways import OrderGateway

logger = structlog.get_logger(__name__)


class CheckoutAssembler:

    def __init__(self, cart: CartStore, order_gateway: OrderGateway) -> None:
        self._cart = cart
        self._order_gateway = order_gateway
        self._in_flight = False

    @property
    def submitting(self) -> bool:
        return self._in_flight

    def assemble(self, form: CheckoutForm) -> OrderSubmission:
        """Validate and build the submission without sending it.

        Steps:
        1. Reject an empty cart.
        2. Validate the form, first invalid field wins.
        3. Project cart lines to (product_id, quantity); cart prices
           are not sent.
        """
        if self._cart.is_empty:
            raise EmptyCart()
        valid = form.validated()
        return OrderSubmission.from_form(
            valid,
            [(line.product_id, line.quantity) for line in self._cart.lines()],
        )

    def submit(self, form: CheckoutForm) -> Order:
        """Place an order for the current cart."""
        if self._in_flight:
            raise SubmissionInProgress("An order submission is already in progress")

        submission = self.assemble(form)

        self._in_flight = True
        try:
            order = self._order_gateway.create_order(submission)
        finally:
            self._in_flight = False

        self._cart.clear()
        logger.info("Checkout completed", order_id=order.id, total=str(order.total_amount))
        return order
