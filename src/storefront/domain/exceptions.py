"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
None of them is fatal: each one is reported to the caller, which keeps the
cart and form state it already had.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated.

    ``field`` names the offending form field when there is one, so a form
    can highlight it.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OutOfStock(DomainException):
    """The requested quantity exceeds the available stock."""

    def __init__(self, product_id: str, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for '{product_name}' "
            f"(requested {requested}, available {available})"
        )
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available


class EmptyCart(DomainException):
    """Checkout was attempted with nothing in the cart."""

    def __init__(self) -> None:
        super().__init__("Cart is empty")


class ProductUnavailable(DomainException):
    """The product is inactive or no longer exists."""

    def __init__(self, product_id: str, product_name: str | None = None) -> None:
        label = f"'{product_name}'" if product_name else f"#{product_id}"
        super().__init__(f"Product {label} is no longer available")
        self.product_id = product_id
        self.product_name = product_name


class InvalidTransition(DomainException):
    """An order status change is not permitted from the current status."""

    def __init__(self, current: str, target: str) -> None:
        super().__init__(f"Cannot change order status from {current} to {target}")
        self.current = current
        self.target = target


class TransportFailure(DomainException):
    """A collaborator could not be reached; the caller may retry."""


class SubmissionInProgress(DomainException):
    """The same action is already in flight."""
