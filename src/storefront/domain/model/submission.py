"""Checkout input and the order submission built from it.

An OrderSubmission is a request, not a priced order: it carries product
ids and quantities only. Prices and stock are decided by the order
gateway when it accepts the submission.
"""

from __future__ import annotations

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Quantity

# (field, minimum length, message) in the order a form shows them.
_REQUIRED_FIELDS: tuple[tuple[str, int, str], ...] = (
    ("customer_name", 2, "Please enter a name (at least 2 characters)"),
    ("customer_email", 0, "Please enter a valid email address"),
    ("customer_phone", 10, "Please enter a valid phone number (at least 10 characters)"),
    ("delivery_address", 5, "Please enter a delivery address (at least 5 characters)"),
    ("delivery_city", 2, "Please enter a city (at least 2 characters)"),
)


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class CheckoutForm:
    """Customer and delivery details as typed into the checkout form."""

    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    delivery_city: str
    delivery_postal_code: str | None = None
    notes: str | None = None

    def validated(self) -> CheckoutForm:
        """Return a normalised copy, or raise on the first invalid field."""
        values: dict[str, str] = {}
        for name, min_length, message in _REQUIRED_FIELDS:
            value = (getattr(self, name) or "").strip()
            if not value or len(value) < min_length:
                raise ValidationError(message, field=name)
            values[name] = value

        try:
            validate_email(values["customer_email"], check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError(
                "Please enter a valid email address", field="customer_email"
            ) from None

        return CheckoutForm(
            delivery_postal_code=_optional(self.delivery_postal_code),
            notes=_optional(self.notes),
            **values,
        )


@dataclass(frozen=True)
class SubmissionLine:
    product_id: str
    quantity: Quantity


@dataclass(frozen=True)
class OrderSubmission:
    """Payload sent to the order gateway to create an order.

    Invariant: at least one line, every quantity >= 1 (enforced by
    ``Quantity``).
    """

    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    delivery_city: str
    items: tuple[SubmissionLine, ...]
    delivery_postal_code: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        if not self.items:
            raise ValidationError("Order must contain at least one item", field="items")
        seen: set[str] = set()
        for line in self.items:
            if line.product_id in seen:
                raise ValidationError(
                    f"Product #{line.product_id} appears more than once", field="items"
                )
            seen.add(line.product_id)

    @staticmethod
    def from_form(form: CheckoutForm, items: list[tuple[str, int]]) -> OrderSubmission:
        return OrderSubmission(
            customer_name=form.customer_name,
            customer_email=form.customer_email,
            customer_phone=form.customer_phone,
            delivery_address=form.delivery_address,
            delivery_city=form.delivery_city,
            delivery_postal_code=form.delivery_postal_code,
            notes=form.notes,
            items=tuple(
                SubmissionLine(product_id=product_id, quantity=Quantity(qty))
                for product_id, qty in items
            ),
        )
