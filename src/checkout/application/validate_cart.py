"""Pre-checks run before any unit of work is opened.

Cheapest failures first: a malformed request never touches the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from checkout.application.dto import CartRequest
from checkout.domain.exceptions import ValidationError
from checkout.domain.model.order import PaymentMethod
from checkout.domain.model.value_objects import BASE_CURRENCY, Quantity
from checkout.domain.repository.currency_table import CurrencyTable


@dataclass(frozen=True)
class ValidatedCart:
    payment_method: PaymentMethod
    currency: str
    exchange_rate: Decimal


def validate_cart(request: CartRequest, currency_table: CurrencyTable) -> ValidatedCart:
    """Check required fields, quantities, payment method and currency.

    Raises ValidationError or UnsupportedCurrencyError.
    """
    if not request.items:
        raise ValidationError("Order must contain at least one item")

    for spec in request.items:
        if not spec.product_id or not str(spec.product_id).strip():
            raise ValidationError("Every item must reference a product")
        Quantity(spec.quantity)

    if request.customer_info is None or not request.customer_info.has_contact:
        raise ValidationError("Customer email and mobile number are required")

    if request.shipping_address is None or not request.shipping_address.is_complete:
        raise ValidationError("Complete shipping address is required")

    try:
        payment_method = PaymentMethod(request.payment_method)
    except ValueError:
        raise ValidationError(
            f"Unsupported payment method: {request.payment_method!r}"
        )

    currency = request.currency or BASE_CURRENCY
    exchange_rate = currency_table.get_exchange_rate(currency)

    return ValidatedCart(
        payment_method=payment_method,
        currency=currency,
        exchange_rate=exchange_rate,
    )
