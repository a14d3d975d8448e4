"""Immutable values carried by products and orders.

Money and Quantity validate on construction; addresses and contact
details are checked where a cart is validated.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from checkout.domain.exceptions import ValidationError

BASE_CURRENCY = "USD"


@dataclass(frozen=True)
class Money:
    """An amount in one currency.

    Decimal throughout.  Conversion and multiplication keep full precision;
    only ``__str__`` rounds, to two places.
    """

    amount: Decimal
    currency: str = BASE_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def convert(self, rate: Decimal, currency: str) -> Money:
        """Express this base-currency amount in *currency* at *rate*."""
        if rate <= 0:
            raise ValidationError(f"Exchange rate must be positive, got {rate}")
        return Money(self.amount * rate, currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = BASE_CURRENCY) -> Money:
        """Build from a str, int, float or Decimal via its string form."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = BASE_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class Quantity:
    """Units of a product on an order line; always a positive int."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; True must not sneak in as 1
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ShippingAddress:
    street: str
    city: str
    country: str

    @property
    def is_complete(self) -> bool:
        return all(
            value and value.strip()
            for value in (self.street, self.city, self.country)
        )

    def __str__(self) -> str:
        return f"{self.street}, {self.city}, {self.country}"


@dataclass(frozen=True)
class CustomerInfo:
    """Contact details copied onto the order.

    Email and mobile are required for every order; names are optional
    because guest checkouts may skip them.
    """

    email: str
    mobile: str
    first_name: str | None = None
    last_name: str | None = None
    secondary_mobile: str | None = None

    @property
    def has_contact(self) -> bool:
        return bool(self.email and self.email.strip()) and bool(
            self.mobile and self.mobile.strip()
        )

    @property
    def display_name(self) -> str:
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return name or self.email
