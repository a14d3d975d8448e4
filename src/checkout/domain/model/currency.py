"""Currency value object."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Currency:
    """A supported currency and its multiplier against the base currency."""

    code: str
    name: str
    symbol: str
    decimal_places: int
    exchange_rate: Decimal

    def format(self, amount: Decimal) -> str:
        return f"{amount:.{self.decimal_places}f} {self.code}"
