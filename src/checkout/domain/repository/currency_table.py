"""Abstract lookup for supported currencies and exchange rates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from checkout.domain.exceptions import UnsupportedCurrencyError
from checkout.domain.model.currency import Currency


class CurrencyTable(ABC):

    @abstractmethod
    def get(self, code: str) -> Currency | None:
        """Return the currency for *code*, or None if unsupported."""

    @abstractmethod
    def list_all(self) -> list[Currency]:
        """Return every supported currency."""

    def get_exchange_rate(self, code: str) -> Decimal:
        """Return the multiplier for *code* against the base currency.

        Raises UnsupportedCurrencyError for unknown codes.
        """
        currency = self.get(code)
        if currency is None:
            raise UnsupportedCurrencyError(code)
        return currency.exchange_rate
