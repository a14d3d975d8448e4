"""In-process currency table with the storefront's supported currencies.

Rates are multipliers against USD, the base currency.
"""

from __future__ import annotations

from decimal import Decimal

from checkout.domain.model.currency import Currency
from checkout.domain.repository.currency_table import CurrencyTable


def _c(code: str, name: str, symbol: str, places: int, rate: str) -> Currency:
    return Currency(code, name, symbol, places, Decimal(rate))


SUPPORTED_CURRENCIES: tuple[Currency, ...] = (
    # Global
    _c("USD", "US Dollar", "$", 2, "1"),
    _c("EUR", "Euro", "€", 2, "1"),
    _c("GBP", "British Pound", "£", 2, "0.86"),
    # Gulf
    _c("AED", "UAE Dirham", "د.إ", 2, "3.97"),
    _c("SAR", "Saudi Riyal", "ر.س", 2, "4.05"),
    _c("QAR", "Qatari Riyal", "ر.ق", 2, "3.93"),
    _c("KWD", "Kuwaiti Dinar", "د.ك", 3, "0.33"),
    _c("BHD", "Bahraini Dinar", "د.ب", 3, "0.41"),
    _c("OMR", "Omani Rial", "ر.ع", 3, "0.42"),
    # Levant & North Africa
    _c("JOD", "Jordanian Dinar", "د.ا", 3, "0.77"),
    _c("LBP", "Lebanese Pound", "ل.ل", 0, "16200"),
    _c("EGP", "Egyptian Pound", "ج.م", 2, "33.37"),
    # Other Middle East
    _c("IQD", "Iraqi Dinar", "ع.د", 0, "1415"),
    _c("ILS", "Israeli Shekel", "₪", 2, "3.89"),
    _c("SYP", "Syrian Pound", "ل.س", 0, "13175"),
    _c("PAB", "Palestinian Balboa", "د.ف", 2, "1.08"),
)


class StaticCurrencyTable(CurrencyTable):

    def __init__(self, currencies: tuple[Currency, ...] | list[Currency] = SUPPORTED_CURRENCIES) -> None:
        self._by_code = {c.code: c for c in currencies}

    def get(self, code: str) -> Currency | None:
        return self._by_code.get(code)

    def list_all(self) -> list[Currency]:
        return list(self._by_code.values())
