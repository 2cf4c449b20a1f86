"""Static reference tables (countries, currencies)."""
from __future__ import annotations

from .countries import (
    COUNTRIES,
    COUNTRY_CODES_2,
    COUNTRY_CODES_3,
    alpha2_code,
    alpha3_code,
    country_code,
    country_name,
)
from .currencies import COUNTRY_CURRENCIES, CURRENCIES, Currency, get_currency, get_currency_symbol

__all__ = [
    "COUNTRIES",
    "COUNTRY_CODES_2",
    "COUNTRY_CODES_3",
    "country_code",
    "country_name",
    "alpha3_code",
    "alpha2_code",
    "Currency",
    "CURRENCIES",
    "COUNTRY_CURRENCIES",
    "get_currency",
    "get_currency_symbol",
]
