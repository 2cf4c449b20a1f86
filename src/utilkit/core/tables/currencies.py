"""ISO 4217 currency metadata and the currency used per country."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from utilkit.core.exceptions import InvalidArgumentError, UnknownCodeError
from utilkit.data import read_yaml


@dataclass(frozen=True)
class Currency:
    symbol: str
    name: str
    symbol_native: str
    decimal_digits: int
    code: str
    name_plural: str


def _load() -> Mapping[str, Any]:
    return read_yaml("tables", "currencies.yaml")


_DATA = _load()

CURRENCIES: Mapping[str, Currency] = MappingProxyType(
    {code: Currency(**fields) for code, fields in _DATA["currencies"].items()}
)
COUNTRY_CURRENCIES: Mapping[str, str] = MappingProxyType(dict(_DATA["country_currencies"]))


def get_currency(code: str) -> Currency:
    """Look up a currency by ISO 4217 code (``EUR``) or country code (``FR``).

    Raises:
        InvalidArgumentError: If ``code`` is not a 2- or 3-letter string
        UnknownCodeError: If no currency is known for ``code``
    """
    if not isinstance(code, str) or len(code.strip()) not in (2, 3) or not code.strip().isalpha():
        raise InvalidArgumentError(
            f"Expected a 3-letter currency code or 2-letter country code, got {code!r}",
            context={"code": str(code)},
        )
    key = code.strip().upper()
    if len(key) == 2:
        if key not in COUNTRY_CURRENCIES:
            raise UnknownCodeError(f"No currency known for country {key}", context={"code": key})
        key = COUNTRY_CURRENCIES[key]
    try:
        return CURRENCIES[key]
    except KeyError:
        raise UnknownCodeError(f"Unknown currency code: {key}", context={"code": key}) from None


def get_currency_symbol(code: str) -> str:
    """Return the international symbol (``CA$``, ``€``) for a currency or country code."""
    return get_currency(code).symbol


__all__ = [
    "Currency",
    "CURRENCIES",
    "COUNTRY_CURRENCIES",
    "get_currency",
    "get_currency_symbol",
]
