"""ISO 3166-1 country names and codes.

Loaded once from ``utilkit/data/tables/countries.yaml``; every exported table
is read-only.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from utilkit.core.exceptions import InvalidArgumentError, UnknownCodeError
from utilkit.data import read_yaml


def _load() -> List[Dict[str, Any]]:
    rows = read_yaml("tables", "countries.yaml")["countries"]
    return [dict(row) for row in rows]


_ROWS = _load()

COUNTRIES: Tuple[str, ...] = tuple(row["name"] for row in _ROWS)
COUNTRY_CODES_2: Mapping[str, str] = MappingProxyType({row["name"]: row["alpha2"] for row in _ROWS})
COUNTRY_CODES_3: Mapping[str, str] = MappingProxyType({row["alpha2"]: row["alpha3"] for row in _ROWS})

_NAMES_BY_ALPHA2: Mapping[str, str] = MappingProxyType({row["alpha2"]: row["name"] for row in _ROWS})
_ALPHA2_BY_ALPHA3: Mapping[str, str] = MappingProxyType({row["alpha3"]: row["alpha2"] for row in _ROWS})
_CODES_BY_FOLDED_NAME: Mapping[str, str] = MappingProxyType({row["name"].casefold(): row["alpha2"] for row in _ROWS})


def _normalize_code(code: Any, length: int) -> str:
    if not isinstance(code, str) or len(code.strip()) != length or not code.strip().isalpha():
        raise InvalidArgumentError(
            f"Expected a {length}-letter country code, got {code!r}",
            context={"code": str(code)},
        )
    return code.strip().upper()


def country_code(name: str) -> str:
    """Return the alpha-2 code for a country name (case-insensitive)."""
    try:
        return _CODES_BY_FOLDED_NAME[str(name).strip().casefold()]
    except KeyError:
        raise UnknownCodeError(f"Unknown country: {name!r}", context={"name": str(name)}) from None


def country_name(code: str) -> str:
    """Return the country name for an alpha-2 or alpha-3 code."""
    if isinstance(code, str) and len(code.strip()) == 3:
        code = alpha2_code(code)
    alpha2 = _normalize_code(code, 2)
    try:
        return _NAMES_BY_ALPHA2[alpha2]
    except KeyError:
        raise UnknownCodeError(f"Unknown country code: {code!r}", context={"code": alpha2}) from None


def alpha3_code(alpha2: str) -> str:
    code = _normalize_code(alpha2, 2)
    try:
        return COUNTRY_CODES_3[code]
    except KeyError:
        raise UnknownCodeError(f"Unknown country code: {alpha2!r}", context={"code": code}) from None


def alpha2_code(alpha3: str) -> str:
    code = _normalize_code(alpha3, 3)
    try:
        return _ALPHA2_BY_ALPHA3[code]
    except KeyError:
        raise UnknownCodeError(f"Unknown country code: {alpha3!r}", context={"code": code}) from None


__all__ = [
    "COUNTRIES",
    "COUNTRY_CODES_2",
    "COUNTRY_CODES_3",
    "country_code",
    "country_name",
    "alpha3_code",
    "alpha2_code",
]
