"""Text utilities.

- case: snake_case / camelCase / Title Case conversions
- validators: ISO 8601, Base64, URL and domain pattern checks
- units: byte count formatting
"""
from __future__ import annotations

from .case import camel_to_snake, camel_to_title, capitalise, snake_to_camel
from .units import BYTE_UNITS, format_bytes
from .validators import is_base64_encoded, is_domain_or_url, is_url, is_valid_iso8601

__all__ = [
    # case
    "snake_to_camel",
    "camel_to_snake",
    "camel_to_title",
    "capitalise",
    # validators
    "is_valid_iso8601",
    "is_base64_encoded",
    "is_url",
    "is_domain_or_url",
    # units
    "format_bytes",
    "BYTE_UNITS",
]
