"""Pattern checks for common string formats."""
from __future__ import annotations

import re

_ISO8601 = re.compile(
    r"(-?(?:[1-9][0-9]*)?[0-9]{4})-(1[0-2]|0[1-9])-(3[01]|0[1-9]|[12][0-9])"
    r"T(2[0-3]|[01][0-9]):([0-5][0-9]):([0-5][0-9])(\.[0-9]+)?(Z)?"
)

_BASE64 = re.compile(r"([A-Za-z0-9+/]{4})*([A-Za-z0-9+/]{3}=|[A-Za-z0-9+/]{2}==)?")

_URL = re.compile(
    r"(?:(?:https?|ftp)://)"
    r"(?:\S+(?::\S*)?@)?"
    r"(?:"
    # private and local networks are excluded
    r"(?!(?:10|127)(?:\.\d{1,3}){3})"
    r"(?!(?:169\.254|192\.168)(?:\.\d{1,3}){2})"
    r"(?!172\.(?:1[6-9]|2\d|3[0-1])(?:\.\d{1,3}){2})"
    r"(?:[1-9]\d?|1\d\d|2[01]\d|22[0-3])"
    r"(?:\.(?:1?\d{1,2}|2[0-4]\d|25[0-5])){2}"
    r"(?:\.(?:[1-9]\d?|1\d\d|2[0-4]\d|25[0-4]))"
    r"|"
    r"(?:(?:[a-z\u00a1-\uffff0-9]-*)*[a-z\u00a1-\uffff0-9]+)"
    r"(?:\.(?:[a-z\u00a1-\uffff0-9]-*)*[a-z\u00a1-\uffff0-9]+)*"
    r"(?:\.(?:[a-z\u00a1-\uffff]{2,}))\.?"
    r")"
    r"(?::\d{2,5})?"
    r"(?:[/?#]\S*)?",
    re.IGNORECASE,
)

_DOMAIN = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9-]{1,61}[a-zA-Z0-9](?:\.[a-zA-Z]{2,})+")


def is_valid_iso8601(text: str) -> bool:
    """Return True for ``YYYY-MM-DDTHH:MM:SS[.fff][Z]`` timestamps."""
    return bool(_ISO8601.fullmatch(text))


def is_base64_encoded(text: str) -> bool:
    """Return True when ``text`` is padded standard Base64 (empty string included)."""
    return bool(_BASE64.fullmatch(text))


def is_url(text: str) -> bool:
    """Return True for public http(s)/ftp URLs; private IP ranges are rejected."""
    return bool(_URL.fullmatch(text))


def is_domain_or_url(text: str) -> bool:
    return bool(_DOMAIN.fullmatch(text)) or is_url(text)


__all__ = ["is_valid_iso8601", "is_base64_encoded", "is_url", "is_domain_or_url"]
