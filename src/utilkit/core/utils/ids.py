"""Random identifier helpers."""
from __future__ import annotations

import logging
import random
import secrets
import string
from enum import Enum
from typing import Optional, Union

from utilkit.core.exceptions import InvalidArgumentError

from .compare import coerce_strategy

logger = logging.getLogger(__name__)

ID_LENGTHS = (6, 10, 20, 30)
NUMBER_STRING_LENGTHS = (5, 10, 15)

_BASE36 = string.digits + string.ascii_lowercase


class CryptoMode(str, Enum):
    """Randomness source for :func:`generate_id`."""

    WITH_FALLBACK = "with_fallback"
    ONLY = "only"
    DISABLED = "disabled"


def _crypto_part(characters: int) -> str:
    return secrets.token_hex(characters // 2)


def _fallback_part(characters: int) -> str:
    return "".join(random.choice(_BASE36) for _ in range(characters))


def generate_id(
    prefix: str = "",
    characters: Optional[int] = None,
    crypto: Union[CryptoMode, str, None] = None,
) -> str:
    """Generate a random ID, optionally prefixed (``user`` -> ``user_3f9c...``).

    Args:
        prefix: Prefix describing what the ID identifies; joined with ``_``
        characters: Length of the random part, one of 6, 10, 20, 30
            (default: ``ids.characters``)
        crypto: ``with_fallback`` uses the OS CSPRNG and falls back to a
            base36 string; ``only`` fails instead of falling back;
            ``disabled`` always uses the base36 string
            (default: ``ids.crypto``)

    Raises:
        InvalidArgumentError: For an unsupported length or crypto mode
    """
    if characters is None or crypto is None:
        from utilkit.core.config.domains import IdsConfig

        cfg = IdsConfig()
        if characters is None:
            characters = cfg.characters
        if crypto is None:
            crypto = cfg.crypto

    if characters not in ID_LENGTHS or isinstance(characters, bool):
        raise InvalidArgumentError(
            f"characters must be one of {ID_LENGTHS}, got {characters!r}",
            context={"characters": characters},
        )
    mode = coerce_strategy(CryptoMode, crypto, "crypto")

    body = ""
    if mode is not CryptoMode.DISABLED:
        try:
            body = _crypto_part(characters)
        except NotImplementedError:
            # os.urandom has no entropy source on this platform.
            if mode is CryptoMode.ONLY:
                raise
            logger.debug("No CSPRNG available, using base36 fallback for generate_id")
    if not body:
        body = _fallback_part(characters)

    return f"{prefix}_{body}" if prefix else body


gen_id = generate_id


def random_number_string(chars: int = 10) -> str:
    """Return a string of ``chars`` random digits (5, 10 or 15)."""
    if chars not in NUMBER_STRING_LENGTHS or isinstance(chars, bool):
        raise InvalidArgumentError(
            f"chars must be one of {NUMBER_STRING_LENGTHS}, got {chars!r}",
            context={"chars": chars},
        )
    return "".join(random.choice(string.digits) for _ in range(chars))


__all__ = [
    "CryptoMode",
    "ID_LENGTHS",
    "NUMBER_STRING_LENGTHS",
    "generate_id",
    "gen_id",
    "random_number_string",
]
