"""Domain-specific configuration for identifier generation."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class IdsConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "ids"

    @cached_property
    def characters(self) -> int:
        """Default random-part length for ``generate_id``."""
        return int(self.require("characters"))

    @cached_property
    def crypto(self) -> str:
        """Default randomness source: ``with_fallback``, ``only`` or ``disabled``."""
        return str(self.require("crypto"))


__all__ = ["IdsConfig"]
