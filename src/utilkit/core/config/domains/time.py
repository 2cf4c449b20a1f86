"""Domain-specific configuration for time formatting.

Controls how ``utilkit.core.utils.time`` renders ISO 8601 timestamps.
"""
from __future__ import annotations

from functools import cached_property
from typing import Any, Dict

from utilkit.core.exceptions import ConfigError

from ..base import BaseDomainConfig


class TimeConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "time"

    @cached_property
    def iso8601(self) -> Dict[str, Any]:
        value = self.require("iso8601")
        if not isinstance(value, dict):
            raise ConfigError("time.iso8601 must be a mapping", context={"section": "time"})
        return value

    @cached_property
    def timespec(self) -> str:
        return str(self.iso8601.get("timespec", "seconds"))

    @cached_property
    def use_z_suffix(self) -> bool:
        return bool(self.iso8601.get("use_z_suffix", True))

    @cached_property
    def strip_microseconds(self) -> bool:
        return bool(self.iso8601.get("strip_microseconds", True))


__all__ = ["TimeConfig"]
