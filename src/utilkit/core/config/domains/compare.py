"""Domain-specific configuration for the deep-equality engine."""
from __future__ import annotations

from functools import cached_property
from typing import Any, Dict

from ..base import BaseDomainConfig


class CompareConfig(BaseDomainConfig):
    """Defaults applied when a comparison call leaves an option unset."""

    def _config_section(self) -> str:
        return "compare"

    @cached_property
    def traverse(self) -> bool:
        return bool(self.require("traverse"))

    @cached_property
    def array_strategy(self) -> str:
        return str(self.require("array_strategy"))

    @cached_property
    def function_strategy(self) -> str:
        return str(self.require("function_strategy"))

    @cached_property
    def max_depth(self) -> int:
        """Nesting depth at which comparisons raise ``RecursionLimitExceeded``."""
        return int(self.require("max_depth"))

    def get_all_settings(self) -> Dict[str, Any]:
        return {
            "traverse": self.traverse,
            "array_strategy": self.array_strategy,
            "function_strategy": self.function_strategy,
            "max_depth": self.max_depth,
        }


__all__ = ["CompareConfig"]
