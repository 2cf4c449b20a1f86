"""Domain-specific configuration for the merge engine."""
from __future__ import annotations

from functools import cached_property
from typing import Dict

from ..base import BaseDomainConfig


class MergeConfig(BaseDomainConfig):
    """Defaults for ``object_merge`` and ``array_merge``.

    ``function_strategy`` governs duplicate detection for callables in plain
    merges; ``deep_function_strategy`` replaces it when ``deep=True``.
    """

    def _config_section(self) -> str:
        return "merge"

    @cached_property
    def array_strategy(self) -> str:
        return str(self.require("array_strategy"))

    @cached_property
    def comparison_strategy(self) -> str:
        return str(self.require("comparison_strategy"))

    @cached_property
    def function_strategy(self) -> str:
        return str(self.require("function_strategy"))

    @cached_property
    def deep_function_strategy(self) -> str:
        return str(self.require("deep_function_strategy"))

    def get_all_settings(self) -> Dict[str, str]:
        return {
            "array_strategy": self.array_strategy,
            "comparison_strategy": self.comparison_strategy,
            "function_strategy": self.function_strategy,
            "deep_function_strategy": self.deep_function_strategy,
        }


__all__ = ["MergeConfig"]
