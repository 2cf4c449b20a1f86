"""Domain-specific configuration accessors."""
from __future__ import annotations

from .compare import CompareConfig
from .ids import IdsConfig
from .logging import LoggingConfig
from .merge import MergeConfig
from .time import TimeConfig

__all__ = [
    "CompareConfig",
    "MergeConfig",
    "IdsConfig",
    "TimeConfig",
    "LoggingConfig",
]
