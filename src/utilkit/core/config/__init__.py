"""utilkit configuration: layered YAML defaults with environment overrides."""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, is_cached, register_cache_clearer
from .manager import CONFIG_DIR_NAME, ENV_PREFIX, ConfigManager

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "is_cached",
    "clear_all_caches",
    "register_cache_clearer",
    "ENV_PREFIX",
    "CONFIG_DIR_NAME",
]
