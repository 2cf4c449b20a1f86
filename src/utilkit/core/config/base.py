"""Base class for domain-specific configuration accessors.

Provides a standardized pattern for all domain configs with:
- Centralized caching via cache.py
- Consistent root handling
- Typed section access
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from utilkit.core.exceptions import ConfigError

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.require("my_setting")

        cfg = MyConfig(root=Path("/path/to/project"))
        print(cfg.my_setting)
    """

    def __init__(self, root: Optional[Path] = None) -> None:
        self._root = root
        # Load config via centralized cache
        self._config = get_cached_config(root=root)

    @property
    def root(self) -> Path:
        """Return the explicit root, or the current directory."""
        if self._root:
            return Path(self._root)
        return Path.cwd()

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """Get this domain's configuration section, or an empty dict."""
        return self._config.get(self._config_section(), {}) or {}

    def require(self, key: str) -> Any:
        """Return ``section[key]`` or raise :class:`ConfigError` when missing."""
        name = self._config_section()
        if not self.section:
            raise ConfigError(f"{name} section missing from configuration", context={"section": name})
        if key not in self.section:
            raise ConfigError(f"{name}.{key} missing from configuration", context={"section": name, "key": key})
        return self.section[key]


__all__ = ["BaseDomainConfig"]
