"""Process-wide defaults for the comparison and merge engines.

Defaults come from the bundled ``compare`` and ``merge`` sections and are read
once per process. User, project and ``UTILKIT_*`` layers only apply after an
explicit :func:`configure_defaults` call, so engine calls never look at the
working directory or the environment.
"""
from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from utilkit.data import read_yaml as read_data_yaml

_compare_defaults: Optional[Mapping[str, Any]] = None
_merge_defaults: Optional[Mapping[str, Any]] = None


def _bundled_section(name: str) -> Mapping[str, Any]:
    return MappingProxyType(dict(read_data_yaml("config", f"{name}.yaml")[name]))


def compare_defaults() -> Mapping[str, Any]:
    """Return the settings used for unset comparison options."""
    global _compare_defaults
    if _compare_defaults is None:
        _compare_defaults = _bundled_section("compare")
    return _compare_defaults


def merge_defaults() -> Mapping[str, Any]:
    """Return the settings used for unset merge options."""
    global _merge_defaults
    if _merge_defaults is None:
        _merge_defaults = _bundled_section("merge")
    return _merge_defaults


def configure_defaults(root: Optional[Path] = None) -> None:
    """Adopt the layered configuration for ``root`` as engine defaults.

    Loads user, project (``root`` or the current directory) and environment
    layers on top of the bundled ones, validates them, and keeps the resulting
    ``compare`` and ``merge`` sections until :func:`reset_defaults`.

    Raises:
        ConfigError: If the layered configuration is invalid
    """
    global _compare_defaults, _merge_defaults
    from utilkit.core.config.domains import CompareConfig, MergeConfig

    compare = CompareConfig(root=root).get_all_settings()
    merge = MergeConfig(root=root).get_all_settings()
    _compare_defaults = MappingProxyType(compare)
    _merge_defaults = MappingProxyType(merge)


def reset_defaults() -> None:
    """Go back to the bundled defaults."""
    global _compare_defaults, _merge_defaults
    _compare_defaults = None
    _merge_defaults = None


__all__ = ["compare_defaults", "merge_defaults", "configure_defaults", "reset_defaults"]
