"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. All domain configs should use this module's caching instead of
implementing their own.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from utilkit.core.exceptions import ConfigError

# ---------------------------------------------------------------------------
# Global Cache Registry
# ---------------------------------------------------------------------------

_config_cache: Dict[str, Dict[str, Any]] = {}
_cache_clearers: Dict[str, Callable[[], None]] = {}


def _normalize_root(root: Optional[Path]) -> Path:
    if root is None:
        return Path.cwd().resolve()
    return Path(root).expanduser().resolve()


def _fingerprint_files(paths: List[Path]) -> List[Tuple[str, int, int]]:
    files: List[Tuple[str, int, int]] = []
    for p in paths:
        try:
            st = p.stat()
        except FileNotFoundError:
            continue
        files.append((str(p), int(st.st_mtime_ns), int(st.st_size)))
    return files


def _cache_key(root: Path, validate: bool) -> str:
    """Generate cache key from root, environment overrides and config file stats.

    Tests and long-running processes may mutate UTILKIT_* env vars or write
    config files after an initial load, so both are part of the key.
    """
    from .manager import ENV_PREFIX, ConfigManager

    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files = _fingerprint_files(ConfigManager(root).config_files())
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    suffix = ":validated" if validate else ":raw"
    return f"{root}{suffix}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(root: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same root, environment
    and config files, avoiding repeated file I/O.

    Args:
        root: Project root path. Uses the current directory if None.
        validate: Whether to validate against schema.

    Returns:
        Configuration dictionary (cached). Callers must not mutate it.
    """
    normalized_root = _normalize_root(root)
    key = _cache_key(normalized_root, validate)

    if key not in _config_cache:
        # Lazy import to avoid circular dependency
        from .manager import ConfigManager

        _config_cache[key] = ConfigManager(normalized_root)._load_config_uncached(validate=validate)
    return _config_cache[key]


def is_cached(root: Optional[Path] = None, validate: bool = True) -> bool:
    """Return True when a config for ``root`` is already loaded."""
    return _cache_key(_normalize_root(root), validate) in _config_cache


def register_cache_clearer(name: str, clearer: Callable[[], None]) -> None:
    """Register an extra cache that must be reset together with the config cache."""
    if not callable(clearer):
        raise ConfigError(f"Cache clearer '{name}' is not callable", context={"name": name})
    _cache_clearers[name] = clearer


def clear_all_caches() -> None:
    """Clear the config cache, bundled data caches, engine defaults and registered caches."""
    _config_cache.clear()

    from utilkit.core.utils.defaults import reset_defaults
    from utilkit.data import clear_caches as clear_data_caches

    clear_data_caches()
    reset_defaults()
    for clearer in list(_cache_clearers.values()):
        clearer()


__all__ = [
    "get_cached_config",
    "is_cached",
    "register_cache_clearer",
    "clear_all_caches",
]
