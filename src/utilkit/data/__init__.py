"""
utilkit data resource helpers.

Provides utilities for accessing bundled configuration files, schemas and
reference tables using importlib.resources.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Args:
        subpackage: Name of the data subpackage (e.g., "config", "schemas", "tables")
        filename: Optional filename within the subpackage

    Returns:
        Absolute path to the file or directory

    Example:
        >>> get_data_path("tables", "countries.yaml")
        PosixPath('/path/to/utilkit/data/tables/countries.yaml')
    """
    pkg = resources.files("utilkit.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=64)
def read_yaml(subpackage: str, filename: str) -> Any:
    """
    Read and parse a bundled YAML data file (cached).

    Callers must treat the returned structure as read-only.

    Args:
        subpackage: Name of the data subpackage
        filename: YAML filename

    Returns:
        Parsed YAML content
    """
    path = get_data_path(subpackage, filename)
    return yaml.safe_load(path.read_text(encoding="utf-8"))


def list_files(subpackage: str, pattern: str = "*") -> list[Path]:
    """List files matching pattern in a data subpackage, sorted by name."""
    return sorted(get_data_path(subpackage).glob(pattern))


def clear_caches() -> None:
    """Clear all read caches."""
    read_yaml.cache_clear()


__all__ = [
    "get_data_path",
    "read_yaml",
    "list_files",
    "clear_caches",
]
