"""
utilkit configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import jsonschema
import yaml

from utilkit.core.exceptions import ConfigError
from utilkit.core.utils.io import iter_yaml_files, read_yaml
from utilkit.core.utils.merge import deep_merge as _deep_merge
from utilkit.data import get_data_path
from utilkit.data import read_yaml as read_data_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "UTILKIT_"
CONFIG_DIR_NAME = ".utilkit"
SCHEMA_FILE = "config.schema.yaml"


class ConfigManager:
    """Load, merge, and validate utilkit configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: UTILKIT_<section>__<key>
    2. Project config: <root>/.utilkit/config/*.yaml (alphabetical order)
    3. User config: ~/.utilkit/config/*.yaml (alphabetical order)
    4. Bundled defaults: utilkit.data/config/*.yaml (alphabetical order)

    All YAML files are loaded and merged - no special handling for any file name.
    """

    def __init__(self, root: Optional[Path] = None, *, user_dir: Optional[Path] = None) -> None:
        self.root = Path(root) if root is not None else Path.cwd()

        # Bundled defaults from utilkit.data package (always available)
        self.core_config_dir = get_data_path("config")

        user_root = Path(user_dir) if user_dir is not None else Path.home() / CONFIG_DIR_NAME
        self.user_config_dir = user_root / "config"

        self.project_config_dir = self.root / CONFIG_DIR_NAME / "config"

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
        return data

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = read_data_yaml("schemas", SCHEMA_FILE)
        try:
            jsonschema.validate(instance=config, schema=schema)
        except jsonschema.ValidationError as exc:
            location = ".".join(str(p) for p in exc.absolute_path) or "<root>"
            raise ConfigError(
                f"Configuration invalid at {location}: {exc.message}",
                context={"path": location},
            ) from exc

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__")
        if any(seg == "" for seg in segs):
            raise ConfigError(
                f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.",
                context={"key": raw},
            )
        # Normalize to lowercase so env overrides hit canonical keys.
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            if not raw:
                raise ConfigError(f"Malformed {ENV_PREFIX}* key", context={"key": key})
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Union[Dict[str, Any], Any] = root
        for part in path[:-1]:
            if not isinstance(cur, dict):
                raise ConfigError(
                    f"Override path {'.'.join(path)} traverses a non-mapping value",
                    context={"path": ".".join(path)},
                )
            cur = cur.setdefault(part, {})
        if not isinstance(cur, dict):
            raise ConfigError(
                f"Override path {'.'.join(path)} traverses a non-mapping value",
                context={"path": ".".join(path)},
            )
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Applying env override %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        """Load all YAML files from a directory and merge into config.

        Files are merged in deterministic order. Missing directories are ignored.
        """
        for path in iter_yaml_files(directory):
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        return cfg

    def config_files(self) -> List[Path]:
        """Return the user and project YAML files that take part in loading."""
        return [*iter_yaml_files(self.user_config_dir), *iter_yaml_files(self.project_config_dir)]

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all layers (UNCACHED).

        Args:
            validate: If True, validate against the bundled JSON schema

        Returns:
            Merged configuration dictionary
        """
        cfg: Dict[str, Any] = {}

        # Layer 1: Core config (bundled defaults)
        cfg = self._load_directory(self.core_config_dir, cfg)

        # Layer 2: User config
        cfg = self._load_directory(self.user_config_dir, cfg)

        # Layer 3: Project config (wins over user)
        cfg = self._load_directory(self.project_config_dir, cfg)

        # Layer 4: Environment overrides
        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)

        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration (cached per root and environment)."""
        from .cache import get_cached_config

        return get_cached_config(root=self.root, validate=validate)


__all__ = ["ConfigManager", "ENV_PREFIX", "CONFIG_DIR_NAME"]
