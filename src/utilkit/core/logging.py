"""Opt-in handler setup for the ``utilkit`` logger hierarchy.

The library itself only installs a ``NullHandler``; applications that want
utilkit's debug output call :func:`configure_logging`.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from utilkit.core.exceptions import ConfigError

PACKAGE_LOGGER = "utilkit"

_CONFIGURED_TARGET: Optional[str] = None
_UTILKIT_HANDLER: Optional[logging.Handler] = None


def _level_from_name(name: Union[str, int]) -> int:
    if isinstance(name, int):
        return name
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown logging level: {name!r}", context={"level": str(name)})
    return level


def configure_logging(
    level: Union[str, int, None] = None,
    log_path: Optional[Path] = None,
) -> logging.Handler:
    """Attach one stream (stderr) or file handler to the ``utilkit`` logger.

    Idempotent per-process: calling again with the same target only updates
    the level. Switching targets replaces the previously installed handler.
    ``level`` and the record format default to the ``logging`` config section.
    """
    global _CONFIGURED_TARGET, _UTILKIT_HANDLER

    from utilkit.core.config.domains import LoggingConfig

    cfg = LoggingConfig()
    resolved_level = _level_from_name(level if level is not None else cfg.level)
    target = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(resolved_level)

    if _CONFIGURED_TARGET == target and _UTILKIT_HANDLER is not None:
        _UTILKIT_HANDLER.setLevel(resolved_level)
        return _UTILKIT_HANDLER

    if _UTILKIT_HANDLER is not None:
        pkg_logger.removeHandler(_UTILKIT_HANDLER)
        _UTILKIT_HANDLER.close()
        _UTILKIT_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(target).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(target, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved_level)
    handler.setFormatter(logging.Formatter(cfg.format))
    pkg_logger.addHandler(handler)

    _UTILKIT_HANDLER = handler
    _CONFIGURED_TARGET = target
    return handler


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by :func:`configure_logging`."""
    global _CONFIGURED_TARGET, _UTILKIT_HANDLER
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if _UTILKIT_HANDLER is not None:
        pkg_logger.removeHandler(_UTILKIT_HANDLER)
        _UTILKIT_HANDLER.close()
    pkg_logger.setLevel(logging.NOTSET)
    _CONFIGURED_TARGET = None
    _UTILKIT_HANDLER = None


__all__ = ["configure_logging", "reset_logging_for_tests", "PACKAGE_LOGGER"]
