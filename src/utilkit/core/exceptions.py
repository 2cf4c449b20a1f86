from __future__ import annotations

from typing import Any, Dict, Mapping


class UtilkitError(Exception):
    """Base exception for utilkit."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidArgumentError(UtilkitError, ValueError):
    """Raised when a call violates an argument precondition."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        UtilkitError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class RecursionLimitExceeded(UtilkitError, RecursionError):
    """Raised when a comparison nests deeper than the configured ``max_depth``."""

    def __init__(
        self,
        message: str = "",
        *,
        max_depth: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if max_depth is not None:
            ctx["max_depth"] = max_depth
        UtilkitError.__init__(self, message, context=ctx)
        RecursionError.__init__(self, message)


class UnknownCodeError(UtilkitError, LookupError):
    """Raised when a reference table has no entry for a code or name."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        UtilkitError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class ConfigError(UtilkitError, RuntimeError):
    """Raised when configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        UtilkitError.__init__(self, message, context=context)
        RuntimeError.__init__(self, message)


__all__ = [
    "UtilkitError",
    "InvalidArgumentError",
    "RecursionLimitExceeded",
    "UnknownCodeError",
    "ConfigError",
]
