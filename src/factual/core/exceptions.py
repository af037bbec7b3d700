from __future__ import annotations

from typing import Any, Dict, Mapping


class FactualError(Exception):
    """Base exception for the factual framework."""

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


class ConfigurationError(FactualError, ValueError):
    """Raised when a setting or argument has an invalid value or shape."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FactualError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class SelectorError(ConfigurationError):
    """Raised when a value cannot be used to select facts."""


class LoadError(FactualError):
    """Raised when a namespace fails to import or reload."""

    def __init__(
        self,
        message: str,
        *,
        namespace: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx["namespace"] = namespace
        super().__init__(message, context=ctx)
        self.namespace = namespace


class NothingCheckedError(FactualError, LookupError):
    """Raised when a recheck is requested before any fact was checked."""

    def __init__(self, message: str = "No fact has been checked yet.", *, context: Mapping[str, Any] | None = None) -> None:
        FactualError.__init__(self, message, context=context)
        LookupError.__init__(self, message)


class FactFailure(AssertionError):
    """Raised by ``expect`` when a check fails outside of a running fact."""

    def __init__(self, message: str, *, actual: Any = None, expected: Any = None) -> None:
        super().__init__(message)
        self.actual = actual
        self.expected = expected


__all__ = [
    "FactualError",
    "ConfigurationError",
    "SelectorError",
    "LoadError",
    "NothingCheckedError",
    "FactFailure",
]
