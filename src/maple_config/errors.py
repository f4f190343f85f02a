"""Exception classes for configuration loading and access.

Loader problems (:class:`ConfigError` and subclasses) are never raised at
startup; they are returned next to the default configuration so the caller
can report them. :class:`ConfigMisuseError` signals a startup-ordering bug
and is raised.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import ValidationError


class ConfigError(Exception):
    """The config file could not be used; defaults are in effect.

    Includes the file path when the document came from disk and the
    underlying exception when available.
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            path: Config file the document was read from, if any
            original_error: The exception that was caught
        """
        super().__init__(message)
        self.message: str = message
        self.path: Optional[Path] = path
        self.original_error: Optional[BaseException] = original_error

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class ConfigIOError(ConfigError):
    """Raised when the config file exists but cannot be read."""

    pass


class ConfigSchemaError(ConfigError):
    """Raised when the document is malformed or does not match the schema.

    ``details`` lists ``(location, message)`` pairs. The location is the
    dotted key path as written in the document (``plugin.git.enabled``), or
    the line/column for TOML syntax errors.
    """

    def __init__(
        self,
        message: str,
        details: Optional[list[tuple[str, str]]] = None,
        path: Optional[Path] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, path, original_error)
        self.details: list[tuple[str, str]] = details or []

    @classmethod
    def from_validation_error(
        cls, err: ValidationError, path: Optional[Path] = None
    ) -> ConfigSchemaError:
        """Create an error from a pydantic validation failure.

        Args:
            err: Validation error raised while building the config
            path: Config file the document was read from, if any

        Returns:
            ConfigSchemaError with one detail entry per failed field
        """
        details = [
            (".".join(str(part) for part in e["loc"]) or "<root>", e["msg"])
            for e in err.errors()
        ]
        summary = "; ".join(f"{loc}: {msg}" for loc, msg in details)
        return cls(
            f"invalid configuration ({err.error_count()} error(s)): {summary}",
            details,
            path,
            err,
        )


class ConfigMisuseError(RuntimeError):
    """Raised on double initialization or on access before initialization.

    This is a programming error, not a runtime condition, so it does not
    derive from :class:`ConfigError`.
    """

    pass
