"""Foundation types for tomlstack.

Provides the missing-value sentinel, the source variants accumulated by the
builder, and the exception hierarchy.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

# ---------------------------------------------------------------------------
# Sentinel
# ---------------------------------------------------------------------------


class _Undefined:
    """Sentinel for missing values (distinct from ``None``)."""

    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FileSource:
    """A TOML file on disk. Optional files that do not exist are skipped."""

    path: Path
    required: bool = False

    @property
    def origin(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class InlineSource:
    """TOML text supplied directly by the application."""

    content: str

    @property
    def origin(self) -> str:
        return "<inline>"


Source = Union[FileSource, InlineSource]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Base exception for config-related errors."""


class SourceNotFoundError(ConfigError):
    """Raised when a required configuration file does not exist."""

    def __init__(self, path: str | Path) -> None:
        self.path = str(path)
        super().__init__(f"Configuration file not found at {self.path}")


class SourceReadError(ConfigError):
    """Raised when an existing configuration file cannot be read."""

    def __init__(self, path: str | Path, cause: Exception) -> None:
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Failed to read configuration file {self.path}: {cause}")


class InterpolationError(ConfigError):
    """Base class for references that could not be resolved during interpolation."""


class EnvVarNotFoundError(InterpolationError):
    """Raised for a ``${NAME}`` reference whose variable is not set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Environment variable '{name}' not found")


class FileReferenceError(InterpolationError):
    """Raised for a ``file:PATH`` reference that could not be read."""

    def __init__(self, path: str, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read file '{path}': {cause}")


class ParseError(ConfigError):
    """Raised when interpolated text is not valid TOML."""

    def __init__(self, origin: str, cause: Exception) -> None:
        self.origin = origin
        self.cause = cause
        super().__init__(f"Failed to parse TOML from {origin}: {cause}")


class NoSourcesError(ConfigError):
    """Raised when ``build()`` is called before any source was added."""

    def __init__(self) -> None:
        super().__init__("No configuration sources configured")


class BuilderConsumedError(ConfigError):
    """Raised when a builder is used again after ``build()``."""

    def __init__(self) -> None:
        super().__init__("ConfigBuilder.build() has already been called on this builder")


class UndefinedValueError(ConfigError):
    """Raised when a required configuration key is missing."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Configuration key '{key}' is required but not set.")


class SectionNotFoundError(ConfigError):
    """Raised when a required section is absent from the merged table."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Configuration section '{key}' not found")


class SectionValidationError(ConfigError):
    """Raised when a section is present but does not fit its model."""

    def __init__(self, key: str, errors: Any) -> None:
        self.key = key
        self.errors = errors
        super().__init__(f"Validation failed for section '{key}': {errors}")
