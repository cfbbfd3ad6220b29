"""``Config``: the immutable handle over a merged configuration table.

A handle is built once and never changes. Tables are stored as read-only
mapping proxies and arrays as tuples, so every holder of the same handle sees
the same snapshot. Rebuilding means constructing a new ``Config``.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping, TypeVar

from pydantic import ValidationError

from ._types import (
    UNDEFINED,
    SectionNotFoundError,
    SectionValidationError,
    SourceNotFoundError,
    UndefinedValueError,
    _Undefined,
)

if TYPE_CHECKING:
    from ._builder import ConfigBuilder
    from ._section import Section

    S = TypeVar("S", bound=Section)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CONFIG_FILE_PATH"
DEFAULT_CONFIG_PATH = Path("config") / "config.toml"


# ---------------------------------------------------------------------------
# Freezing helpers
# ---------------------------------------------------------------------------


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    """Return a plain, mutable ``dict``/``list`` copy of a frozen value."""
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# Default file discovery
# ---------------------------------------------------------------------------


def find_config_file() -> Path:
    """Locate the default configuration file.

    Candidates, first existing wins:
    1. ``$CONFIG_FILE_PATH``
    2. ``config/config.toml`` relative to the working directory
    3. ``config/config.toml`` next to the running program
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        if candidate.exists():
            return candidate
        logger.warning(
            "%s is set to '%s' but the file does not exist; falling back to default paths",
            CONFIG_ENV_VAR,
            candidate,
        )

    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH

    fallback = Path(sys.argv[0]).resolve().parent / DEFAULT_CONFIG_PATH
    if not fallback.exists():
        raise SourceNotFoundError(fallback)
    return fallback


# ---------------------------------------------------------------------------
# Handle
# ---------------------------------------------------------------------------


class Config:
    """Read-only view over one merged configuration table.

    >>> cfg = Config({"app": {"name": "demo", "port": 8080}})
    >>> cfg.get_raw("app")["port"]
    8080
    >>> cfg.get_raw("missing") is None
    True
    """

    __slots__ = ("_table",)

    def __init__(self, table: Mapping[str, Any] | None = None) -> None:
        object.__setattr__(self, "_table", _freeze(table or {}))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Config is read-only; build a new one instead")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Config is read-only; build a new one instead")

    def __copy__(self) -> "Config":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "Config":
        return self

    # -- construction -------------------------------------------------------

    @classmethod
    def builder(cls) -> "ConfigBuilder":
        from ._builder import ConfigBuilder

        return ConfigBuilder()

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> "Config":
        """Load a single, required TOML file."""
        return cls.builder().add_required_file(path).build()

    @classmethod
    def discover(cls) -> "Config":
        """Load the default configuration file (see ``find_config_file``)."""
        return cls.from_path(find_config_file())

    # -- raw access ---------------------------------------------------------

    def get_raw(self, key: str) -> Any:
        """Return the value stored under the top-level *key*, or ``None`` if absent.

        Tables come back as read-only ``Mapping`` views and arrays as tuples.
        Use ``as_dict()`` for a mutable copy.
        """
        return self._table.get(key)

    def select(self, path: str, default: Any = UNDEFINED) -> Any:
        """Look up a dot-separated *path* such as ``"database.pool.size"``.

        A top-level key containing literal dots is matched first.
        """
        if path in self._table:
            return self._table[path]

        current: Any = self._table
        for segment in path.split("."):
            if not isinstance(current, Mapping) or segment not in current:
                current = UNDEFINED
                break
            current = current[segment]

        if not isinstance(current, _Undefined):
            return current
        if not isinstance(default, _Undefined):
            return default
        raise UndefinedValueError(path)

    def as_dict(self) -> dict[str, Any]:
        """Return a mutable deep copy of the whole table."""
        return _thaw(self._table)

    def keys(self) -> list[str]:
        return list(self._table)

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"Config(sections={self.keys()!r})"

    # -- typed sections -----------------------------------------------------

    def get(self, section: type[S]) -> S | None:
        """Validate the section registered for *section* and return it.

        Returns ``None`` when the section is absent. Raises
        ``SectionValidationError`` when it is present but invalid.
        """
        key = section.section_key()
        raw = self._table.get(key)
        if raw is None:
            return None
        try:
            return section.model_validate(_thaw(raw))
        except ValidationError as exc:
            logger.error("Configuration validation failed for '%s': %s", key, exc)
            raise SectionValidationError(key, exc) from exc

    def get_or_default(self, section: type[S]) -> S:
        """Like ``get``, but an absent section yields the model's defaults."""
        found = self.get(section)
        if found is not None:
            return found
        try:
            return section()
        except ValidationError as exc:
            key = section.section_key()
            logger.error("Configuration section '%s' is absent and has no defaults: %s", key, exc)
            raise SectionValidationError(key, exc) from exc

    def expect(self, section: type[S]) -> S:
        """Like ``get``, but an absent section raises ``SectionNotFoundError``."""
        found = self.get(section)
        if found is None:
            raise SectionNotFoundError(section.section_key())
        return found
