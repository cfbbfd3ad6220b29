"""Typed configuration sections using Pydantic BaseModel.

Subclass ``Section`` and name the top-level table it reads from in an inner
``Meta`` class::

    class DatabaseConfig(Section):
        class Meta:
            key = "database"

        host: str
        port: int = 5432
        password: str = ""

    db = config.expect(DatabaseConfig)   # reads the [database] table
    db = DatabaseConfig.load()           # same, from the active config

Without ``Meta.key`` the key is derived from the class name:
``DatabaseConfig`` -> ``database``, ``HttpServerSection`` -> ``http_server``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from typing import Self

    from ._config import Config

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SUFFIXES = ("Config", "Section")


def _derive_key(class_name: str) -> str:
    for suffix in _SUFFIXES:
        if class_name.endswith(suffix) and class_name != suffix:
            class_name = class_name[: -len(suffix)]
            break
    return _CAMEL_BOUNDARY_RE.sub("_", class_name).lower()


class Section(BaseModel):
    """Base class for declarative, typed configuration sections."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    class Meta:
        key: str = ""

    @classmethod
    def section_key(cls) -> str:
        """Return the top-level table name this section is read from."""
        key = getattr(cls.Meta, "key", "")
        return key or _derive_key(cls.__name__)

    @classmethod
    def load(cls, config: Config | None = None) -> Self:
        """Read and validate this section from *config* or the active config.

        Raises ``SectionNotFoundError`` when the table is absent and
        ``SectionValidationError`` when it does not fit the model.
        """
        from ._reader import active_config

        if config is None:
            config = active_config()
        return config.expect(cls)
