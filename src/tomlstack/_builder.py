"""``ConfigBuilder``: ordered accumulation of sources, then an all-or-nothing build.

::

    config = (
        Config.builder()
        .add_dotenv()
        .add_required_file("config/base.toml")
        .add_file("config/local.toml")
        .add_toml_str('[app]\\nname = "override"')
        .build()
    )
"""

from __future__ import annotations

import logging
import os
from collections import ChainMap
from pathlib import Path

from dotenv import dotenv_values

from ._config import Config
from ._loader import load_source
from ._merge import merge_tables
from ._types import (
    BuilderConsumedError,
    FileSource,
    InlineSource,
    NoSourcesError,
    Source,
)

logger = logging.getLogger(__name__)


class ConfigBuilder:
    """Collect configuration sources in order and build a ``Config`` from them.

    Sources added later override earlier ones at the leaf level. A builder can
    be built exactly once.
    """

    def __init__(self) -> None:
        self._sources: list[Source] = []
        self._dotenv: dict[str, str] = {}
        self._consumed = False

    # -- sources ------------------------------------------------------------

    def add_file(self, path: str | os.PathLike[str]) -> "ConfigBuilder":
        """Add an optional TOML file. It is skipped (with a warning) when missing."""
        return self._push(FileSource(Path(path), required=False))

    def add_required_file(self, path: str | os.PathLike[str]) -> "ConfigBuilder":
        """Add a TOML file that must exist."""
        return self._push(FileSource(Path(path), required=True))

    def add_toml_str(self, content: str) -> "ConfigBuilder":
        """Add inline TOML text."""
        return self._push(InlineSource(content))

    # -- environment --------------------------------------------------------

    def add_dotenv(self, path: str | os.PathLike[str] = ".env") -> "ConfigBuilder":
        """Read variables from a dotenv file for ``${...}`` interpolation.

        Process environment variables win over dotenv values, and
        ``os.environ`` is left untouched. A missing file adds nothing.
        """
        self._ensure_open()
        values = dotenv_values(path)
        if not values:
            logger.debug("No variables loaded from dotenv file %s", path)
        for name, value in values.items():
            # ``KEY`` with no ``=`` parses to None; treat it as unset.
            if value is not None:
                self._dotenv[name] = value
        return self

    # -- build --------------------------------------------------------------

    @property
    def sources(self) -> tuple[Source, ...]:
        return tuple(self._sources)

    def build(self) -> Config:
        """Load and merge every source in order.

        Raises ``NoSourcesError`` when nothing was added, and propagates the
        first loading failure unchanged. No partial ``Config`` is returned.
        """
        self._ensure_open()
        self._consumed = True

        if not self._sources:
            logger.error("ConfigBuilder.build() called with no sources")
            raise NoSourcesError()

        environ = ChainMap(os.environ, self._dotenv) if self._dotenv else None

        merged: dict = {}
        for source in self._sources:
            table = load_source(source, environ)
            if table is not None:
                merge_tables(merged, table)

        return Config(merged)

    # -- internals ----------------------------------------------------------

    def _push(self, source: Source) -> "ConfigBuilder":
        self._ensure_open()
        self._sources.append(source)
        return self

    def _ensure_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError()

    def __repr__(self) -> str:
        state = "built" if self._consumed else "accumulating"
        return f"ConfigBuilder({state}, sources={len(self._sources)})"
