"""Layered TOML configuration with environment and file interpolation.

Reads TOML sources in order, resolves ``${VAR}`` / ``${VAR:default}`` and
``file:/path`` / ``file:/path:default`` references before parsing, deep-merges
the results, and exposes them through an immutable ``Config`` with typed,
keyed sections.
"""

import logging

from ._builder import ConfigBuilder
from ._casters import ByteConfig, TimeConfig, parse_byte_size, parse_duration
from ._config import Config
from ._interpolation import interpolate
from ._merge import merge_all, merge_tables
from ._reader import active_config, get_config, set_config, setting
from ._section import Section
from ._testing import override_config
from ._types import (
    UNDEFINED,
    BuilderConsumedError,
    ConfigError,
    EnvVarNotFoundError,
    FileReferenceError,
    FileSource,
    InlineSource,
    InterpolationError,
    NoSourcesError,
    ParseError,
    SectionNotFoundError,
    SectionValidationError,
    SourceNotFoundError,
    SourceReadError,
    UndefinedValueError,
)

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Core
    "Config",
    "ConfigBuilder",
    "FileSource",
    "InlineSource",
    "interpolate",
    "merge_tables",
    "merge_all",
    # Typed sections
    "Section",
    "ByteConfig",
    "TimeConfig",
    "parse_byte_size",
    "parse_duration",
    # Active configuration
    "active_config",
    "get_config",
    "set_config",
    "setting",
    "UNDEFINED",
    # Errors
    "ConfigError",
    "SourceNotFoundError",
    "SourceReadError",
    "InterpolationError",
    "EnvVarNotFoundError",
    "FileReferenceError",
    "ParseError",
    "NoSourcesError",
    "BuilderConsumedError",
    "UndefinedValueError",
    "SectionNotFoundError",
    "SectionValidationError",
    # Testing
    "override_config",
]
