"""Turn one configuration source into a parsed table.

Per source: read -> interpolate -> parse. A missing optional file is the only
condition absorbed here; everything else propagates as a ``ConfigError``.
"""

from __future__ import annotations

import logging
import tomllib
from typing import Any, Mapping

from ._interpolation import interpolate
from ._types import (
    FileSource,
    InlineSource,
    InterpolationError,
    ParseError,
    Source,
    SourceNotFoundError,
    SourceReadError,
)

logger = logging.getLogger(__name__)


def load_source(
    source: Source,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any] | None:
    """Load *source* into a table, or return ``None`` for a skipped optional file."""
    if isinstance(source, FileSource):
        text = _read_file(source)
        if text is None:
            return None
    elif isinstance(source, InlineSource):
        text = source.content
    else:
        raise TypeError(f"Unsupported configuration source: {source!r}")

    table = parse_text(text, source.origin, environ)
    logger.debug("Loaded configuration from %s (%d top-level keys)", source.origin, len(table))
    return table


def parse_text(
    text: str,
    origin: str,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Interpolate *text* and parse the result as a TOML document."""
    try:
        expanded = interpolate(text, environ)
    except InterpolationError as exc:
        logger.error("Interpolation error in %s: %s", origin, exc)
        raise

    try:
        return tomllib.loads(expanded)
    except tomllib.TOMLDecodeError as exc:
        logger.error("Failed to parse TOML from %s: %s", origin, exc)
        raise ParseError(origin, exc) from exc


def _read_file(source: FileSource) -> str | None:
    path = source.path
    if not path.exists():
        if source.required:
            logger.error("Config file not found (required): %s", path)
            raise SourceNotFoundError(path)
        logger.warning("Config file not found (optional): %s", path)
        return None

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read config file %s: %s", path, exc)
        raise SourceReadError(path, exc) from exc
