"""Text interpolation applied to raw TOML before it is parsed.

Two phases run in a fixed order:

1. Environment references, scanned over the original text::

       ${NAME:default}   -> value of NAME, or ``default`` when unset
       ${NAME}           -> value of NAME, or EnvVarNotFoundError

2. File references, scanned over the result of phase 1::

       file:/path:default -> escaped file content, or ``default`` when unreadable
       file:/path         -> escaped file content, or FileReferenceError

A variable value may therefore expand to a ``file:`` token that phase 2
resolves, but file content is never scanned for ``${...}``.

Bare ``$NAME`` is not a reference and passes through unchanged.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Mapping

import tomli_w

from ._types import EnvVarNotFoundError, FileReferenceError

logger = logging.getLogger(__name__)

_ENV_WITH_FALLBACK_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*):([^}]*)\}")
_ENV_BRACED_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")
_FILE_WITH_FALLBACK_RE = re.compile(r"""file:([^:"'\s]+):([^:\s"'`\])]+)""")
_FILE_SIMPLE_RE = re.compile(r"""file:([^:\s"'`\])]+)""")


def interpolate(content: str, environ: Mapping[str, str] | None = None) -> str:
    """Resolve every environment and file reference in *content*.

    Parameters
    ----------
    content:
        Raw configuration text.
    environ:
        Variables to resolve ``${...}`` against. Defaults to ``os.environ``.
        Only read, never written.

    Raises ``EnvVarNotFoundError`` or ``FileReferenceError`` for the first
    reference without a fallback that cannot be resolved.
    """
    if environ is None:
        environ = os.environ
    return interpolate_files(interpolate_env(content, environ))


def interpolate_env(content: str, environ: Mapping[str, str]) -> str:
    result = content

    for match in _ENV_WITH_FALLBACK_RE.finditer(content):
        name, default = match.group(1), match.group(2)
        replacement = environ.get(name)
        if replacement is None:
            logger.debug("Environment variable %s not set, using fallback", name)
            replacement = default
        result = result.replace(match.group(0), replacement)

    scanned = result
    for match in _ENV_BRACED_RE.finditer(scanned):
        name = match.group(1)
        replacement = environ.get(name)
        if replacement is None:
            raise EnvVarNotFoundError(name)
        result = result.replace(match.group(0), replacement)

    return result


def interpolate_files(content: str) -> str:
    result = content

    for match in _FILE_WITH_FALLBACK_RE.finditer(content):
        path, default = match.group(1), match.group(2)
        try:
            replacement = escape_toml_string(_read_text(path))
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Could not read %s (%s), using fallback", path, exc)
            replacement = default
        result = result.replace(match.group(0), replacement)

    scanned = result
    for match in _FILE_SIMPLE_RE.finditer(scanned):
        path = match.group(1)
        try:
            replacement = escape_toml_string(_read_text(path))
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReferenceError(path, exc) from exc
        result = result.replace(match.group(0), replacement)

    return result


def escape_toml_string(value: str) -> str:
    """Escape *value* for embedding between the quotes of a TOML basic string.

    >>> escape_toml_string('say "hi"\\n')
    'say \\\\"hi\\\\"\\\\n'
    """
    # tomli_w renders ``v = "<escaped>"``; keep what sits between the quotes.
    rendered = tomli_w.dumps({"v": value}).rstrip("\n")
    literal = rendered.partition(" = ")[2]
    return literal[1:-1]


def _read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")
