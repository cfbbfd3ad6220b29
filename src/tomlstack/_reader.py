"""The process-wide active configuration and the ``setting()`` reader.

Lookup order for ``setting()``:
1. Environment variable (if ``env=`` specified)
2. Dot-path into the active ``Config``
3. Default value (returned as-is, **not** passed through ``cast``)
4. Raise ``UndefinedValueError``
"""

from __future__ import annotations

import os
from typing import Any, Callable

from ._casters import _cast_bool
from ._config import Config
from ._types import UNDEFINED, UndefinedValueError, _Undefined

# ---------------------------------------------------------------------------
# Active configuration
# ---------------------------------------------------------------------------

_active_config: Config | None = None


def set_config(config: Config | None) -> None:
    """Install *config* as the active configuration.

    Replacing the handle is a single reference swap: readers holding the
    previous ``Config`` keep seeing their snapshot.
    """
    global _active_config
    _active_config = config


def get_config() -> Config | None:
    """Return the currently installed configuration (may be ``None``)."""
    return _active_config


def active_config() -> Config:
    """Return the active configuration, discovering the default file if none is set."""
    global _active_config
    if _active_config is None:
        _active_config = Config.discover()
    return _active_config


# ---------------------------------------------------------------------------
# Cast resolution
# ---------------------------------------------------------------------------


def _identity(value: Any) -> Any:
    return value


def _resolve_cast(cast: Callable | type | None) -> Callable[[Any], Any]:
    if cast is None:
        return _identity
    if cast is bool:
        return _cast_bool
    return cast


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def setting(
    key: str,
    *,
    default: Any = UNDEFINED,
    cast: Callable | type | None = None,
    env: str | None = None,
    config: Config | None = None,
) -> Any:
    """Read a single value with type casting and fail-fast semantics.

    Parameters
    ----------
    key:
        Dot-path into the configuration (e.g., ``"database.pool.size"``).
    default:
        Fallback value if the key is not found. Returned **as-is**
        (not passed through *cast*).
    cast:
        Callable to coerce the raw value. ``bool`` is special-cased to handle
        string representations like ``"true"`` / ``"0"``.
    env:
        Environment variable name to check first.
    config:
        Per-call configuration. Falls back to the active configuration.
    """
    caster = _resolve_cast(cast)

    if env is not None:
        env_value = os.environ.get(env)
        if env_value is not None:
            return caster(env_value)

    if config is None:
        config = active_config()
    value = _lookup(config, key)
    if not isinstance(value, _Undefined):
        return caster(value)

    if not isinstance(default, _Undefined):
        return default

    raise UndefinedValueError(key)


def _lookup(config: Config, key: str) -> Any:
    try:
        return config.select(key)
    except UndefinedValueError:
        return UNDEFINED
