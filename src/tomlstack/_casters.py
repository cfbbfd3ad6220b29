"""Cast helpers and human-readable unit types for configuration values.

``ByteConfig`` and ``TimeConfig`` are meant as ``Section`` field types::

    class UploadConfig(Section):
        class Meta:
            key = "upload"

        max_size: ByteConfig     # max_size = "10MB"
        timeout: TimeConfig      # timeout = "1m 30s"

    cfg.max_size.parsed   # 10000000
    cfg.timeout.parsed    # timedelta(seconds=90)
    cfg.timeout.raw       # "1m 30s"
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ByteSize, ConfigDict, TypeAdapter, ValidationError, model_validator

# ---------------------------------------------------------------------------
# Bool caster
# ---------------------------------------------------------------------------

_TRUTHY = frozenset({"1", "true", "yes", "on", "t", "y"})
_FALSY = frozenset({"0", "false", "no", "off", "f", "n", ""})


def _cast_bool(value: Any) -> bool:
    """Cast a value to ``bool``, handling common string representations.

    Raises ``ValueError`` for unrecognised strings.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUTHY:
            return True
        if lowered in _FALSY:
            return False
    raise ValueError(f"Cannot cast {value!r} to bool")


# ---------------------------------------------------------------------------
# Byte sizes
# ---------------------------------------------------------------------------

_BYTE_SIZE = TypeAdapter(ByteSize)


def parse_byte_size(value: str | int) -> int:
    """Parse a byte size such as ``"10MB"`` or ``"4KiB"`` into a number of bytes.

    >>> parse_byte_size("4KiB")
    4096
    >>> parse_byte_size("5MB")
    5000000
    """
    try:
        return int(_BYTE_SIZE.validate_python(value))
    except ValidationError as exc:
        raise ValueError(f"Invalid byte size {value!r}") from exc


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

_DURATION_UNITS: dict[str, float] = {
    "ms": 0.001,
    "msec": 0.001,
    "millisecond": 0.001,
    "milliseconds": 0.001,
    "": 1,
    "s": 1,
    "sec": 1,
    "secs": 1,
    "second": 1,
    "seconds": 1,
    "m": 60,
    "min": 60,
    "mins": 60,
    "minute": 60,
    "minutes": 60,
    "h": 3600,
    "hr": 3600,
    "hrs": 3600,
    "hour": 3600,
    "hours": 3600,
    "d": 86400,
    "day": 86400,
    "days": 86400,
    "w": 604800,
    "week": 604800,
    "weeks": 604800,
}

_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d+)?)\s*([A-Za-z]*)")


def parse_duration(value: str | int | float) -> timedelta:
    """Parse a duration such as ``"30s"``, ``"1h 30m"`` or ``"250ms"``.

    A bare number is taken as seconds.

    >>> parse_duration("2m 30s")
    datetime.timedelta(seconds=150)
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid duration {value!r}")
    if isinstance(value, (int, float)):
        return timedelta(seconds=value)

    parts = _DURATION_PART_RE.findall(value)
    if not parts or _DURATION_PART_RE.sub("", value).strip():
        raise ValueError(f"Invalid duration {value!r}")

    seconds = 0.0
    for amount, unit in parts:
        factor = _DURATION_UNITS.get(unit.lower())
        if factor is None:
            raise ValueError(f"Unknown duration unit {unit!r} in {value!r}")
        seconds += float(amount) * factor
    return timedelta(seconds=seconds)


# ---------------------------------------------------------------------------
# Field types
# ---------------------------------------------------------------------------


class ByteConfig(BaseModel):
    """A byte size keeping both the parsed number and the original text."""

    model_config = ConfigDict(frozen=True)

    parsed: int
    raw: str

    @model_validator(mode="before")
    @classmethod
    def from_raw(cls, data: Any) -> Any:
        if isinstance(data, (str, int)) and not isinstance(data, bool):
            return {"parsed": parse_byte_size(data), "raw": str(data)}
        return data


class TimeConfig(BaseModel):
    """A duration keeping both the parsed ``timedelta`` and the original text."""

    model_config = ConfigDict(frozen=True)

    parsed: timedelta
    raw: str

    @model_validator(mode="before")
    @classmethod
    def from_raw(cls, data: Any) -> Any:
        if isinstance(data, (str, int, float)) and not isinstance(data, bool):
            return {"parsed": parse_duration(data), "raw": str(data)}
        return data
