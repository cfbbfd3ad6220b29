"""Deep merge of parsed TOML tables."""

from __future__ import annotations

import copy
from typing import Any, Iterable


def merge_tables(base: dict[str, Any], incoming: dict[str, Any]) -> dict[str, Any]:
    """Merge *incoming* into *base* in place and return *base*.

    Tables present on both sides are merged key by key at every depth. Any
    other value (scalars, arrays, or a table meeting a non-table) is replaced
    wholesale by the incoming one. Arrays are never concatenated.
    """
    for key, value in incoming.items():
        existing = base.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            merge_tables(existing, value)
        else:
            base[key] = value
    return base


def merge_all(tables: Iterable[dict[str, Any] | None]) -> dict[str, Any]:
    """Fold *tables* left to right into a new table. ``None`` entries are skipped.

    The inputs are left untouched.

    >>> merge_all([{"app": {"name": "a", "port": 1}}, None, {"app": {"name": "b"}}])
    {'app': {'name': 'b', 'port': 1}}
    """
    merged: dict[str, Any] = {}
    for table in tables:
        if table is not None:
            merge_tables(merged, copy.deepcopy(table))
    return merged
