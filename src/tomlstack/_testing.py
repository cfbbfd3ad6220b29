"""Test utilities for tomlstack."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator

from ._config import Config
from ._merge import merge_all
from ._reader import get_config, set_config


@contextmanager
def override_config(
    toml: str | None = None,
    *,
    sections: dict[str, Any] | None = None,
) -> Iterator[Config]:
    """Temporarily install a configuration built from inline TOML and/or a dict.

    *sections* is deep-merged over *toml*. Interpolation applies to *toml*.

    Usage::

        with override_config('[app]\\nname = "test"', sections={"db": {"port": 1}}) as cfg:
            assert setting("app.name") == "test"
            assert AppConfig.load().name == "test"
    """
    base: dict[str, Any] | None = None
    if toml is not None:
        base = Config.builder().add_toml_str(toml).build().as_dict()

    previous = get_config()
    fake = Config(merge_all([base, sections]))
    set_config(fake)
    try:
        yield fake
    finally:
        set_config(previous)
