"""Command-line inspection of a merged configuration."""

from __future__ import annotations

import json
import sys
from typing import Any

import click
import tomli_w

from .._config import Config, _thaw
from .._types import ConfigError


def build_config(
    files: list[str],
    *,
    optional: bool = False,
    dotenv: str | None = None,
) -> Config:
    """Build a ``Config`` from *files* in order.

    Args:
        files: TOML files, later ones override earlier ones
        optional: Skip missing files instead of failing
        dotenv: Optional dotenv file used for ``${...}`` interpolation
    """
    builder = Config.builder()
    if dotenv:
        builder.add_dotenv(dotenv)
    for path in files:
        if optional:
            builder.add_file(path)
        else:
            builder.add_required_file(path)
    return builder.build()


def render(data: dict[str, Any], output_format: str) -> str:
    if output_format == "json":
        return json.dumps(data, indent=2, default=str)
    return tomli_w.dumps(data)


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


_files_argument = click.argument("files", nargs=-1, required=True)
_optional_option = click.option(
    "--optional/--required",
    default=False,
    help="Skip missing files instead of failing (default: required)",
)
_dotenv_option = click.option(
    "--dotenv",
    "dotenv_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Dotenv file providing variables for ${...} references",
)


@click.group("tomlstack")
def main():
    """Inspect layered TOML configuration."""
    pass


@main.command("dump")
@_files_argument
@_optional_option
@_dotenv_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["toml", "json"]),
    default="toml",
    help="Output format (default: toml)",
)
def dump_cli(
    files: tuple[str, ...], optional: bool, dotenv_path: str | None, output_format: str
) -> None:
    """Print the merged configuration built from FILES.

    Examples:\n
        tomlstack dump config/base.toml config/prod.toml\n
        tomlstack dump base.toml local.toml --optional --format json\n
    """
    try:
        config = build_config(list(files), optional=optional, dotenv=dotenv_path)
    except ConfigError as e:
        _fail(str(e))
        return
    click.echo(render(config.as_dict(), output_format), nl=output_format == "json")


@main.command("get")
@click.argument("section")
@_files_argument
@_optional_option
@_dotenv_option
def get_cli(
    section: str, files: tuple[str, ...], optional: bool, dotenv_path: str | None
) -> None:
    """Print one SECTION of the merged configuration as JSON.

    SECTION may be a dot-path such as ``database.pool``.
    """
    try:
        config = build_config(list(files), optional=optional, dotenv=dotenv_path)
        value = config.select(section)
    except ConfigError as e:
        _fail(str(e))
        return
    click.echo(json.dumps(_thaw(value), indent=2, default=str))
