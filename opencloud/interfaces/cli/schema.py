"""Schema CLI for opencloud.

Helpers for working with JSON schemas offline:

- ``paths`` - list the property paths a schema declares.
- ``validate`` - check a JSON document against a schema.
- ``normalize`` - strip read-only and undeclared keys from a document.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from opencloud.common.json_schema import Schema

console = Console()


def _read_json(path: str) -> Any:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}") from exc


@click.group()
def schema() -> None:
    """Inspect JSON schemas and check documents against them."""


@schema.command("paths")
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
def paths_cmd(schema_file: str) -> None:
    """List the property paths declared by SCHEMA_FILE."""

    for path in Schema(_read_json(schema_file)).get_property_paths():
        click.echo(path)


@schema.command("validate")
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("data_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def validate_cmd(ctx: click.Context, schema_file: str, data_file: str) -> None:
    """Validate DATA_FILE against SCHEMA_FILE."""

    subject = Schema(_read_json(schema_file))
    subject.validate(_read_json(data_file))
    if subject.is_valid():
        console.print(f"[green]{data_file} is valid.[/green]", soft_wrap=True)
        return
    console.print(subject.get_error_string(), style="red", markup=False, highlight=False, soft_wrap=True, end="")
    ctx.exit(1)


@schema.command("normalize")
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("data_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--alias",
    "aliases",
    multiple=True,
    metavar="PROPERTY=KEY",
    help="Read PROPERTY from KEY in the document. Repeatable.",
)
def normalize_cmd(schema_file: str, data_file: str, aliases: tuple[str, ...]) -> None:
    """Print DATA_FILE reduced to the writable properties of SCHEMA_FILE."""

    alias_map: dict[str, str] = {}
    for alias in aliases:
        prop, sep, key = alias.partition("=")
        if not sep or not prop or not key:
            raise click.BadParameter(f"{alias!r} is not in PROPERTY=KEY form", param_hint="--alias")
        alias_map[prop] = key

    data = _read_json(data_file)
    if not isinstance(data, dict):
        raise click.BadParameter(f"{data_file} must contain a JSON object")
    normalized = Schema(_read_json(schema_file)).normalize_object(data, alias_map)
    click.echo(json.dumps(normalized, indent=2))
