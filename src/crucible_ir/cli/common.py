# Copyright (c) Syntropy Systems
"""Helpers shared by the crucible-ir commands."""

from __future__ import annotations

from pathlib import Path
from typing import cast

import typer
import yaml
from rich.console import Console
from rich.markup import escape

from crucible_ir.config import IRConfig, load_config
from crucible_ir.errors import ConfigError
from crucible_ir.models import IRModel
from crucible_ir.result import Err
from crucible_ir.serialization import DecodeResult, from_json, from_map, kind_for_name

console = Console()
err_console = Console(stderr=True)

YAML_SUFFIXES = (".yaml", ".yml")


def require_config() -> IRConfig:
    """Load the project config, exiting with an error if it is unreadable."""
    try:
        return load_config()
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1) from e


def resolve_kind(name: str) -> type[IRModel]:
    """Resolve a --kind option, exiting with the known kinds when it is wrong."""
    kind = kind_for_name(name)
    if kind is None:
        err_console.print(f"[red]Unknown kind:[/red] {name}")
        err_console.print("  Run [bold]crucible-ir kinds[/bold] to list them")
        raise typer.Exit(1)
    return kind


def decode_file(path: Path, kind: type[IRModel]) -> IRModel:
    """Read a JSON or YAML file and decode it, exiting on failure."""
    try:
        text = path.read_text()
    except OSError as e:
        err_console.print(
            f"[red]Cannot read {path}:[/red] {escape(str(e))}", soft_wrap=True
        )
        raise typer.Exit(1) from e

    result: DecodeResult
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = cast("object", yaml.safe_load(text))
        except yaml.YAMLError as e:
            err_console.print(f"[red]Invalid YAML in {path}:[/red] {escape(str(e))}")
            raise typer.Exit(1) from e
        if not isinstance(data, dict):
            err_console.print(f"[red]{path} must contain a mapping[/red]")
            raise typer.Exit(1)
        result = from_map(cast("dict[str, object]", data), kind)
    else:
        result = from_json(text, kind)

    if isinstance(result, Err):
        error = result.error
        err_console.print(
            f"[red]Cannot decode {path} as {kind.__name__}[/red] ({error.reason}): "
            f"{escape(error.message)}",
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(1)
    return result.value
