# Copyright (c) Syntropy Systems
"""crucible-ir validate command."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from crucible_ir.cli.common import decode_file, require_config, resolve_kind
from crucible_ir.result import Err
from crucible_ir.validation import validate as validate_entity

console = Console()


def validate(
    file: Path = typer.Argument(..., help="JSON or YAML file to check"),
    kind: str | None = typer.Option(
        None, "--kind", "-k", help="Entity kind (default from config)"
    ),
) -> None:
    """Decode a file and report structural problems.

    Exits with status 1 when the file cannot be decoded or is invalid.

    Examples:
        crucible-ir validate experiment.json
        crucible-ir validate backend.yaml --kind backend_ref

    """
    config = require_config()
    model = resolve_kind(kind or config.default_kind)
    entity = decode_file(file, model)

    result = validate_entity(entity)
    if isinstance(result, Err):
        problems = result.error
        console.print(
            f"[red]✗[/red] {file} is not a valid {model.__name__} "
            f"({len(problems)} problem{'s' if len(problems) != 1 else ''})",
            soft_wrap=True,
        )
        for problem in problems:
            console.print(
                f"  [dim]•[/dim] {escape(problem)}", highlight=False, soft_wrap=True
            )
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {file} is a valid {model.__name__}", soft_wrap=True)
