# Copyright (c) Syntropy Systems
"""crucible-ir convert command."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from crucible_ir.cli.common import decode_file, require_config, resolve_kind
from crucible_ir.serialization import to_json

console = Console()


def convert(
    file: Path = typer.Argument(..., help="JSON or YAML file to convert"),
    kind: str | None = typer.Option(
        None, "--kind", "-k", help="Entity kind (default from config)"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write JSON here instead of stdout"
    ),
    indent: int | None = typer.Option(
        None, "--indent", help="JSON indent (default from config)"
    ),
) -> None:
    """Decode a file and write it back as normalized JSON.

    Unknown keys are dropped and every declared field is written out,
    so the output shows exactly what the entity holds.

    Examples:
        crucible-ir convert experiment.yaml
        crucible-ir convert run.json --kind training_run -o run.normalized.json

    """
    config = require_config()
    model = resolve_kind(kind or config.default_kind)
    entity = decode_file(file, model)

    text = to_json(
        entity,
        indent=indent if indent is not None else config.json_indent,
        exclude_none=config.exclude_none,
    )

    if output is None:
        typer.echo(text)
        return

    _ = output.write_text(text + "\n")
    console.print(f"[green]Wrote {model.__name__}:[/green] {output}")
