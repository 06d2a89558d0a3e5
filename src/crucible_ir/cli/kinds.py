# Copyright (c) Syntropy Systems
"""crucible-ir kinds command."""

from rich.console import Console
from rich.table import Table

from crucible_ir.serialization import KINDS

console = Console()


def kinds() -> None:
    """List the entity kinds that can be validated and converted."""
    table = Table(title="Entity kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Class")
    table.add_column("Required fields", style="dim")

    for name, model in KINDS.items():
        required = [
            info.alias or field_name
            for field_name, info in model.model_fields.items()
            if info.is_required()
        ]
        table.add_row(name, model.__name__, ", ".join(required) or "-")

    console.print(table)
