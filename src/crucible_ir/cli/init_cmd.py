# Copyright (c) Syntropy Systems
"""crucible-ir init command."""

from pathlib import Path

import typer
import yaml
from rich.console import Console

from crucible_ir.config import CONFIG_DIR_NAME, CONFIG_FILE_NAME, IRConfig

console = Console()


def init(
    path: Path = typer.Argument(
        Path(),
        help="Directory to initialize (default: current directory)",
    ),
) -> None:
    """Create a .crucible directory with the default configuration."""
    target = path.resolve()
    crucible_dir = target / CONFIG_DIR_NAME

    if crucible_dir.exists():
        console.print(f"[yellow]Already initialized:[/yellow] {crucible_dir}")
        return

    crucible_dir.mkdir(parents=True)

    config_path = crucible_dir / CONFIG_FILE_NAME
    with config_path.open("w") as f:
        yaml.dump(IRConfig().to_dict(), f, default_flow_style=False)

    console.print(f"[green]Initialized crucible-ir project:[/green] {crucible_dir}")
    console.print(f"  [dim]config:[/dim] {config_path}")
