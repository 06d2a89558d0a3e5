# Copyright (c) Syntropy Systems
"""Main CLI entry point for crucible-ir."""

import typer

from crucible_ir.cli.common import require_config
from crucible_ir.cli.convert import convert
from crucible_ir.cli.init_cmd import init
from crucible_ir.cli.kinds import kinds
from crucible_ir.cli.validate import validate
from crucible_ir.config import IRConfig
from crucible_ir.logging_utils import configure_logging

app = typer.Typer(
    name="crucible-ir",
    help="Check and convert crucible experiment IR files.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log decode details to stderr"
    ),
) -> None:
    """Configure logging before any command runs."""
    if verbose:
        level = "debug"
    elif ctx.invoked_subcommand == "init":
        # init must work even when an existing config is unreadable
        level = IRConfig().log_level
    else:
        level = require_config().log_level
    configure_logging(level)


# Register commands
_ = app.command()(init)
_ = app.command()(kinds)
_ = app.command()(validate)
_ = app.command()(convert)


if __name__ == "__main__":
    app()
