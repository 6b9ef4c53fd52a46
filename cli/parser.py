"""Typer application and command routing."""

import typer
from typing_extensions import Annotated

from cli import setup_logging
from cli.commands import (
    config_command,
    dates_command,
    discover_command,
    notify_command,
    serve_command,
)
from cli.context import CLIContext, set_context

app = typer.Typer(
    name="seller-calendar",
    help="UAE seller calendar server with scheduled discovery and notifications.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show info logging")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Only show errors")
    ] = False,
) -> None:
    ctx = CLIContext(verbose=verbose, quiet=quiet)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)
    set_context(ctx)


app.command("serve")(serve_command)
app.command("discover")(discover_command)
app.command("notify")(notify_command)
app.command("dates")(dates_command)
app.command("config")(config_command)
