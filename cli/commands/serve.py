"""Run the HTTP API with the background scheduler."""

import logging

import typer
from typing_extensions import Annotated

from cli.context import get_context
from cli.display import console
from seller_calendar import create_app

logger = logging.getLogger(__name__)


def serve_command(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Bind address (default: HOST or 127.0.0.1)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port (default: PORT or 3000)"),
    ] = None,
    no_scheduler: Annotated[
        bool,
        typer.Option("--no-scheduler", help="Serve the API without background jobs"),
    ] = False,
) -> None:
    """Run the HTTP API and the discovery/notification scheduler."""
    ctx = get_context()
    config = ctx.config
    app = create_app(ctx)

    if config.enable_scheduler and not no_scheduler:
        ctx.scheduler.start(ctx.repository.load_settings())
    else:
        logger.info("Scheduler disabled")

    bind_host = host or config.host
    bind_port = port or config.port
    console.print(f"Server is running on [cyan]http://{bind_host}:{bind_port}[/cyan]")
    try:
        app.run(host=bind_host, port=bind_port, use_reloader=False)
    finally:
        ctx.scheduler.shutdown()
