"""Run the event discovery job once."""

import typer

from cli.context import get_context
from cli.display.job_renderer import JobRenderer
from seller_calendar.jobs import JobStatus


def discover_command() -> None:
    """Run one event discovery tick now.

    Honors the same settings as the scheduled job: discovery must be enabled,
    the AI provider configured and the discovery interval elapsed.
    """
    ctx = get_context()
    result = ctx.scheduler.run_discovery_now()
    JobRenderer().render_discovery(result)
    if result.status is JobStatus.FAILED:
        raise typer.Exit(1)
