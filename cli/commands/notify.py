"""Run the notification job once."""

import typer

from cli.context import get_context
from cli.display.job_renderer import JobRenderer
from seller_calendar.jobs import JobStatus


def notify_command() -> None:
    """Send today's briefing and any due reminders now."""
    ctx = get_context()
    result = ctx.scheduler.run_notifications_now()
    JobRenderer().render_notifications(result)
    if result.status is JobStatus.FAILED:
        raise typer.Exit(1)
