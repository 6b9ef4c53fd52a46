"""Renderer for one-off job runs."""

from cli.display.console import console
from cli.display.formatters import format_event_date
from seller_calendar.jobs import DiscoveryResult, JobStatus, NotificationResult

STATUS_MESSAGES = {
    JobStatus.DISABLED: "[yellow]Skipped:[/yellow] feature is disabled in settings",
    JobStatus.NOT_CONFIGURED: "[yellow]Skipped:[/yellow] not configured",
    JobStatus.TOO_SOON: "[yellow]Skipped:[/yellow] discovery interval has not elapsed",
}


class JobRenderer:
    """Render the outcome of the discovery and notification jobs."""

    def _render_skip_or_failure(self, status: JobStatus, error: str | None) -> bool:
        if status is JobStatus.FAILED:
            console.print(f"[red]✗[/red] Failed: {error or 'unknown error'}")
            return True
        if status in STATUS_MESSAGES:
            console.print(STATUS_MESSAGES[status])
            return True
        return False

    def render_discovery(self, result: DiscoveryResult) -> None:
        """Render a discovery run with the list of newly added events."""
        if self._render_skip_or_failure(result.status, result.error):
            return

        if not result.added:
            console.print("[green]✓[/green] Discovery complete, no new events")
            return

        console.print(
            f"[green]✓[/green] Discovery complete, {len(result.added)} new events:"
        )
        for event in result.added:
            console.print(
                f"  [dim]{format_event_date(event.date)}[/dim]  "
                f"[cyan]{event.name}[/cyan] [dim]({event.category})[/dim]"
            )

    def render_notifications(self, result: NotificationResult) -> None:
        """Render a notification run."""
        if self._render_skip_or_failure(result.status, result.error):
            return

        briefing = "sent" if result.briefing_sent else "not sent"
        console.print(
            f"[green]✓[/green] Notifications complete: briefing {briefing}, "
            f"{len(result.reminders_sent)} reminders sent"
        )
        for entry in result.reminders_sent:
            console.print(f"  [dim]{entry}[/dim]")
