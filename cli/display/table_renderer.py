"""Table renderer for calendar event lists."""

import calendar

from rich.table import Table

from cli.display.console import console
from cli.display.formatters import format_event_date
from seller_calendar.models.event import CalendarEvent, EventKind

KIND_STYLES = {
    EventKind.BUILT_IN: "dim",
    EventKind.USER: "green",
    EventKind.DISCOVERED: "magenta",
}


class TableRenderer:
    """Render calendar events as a table.

    Uses Rich's Table class for consistent, well-formatted output.
    """

    def render_events(
        self,
        events: list[CalendarEvent],
        year: int,
        month: int | None = None,
    ) -> None:
        """Render events for a year, or one month of it.

        Args:
            events: Events to display, already sorted by date.
            year: Year being listed (for the header).
            month: Month being listed (1-12), or None for the whole year.
        """
        period = f"{calendar.month_name[month]} {year}" if month else str(year)
        if not events:
            console.print(f"No dates found for {period}")
            return

        console.print(f"Dates for {period} ({len(events)} events):")
        console.print()

        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("DATE", style="dim", no_wrap=True)
        table.add_column("NAME", style="cyan")
        table.add_column("CATEGORY")
        table.add_column("KIND", no_wrap=True)

        for event in events:
            style = KIND_STYLES.get(event.kind, "")
            table.add_row(
                format_event_date(event.date),
                event.name,
                event.category,
                f"[{style}]{event.kind.value}[/{style}]" if style else event.kind.value,
            )

        console.print(table)
