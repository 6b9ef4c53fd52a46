"""List calendar dates for a year or month."""

from datetime import date

import typer
from typing_extensions import Annotated

from cli.context import get_context
from cli.display.table_renderer import TableRenderer
from seller_calendar.dates import get_special_dates
from seller_calendar.models.event import CalendarEvent, EventKind, merge_events


def dates_command(
    year: Annotated[
        int | None,
        typer.Argument(help="Year to list (default: current year)"),
    ] = None,
    month: Annotated[
        int | None,
        typer.Option("--month", "-m", min=1, max=12, help="Only show this month"),
    ] = None,
    show_all: Annotated[
        bool,
        typer.Option(
            "--all", "-a", help="Include user and discovered events, not just built-in"
        ),
    ] = False,
) -> None:
    """List built-in dates, optionally merged with stored events."""
    ctx = get_context()
    year = year or date.today().year

    if show_all:
        events = merge_events(
            get_special_dates(year),
            ctx.repository.load_user_events(),
            ctx.repository.load_discovered_events(),
        )
        events = [e for e in events if e.date.year == year]
    else:
        events = sorted(
            (
                CalendarEvent.from_special(d, EventKind.BUILT_IN)
                for d in get_special_dates(year)
            ),
            key=lambda e: e.date,
        )

    if month is not None:
        events = [e for e in events if e.date.month == month]

    TableRenderer().render_events(events, year=year, month=month)
