"""Weekly and monthly summaries of upcoming events."""

from datetime import date, timedelta
from typing import Iterable

from seller_calendar.exceptions import ValidationError
from seller_calendar.models.event import CalendarEvent

SUMMARY_VIEWS = ("week", "month")


def week_bounds(day: date) -> tuple[date, date]:
    """Sunday-to-Saturday week containing day."""
    start = day - timedelta(days=(day.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def summarize_period(
    events: Iterable[CalendarEvent], view: str, anchor: date, today: date
) -> tuple[str, list[CalendarEvent]]:
    """
    Select the upcoming events of the week or month containing anchor.

    Args:
        events: Merged calendar events
        view: "week" or "month"
        anchor: Any day inside the period
        today: Events before this day are left out

    Returns:
        (embed title, date-sorted upcoming events)

    Raises:
        ValidationError: For any view other than week or month
    """
    if view == "week":
        start, end = week_bounds(anchor)
        title = f"🗓️ Weekly Summary: {start.isoformat()} - {end.isoformat()}"
        selected = [e for e in events if start <= e.date <= end]
    elif view == "month":
        title = f"🗓️ Monthly Summary for {anchor.strftime('%B %Y')}"
        selected = [
            e
            for e in events
            if e.date.year == anchor.year and e.date.month == anchor.month
        ]
    else:
        raise ValidationError("Summary can only be sent for Week or Month view.")

    upcoming = sorted((e for e in selected if e.date >= today), key=lambda e: e.date)
    return title, upcoming
