"""Tests for weekly and monthly summaries."""

from datetime import date

import pytest

from seller_calendar.exceptions import ValidationError
from seller_calendar.models.event import CalendarEvent, EventKind
from seller_calendar.summary import summarize_period, week_bounds


def _event(day, name):
    return CalendarEvent(kind=EventKind.USER, date=day, name=name)


def test_week_bounds_sunday_to_saturday():
    assert week_bounds(date(2025, 3, 5)) == (date(2025, 3, 2), date(2025, 3, 8))
    assert week_bounds(date(2025, 3, 2)) == (date(2025, 3, 2), date(2025, 3, 8))
    assert week_bounds(date(2025, 3, 8)) == (date(2025, 3, 2), date(2025, 3, 8))


def test_week_summary_excludes_past_events():
    events = [
        _event(date(2025, 3, 2), "Past"),
        _event(date(2025, 3, 7), "Friday"),
        _event(date(2025, 3, 5), "Today"),
        _event(date(2025, 3, 9), "Next week"),
    ]
    title, upcoming = summarize_period(
        events, "week", date(2025, 3, 5), date(2025, 3, 5)
    )
    assert title == "🗓️ Weekly Summary: 2025-03-02 - 2025-03-08"
    assert [e.name for e in upcoming] == ["Today", "Friday"]


def test_month_summary():
    events = [_event(date(2025, 3, 30), "March"), _event(date(2025, 4, 1), "April")]
    title, upcoming = summarize_period(
        events, "month", date(2025, 3, 1), date(2025, 1, 1)
    )
    assert title == "🗓️ Monthly Summary for March 2025"
    assert [e.name for e in upcoming] == ["March"]


@pytest.mark.parametrize("view", ["day", "year", ""])
def test_other_views_rejected(view):
    with pytest.raises(ValidationError):
        summarize_period([], view, date(2025, 3, 1), date(2025, 3, 1))
