"""Pydantic models for the seller calendar."""

from seller_calendar.models.event import (
    CalendarEvent,
    EventKind,
    SpecialDate,
    UserEvent,
    dedupe_new_events,
    event_key,
    merge_events,
    parse_calendar_day,
)
from seller_calendar.models.settings import (
    AIProviderName,
    ChatMessage,
    SchedulerState,
    Settings,
)

__all__ = [
    "CalendarEvent",
    "EventKind",
    "SpecialDate",
    "UserEvent",
    "dedupe_new_events",
    "event_key",
    "merge_events",
    "parse_calendar_day",
    "AIProviderName",
    "ChatMessage",
    "SchedulerState",
    "Settings",
]
