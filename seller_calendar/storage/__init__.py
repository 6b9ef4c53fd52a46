"""Storage layer for calendar documents."""

from seller_calendar.storage.calendar_repository import CalendarRepository
from seller_calendar.storage.json_store import JsonStore

__all__ = [
    "CalendarRepository",
    "JsonStore",
]
