"""Event models with Pydantic v2 validation."""

from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, field_validator

# Timestamps sent by the browser are UTC instants of a local midnight; they
# are read back as calendar days in the seller's timezone (TIMEZONE).
_calendar_timezone = ZoneInfo("Asia/Dubai")


def set_calendar_timezone(name: str) -> None:
    """Set the timezone used to turn timestamps into calendar days."""
    global _calendar_timezone
    _calendar_timezone = ZoneInfo(name)


class EventKind(str, Enum):
    """Event kind enumeration."""

    BUILT_IN = "built-in"
    USER = "user"
    DISCOVERED = "discovered"


def parse_calendar_day(value) -> date:
    """Coerce a date, datetime or ISO string to a calendar day."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            try:
                return value.astimezone(_calendar_timezone).date()
            except OverflowError as e:
                raise ValueError(f"Date out of range: {value.isoformat()}") from e
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        # "2025-03-01T00:00:00.000Z" style timestamps
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        return parse_calendar_day(parsed)
    raise ValueError(f"Invalid date: {value!r}")


def event_key(name: str, day: date) -> str:
    """Identity key used to deduplicate events: name plus calendar day."""
    return f"{name}_{day.isoformat()}"


class SpecialDate(BaseModel):
    """Named date: built-in holiday/season or AI-discovered commercial event."""

    date: date
    name: str
    category: str
    source: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v):
        return parse_calendar_day(v)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @property
    def key(self) -> str:
        return event_key(self.name, self.date)


class UserEvent(BaseModel):
    """Event created by the seller."""

    id: str
    date: date
    title: str
    description: Optional[str] = None
    source: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def coerce_date(cls, v):
        return parse_calendar_day(v)

    @property
    def key(self) -> str:
        return event_key(self.title, self.date)


class CalendarEvent(BaseModel):
    """Merged view over built-in, user and discovered events."""

    kind: EventKind
    date: date
    name: str
    category: Optional[str] = None
    description: Optional[str] = None
    source: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_special(cls, special: SpecialDate, kind: EventKind) -> "CalendarEvent":
        return cls(
            kind=kind,
            date=special.date,
            name=special.name,
            category=special.category,
            source=special.source,
        )

    @classmethod
    def from_user(cls, event: UserEvent) -> "CalendarEvent":
        return cls(
            kind=EventKind.USER,
            date=event.date,
            name=event.title,
            description=event.description,
            source=event.source,
            id=event.id,
        )

    @property
    def key(self) -> str:
        return event_key(self.name, self.date)

    @property
    def event_id(self) -> str:
        """Stable identifier: explicit id when present, else the dedup key."""
        return self.id or self.key


def dedupe_new_events(
    existing: Iterable[SpecialDate], candidates: Iterable[SpecialDate]
) -> list[SpecialDate]:
    """
    Return the candidates whose (name, date) key is not already known.

    Duplicates inside ``candidates`` are also dropped, keeping the first.
    """
    seen = {event.key for event in existing}
    unique = []
    for candidate in candidates:
        if candidate.key in seen:
            continue
        seen.add(candidate.key)
        unique.append(candidate)
    return unique


def merge_events(
    special_dates: Iterable[SpecialDate],
    user_events: Iterable[UserEvent],
    discovered_events: Iterable[SpecialDate],
) -> list[CalendarEvent]:
    """Combine all event sources into one date-sorted list."""
    combined = [
        *(CalendarEvent.from_special(d, EventKind.BUILT_IN) for d in special_dates),
        *(CalendarEvent.from_user(e) for e in user_events),
        *(
            CalendarEvent.from_special(d, EventKind.DISCOVERED)
            for d in discovered_events
        ),
    ]
    # sorted() is stable so same-day events keep source order
    return sorted(combined, key=lambda e: e.date)
