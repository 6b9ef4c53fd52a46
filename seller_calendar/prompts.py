"""Prompt templates for the AI features."""

import calendar
from typing import Iterable

from seller_calendar.models.event import CalendarEvent, EventKind
from seller_calendar.models.settings import ChatMessage

DISCOVERY_CATEGORIES = """\
- 'E-commerce Sale': Major online sales like White/Yellow Friday, Singles Day, Amazon/Noon specific sales.
- 'Global Event': Significant global events that affect UAE consumer behavior (e.g., Olympics, World Cup, major film releases).
- 'Cultural': Local festivals and cultural happenings.
- 'Sporting': Important local or international sports events held in UAE.
- 'Trending': Any other viral or trending event creating buzz."""


def discovery_prompt(year: int, month: int) -> str:
    """Ask for commercially relevant UAE events in a month (1-12)."""
    month_name = calendar.month_name[month]
    return (
        f"As an expert market researcher for UAE e-commerce, identify key events "
        f"in the UAE for {month_name} {year}. I need a JSON array of objects. "
        f"Each object must have 'date' (string in YYYY-MM-DD format), 'name' "
        f"(string), and 'category' (string). If you must return a JSON object, "
        f"put the array under an 'events' key. Include the following categories "
        f"where relevant:\n{DISCOVERY_CATEGORIES}"
    )


def marketing_ideas_prompt(name: str, category: str) -> str:
    return (
        f"You are an expert marketing consultant for e-commerce sellers in the "
        f"UAE. For the upcoming event '{name}', which is a {category}, generate "
        f"3 short, actionable, and creative marketing ideas. The ideas should be "
        f"suitable for a small to medium-sized online business. Ensure the output "
        f"is valid JSON: an array of strings, or an object with an 'ideas' array."
    )


def _event_line(event: CalendarEvent) -> str:
    return f" - {event.date.isoformat()}: {event.name} ({event.kind.value})"


def chat_prompt(
    message: str,
    history: Iterable[ChatMessage],
    events: Iterable[CalendarEvent],
) -> str:
    """Build the assistant prompt from calendar context and conversation."""
    event_summaries = "\n".join(_event_line(e) for e in events)
    history_text = "\n\n".join(
        f"{'User' if h.role == 'user' else 'Assistant'}: {h.content}" for h in history
    )
    return f"""You are a helpful and clever calendar assistant for an e-commerce seller in the UAE. Your tone should be encouraging and proactive.
Use the provided calendar events to answer the user's questions.

Here are the events for the current period:
{event_summaries}

Here is the conversation history so far:
{history_text}

User's new message:
{message}

Provide a helpful and concise response. Do not repeat the events list unless asked. Address the user directly."""


def daily_tip_prompt(events: Iterable[CalendarEvent]) -> str:
    names = ", ".join(e.name for e in events if e.kind is not EventKind.USER)
    focus = f" Today's events: {names}." if names else ""
    return (
        "You are a marketing coach for small UAE e-commerce sellers. Give one "
        "short, actionable marketing tip for today in at most two sentences."
        f"{focus} Reply with the tip only."
    )


CONNECTION_TEST_PROMPT = "Reply with the single word: OK"
