"""Discord payload builders for calendar notifications."""

from datetime import date, datetime, timezone
from typing import Iterable, Optional

from seller_calendar.constants import (
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_ORANGE,
    COLOR_PURPLE,
    COLOR_RED,
    COLOR_YELLOW,
    DISCORD_FOOTER,
    DISCORD_MAX_DESCRIPTION,
    DISCORD_MAX_LINES,
)
from seller_calendar.models.event import CalendarEvent, SpecialDate


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def format_day(day: date) -> str:
    """Short day label, e.g. 'Sat, 01 Mar'."""
    return day.strftime("%a, %d %b")


def bullet_list(lines: list[str]) -> str:
    """Join lines, keeping within Discord's line and description limits."""
    shown = lines[:DISCORD_MAX_LINES]
    hidden = len(lines) - len(shown)
    text = "\n".join(shown)
    if hidden:
        text += f"\n…and {hidden} more"
    if len(text) > DISCORD_MAX_DESCRIPTION:
        text = text[: DISCORD_MAX_DESCRIPTION - 1] + "…"
    return text


def embed_payload(
    title: str,
    description: str,
    color: int,
    fields: Optional[list[dict]] = None,
    content: Optional[str] = None,
    timestamp: bool = True,
) -> dict:
    embed = {
        "title": title,
        "description": description,
        "color": color,
        "footer": {"text": DISCORD_FOOTER},
    }
    if fields:
        embed["fields"] = fields
    if timestamp:
        embed["timestamp"] = _now_iso()

    payload = {"embeds": [embed]}
    if content:
        payload["content"] = content
    return payload


def discovery_summary(events: list[SpecialDate], period_label: str) -> dict:
    lines = [
        f"**`{format_day(e.date)}`**: {e.name} ({e.category})"
        for e in sorted(events, key=lambda e: e.date)
    ]
    return embed_payload(
        title=f"🔎 {len(events)} new events discovered for {period_label}",
        description=bullet_list(lines),
        color=COLOR_PURPLE,
    )


def discovery_failed(error: str) -> dict:
    return embed_payload(
        title="⚠️ Event discovery failed",
        description=f"Automatic event discovery could not complete: {error}",
        color=COLOR_RED,
    )


def daily_briefing(day: date, events: list[CalendarEvent], tip: str) -> dict:
    lines = [
        f"• **{e.name}**" + (f" ({e.category})" if e.category else "") for e in events
    ]
    return embed_payload(
        title=f"☀️ Daily Briefing: {format_day(day)}",
        description=bullet_list(lines),
        color=COLOR_YELLOW,
        fields=[{"name": "💡 Marketing Tip", "value": tip[:1024], "inline": False}],
    )


def reminder(event: CalendarEvent, days_before: int) -> dict:
    if days_before == 0:
        when = "today"
    elif days_before == 1:
        when = "tomorrow"
    else:
        when = f"in {days_before} days"

    fields = [{"name": "Date", "value": format_day(event.date), "inline": True}]
    if event.category:
        fields.append({"name": "Category", "value": event.category, "inline": True})

    return embed_payload(
        title=f"⏰ Upcoming: {event.name}",
        description=(
            event.description or f"**{event.name}** is {when}. Time to prepare!"
        ),
        color=COLOR_ORANGE,
        fields=fields,
    )


def event_reminder(title: str, description: Optional[str], when: datetime) -> dict:
    """Manual reminder for a single event, with a Discord timestamp tag."""
    return embed_payload(
        title=f"📅 {title}",
        description=description or "No description provided.",
        color=COLOR_BLUE,
        fields=[
            {
                "name": "Date & Time",
                "value": f"<t:{int(when.timestamp())}:F>",
                "inline": False,
            }
        ],
        content=f"🔔 **Reminder set for: {title}**",
    )


def period_summary(title: str, events: Iterable[CalendarEvent]) -> dict:
    """Week or month overview; green 'nothing upcoming' embed when empty."""
    events = list(events)
    if not events:
        return embed_payload(
            title=title,
            description="✅ No upcoming events found for this period.",
            color=COLOR_GREEN,
            timestamp=False,
        )
    lines = [f"**`{format_day(e.date)}`**: {e.name}" for e in events]
    return embed_payload(title=title, description=bullet_list(lines), color=COLOR_BLUE)


def webhook_check_message() -> dict:
    return embed_payload(
        title="✅ Webhook connected",
        description="Your calendar notifications will be delivered here.",
        color=COLOR_GREEN,
    )
