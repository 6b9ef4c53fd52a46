"""Pure formatting functions for display output."""

from datetime import date, datetime, timezone


def format_relative_time(dt: datetime) -> str:
    """Format datetime as relative time.

    Args:
        dt: Datetime to format.

    Returns:
        Formatted time string (e.g., "2h ago", "1w ago", "3mo ago", "1y ago").
    """
    if dt.tzinfo is None:
        # If no timezone, assume UTC
        dt = dt.replace(tzinfo=timezone.utc)

    time_diff = datetime.now(timezone.utc) - dt

    if time_diff.days == 0:
        if time_diff.seconds < 60:
            return "just now"
        elif time_diff.seconds < 3600:
            return f"{time_diff.seconds // 60}m ago"
        return f"{time_diff.seconds // 3600}h ago"
    elif time_diff.days < 7:
        return f"{time_diff.days}d ago"
    elif time_diff.days < 30:
        return f"{time_diff.days // 7}w ago"
    elif time_diff.days < 365:
        return f"{time_diff.days // 30}mo ago"
    return f"{time_diff.days // 365}y ago"


def format_event_date(day: date) -> str:
    """Format a calendar day as "Fri, 2025-03-28"."""
    return day.strftime("%a, %Y-%m-%d")


def format_secret(value: str | None) -> str:
    """Mask a secret, keeping the last four characters visible."""
    if not value:
        return "[dim]None[/dim]"
    if len(value) <= 4:
        return "****"
    return f"****{value[-4:]}"
