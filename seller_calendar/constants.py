"""Shared constants for the seller calendar."""

# Persisted documents (one JSON file per key in the data directory)
SETTINGS_KEY = "settings"
USER_EVENTS_KEY = "user_events"
DISCOVERED_EVENTS_KEY = "discovered_events"
CHAT_HISTORY_KEY = "chat_history"
SENT_NOTIFICATIONS_KEY = "sent_notifications"
SCHEDULER_STATE_KEY = "scheduler_state"

# Source labels
BUILT_IN_SOURCE = "built-in"
DISCOVERED_SOURCE = "ai-discovery"

# Notification job fallback when dailyBriefingTime cannot be parsed
DEFAULT_BRIEFING_HOUR = 9
DEFAULT_BRIEFING_MINUTE = 0

# Discord limits
DISCORD_MAX_LINES = 25
DISCORD_MAX_DESCRIPTION = 4096
DISCORD_FOOTER = "Sent from UAE Seller's Smart Calendar"

# Embed colours
COLOR_BLUE = 0x3498DB
COLOR_GREEN = 0x57F287
COLOR_YELLOW = 0xFEE75C
COLOR_ORANGE = 0xE67E22
COLOR_RED = 0xED4245
COLOR_PURPLE = 0x9B59B6

FALLBACK_MARKETING_TIP = (
    "Check your stock levels and schedule promotions a few days ahead of "
    "upcoming events."
)
