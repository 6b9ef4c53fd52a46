"""Exception hierarchy for calendar operations."""


class CalendarError(Exception):
    """Base exception for calendar operations."""

    pass


class ValidationError(CalendarError):
    """Invalid request or input data."""

    pass


class StorageError(CalendarError):
    """Error reading or writing a persisted document."""

    pass


class ProviderError(CalendarError):
    """AI provider call failed (network, HTTP status or malformed response)."""

    pass


class ProviderNotConfiguredError(ProviderError):
    """Selected AI provider is missing its credentials."""

    pass


class UnknownProviderError(ProviderError):
    """AI provider name not recognised."""

    pass


class NotificationError(CalendarError):
    """Webhook delivery failed."""

    pass
