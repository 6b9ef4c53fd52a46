"""AI-backed calendar features built on a provider's complete() call."""

import logging
from typing import Any, Iterable, Optional

from pydantic import ValidationError as PydanticValidationError

from seller_calendar.constants import DISCOVERED_SOURCE, FALLBACK_MARKETING_TIP
from seller_calendar.exceptions import ProviderError
from seller_calendar.models.event import CalendarEvent, SpecialDate
from seller_calendar.models.settings import ChatMessage
from seller_calendar.prompts import (
    CONNECTION_TEST_PROMPT,
    chat_prompt,
    daily_tip_prompt,
    discovery_prompt,
    marketing_ideas_prompt,
)
from seller_calendar.providers.base import AIProvider

logger = logging.getLogger(__name__)


def _unwrap_list(result: Any, preferred_key: str) -> list:
    """Accept a bare JSON array or an object wrapping one."""
    if isinstance(result, list):
        return result
    if isinstance(result, dict):
        if isinstance(result.get(preferred_key), list):
            return result[preferred_key]
        for value in result.values():
            if isinstance(value, list):
                return value
    raise ProviderError(f"Expected a JSON array, got {type(result).__name__}")


def discover_events(provider: AIProvider, year: int, month: int) -> list[SpecialDate]:
    """
    Ask the provider for notable events in a month.

    Args:
        provider: AI provider
        year: Gregorian year
        month: Month number (1-12)

    Returns:
        Valid discovered events; malformed items are dropped

    Raises:
        ProviderError: If the call fails or the answer is not a JSON array
    """
    result = provider.complete(discovery_prompt(year, month), json_mode=True)
    items = _unwrap_list(result, "events")

    events = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            events.append(
                SpecialDate(
                    date=item.get("date"),
                    name=item.get("name") or "",
                    category=item.get("category") or "Trending",
                    source=DISCOVERED_SOURCE,
                )
            )
        except PydanticValidationError as e:
            logger.debug(f"Dropping malformed discovered event {item!r}: {e}")
    logger.info(f"Provider {provider.name} returned {len(events)} events")
    return events


def generate_marketing_ideas(
    provider: AIProvider, name: str, category: str
) -> list[str]:
    """Three marketing ideas for an event.

    Raises:
        ProviderError: If the call fails or the answer is not a list of strings
    """
    prompt = marketing_ideas_prompt(name, category)
    result = provider.complete(prompt, json_mode=True)
    ideas = _unwrap_list(result, "ideas")
    if not all(isinstance(idea, str) for idea in ideas):
        raise ProviderError("Invalid format received from provider.")
    return ideas


def chat_reply(
    provider: AIProvider,
    message: str,
    history: Iterable[ChatMessage],
    events: Iterable[CalendarEvent],
) -> str:
    result = provider.complete(chat_prompt(message, history, events))
    if not isinstance(result, str):
        raise ProviderError("Invalid format received from provider.")
    return result


def marketing_tip(
    provider: Optional[AIProvider], events: Iterable[CalendarEvent]
) -> str:
    """One marketing tip for today, or a static tip if the provider fails."""
    if provider is None:
        return FALLBACK_MARKETING_TIP
    try:
        tip = provider.complete(daily_tip_prompt(events))
    except ProviderError as e:
        logger.warning(f"Marketing tip unavailable: {e}")
        return FALLBACK_MARKETING_TIP
    if not isinstance(tip, str) or not tip.strip():
        return FALLBACK_MARKETING_TIP
    return tip.strip()


def check_connection(provider: AIProvider) -> tuple[bool, Optional[str]]:
    """Round-trip a trivial prompt. Returns (success, error message)."""
    try:
        provider.complete(CONNECTION_TEST_PROMPT)
    except ProviderError as e:
        return False, str(e)
    return True, None
