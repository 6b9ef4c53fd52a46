"""Typed access to the persisted calendar documents."""

import logging
from typing import Iterable, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from seller_calendar.constants import (
    CHAT_HISTORY_KEY,
    DISCOVERED_EVENTS_KEY,
    SCHEDULER_STATE_KEY,
    SENT_NOTIFICATIONS_KEY,
    SETTINGS_KEY,
    USER_EVENTS_KEY,
)
from seller_calendar.models.event import SpecialDate, UserEvent, dedupe_new_events
from seller_calendar.models.settings import ChatMessage, SchedulerState, Settings
from seller_calendar.storage.json_store import JsonStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CalendarRepository:
    """Repository for settings, events and scheduler bookkeeping."""

    def __init__(self, store: JsonStore):
        """
        Initialize repository.

        Args:
            store: JsonStore instance (dependency injection)
        """
        self.store = store

    def _load_list(self, key: str, model: Type[ModelT]) -> list[ModelT]:
        """Load a list document, skipping items that fail validation."""
        data = self.store.read(key, [])
        if not isinstance(data, list):
            logger.warning(f"Expected a list in '{key}', got {type(data).__name__}")
            return []

        items = []
        for raw in data:
            try:
                items.append(model.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning(f"Skipping invalid item in '{key}': {e}")
        return items

    def _save_list(self, key: str, items: Iterable[BaseModel]) -> None:
        self.store.write(
            key, [item.model_dump(mode="json", exclude_none=True) for item in items]
        )

    # Settings

    def load_settings(self) -> Settings:
        """Load settings, returning defaults when missing or invalid."""
        data = self.store.read(SETTINGS_KEY, Settings().to_document())
        try:
            return Settings.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Stored settings are invalid, using defaults: {e}")
            return Settings()

    def save_settings(self, settings: Settings) -> None:
        self.store.write(SETTINGS_KEY, settings.to_document())

    # User events

    def load_user_events(self) -> list[UserEvent]:
        return self._load_list(USER_EVENTS_KEY, UserEvent)

    def save_user_events(self, events: Iterable[UserEvent]) -> None:
        self._save_list(USER_EVENTS_KEY, events)

    # Discovered events

    def load_discovered_events(self) -> list[SpecialDate]:
        return self._load_list(DISCOVERED_EVENTS_KEY, SpecialDate)

    def save_discovered_events(self, events: Iterable[SpecialDate]) -> None:
        self._save_list(DISCOVERED_EVENTS_KEY, events)

    def add_discovered_events(
        self, candidates: Iterable[SpecialDate]
    ) -> list[SpecialDate]:
        """
        Append candidates not already stored, keyed by (name, date).

        Returns:
            The events that were actually added
        """
        existing = self.load_discovered_events()
        unique = dedupe_new_events(existing, candidates)
        if unique:
            self.save_discovered_events(existing + unique)
        return unique

    # Chat history

    def load_chat_history(self) -> list[ChatMessage]:
        return self._load_list(CHAT_HISTORY_KEY, ChatMessage)

    def save_chat_history(self, messages: Iterable[ChatMessage]) -> None:
        self._save_list(CHAT_HISTORY_KEY, messages)

    # Scheduler bookkeeping

    def load_sent_notifications(self) -> set[str]:
        data = self.store.read(SENT_NOTIFICATIONS_KEY, [])
        if not isinstance(data, list):
            logger.warning("Sent notification log is not a list, starting empty")
            return set()
        return {str(item) for item in data}

    def save_sent_notifications(self, sent: Iterable[str]) -> None:
        self.store.write(SENT_NOTIFICATIONS_KEY, sorted(sent))

    def load_scheduler_state(self) -> SchedulerState:
        default = SchedulerState().model_dump(mode="json", by_alias=True)
        data = self.store.read(SCHEDULER_STATE_KEY, default)
        try:
            return SchedulerState.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Stored scheduler state is invalid, resetting: {e}")
            return SchedulerState()

    def save_scheduler_state(self, state: SchedulerState) -> None:
        document = state.model_dump(mode="json", by_alias=True)
        self.store.write(SCHEDULER_STATE_KEY, document)
