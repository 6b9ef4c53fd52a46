"""User settings model."""

from datetime import datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AIProviderName(str, Enum):
    """AI backends selectable from the settings screen."""

    GEMINI = "gemini"
    OPENAI = "openai"
    OPENROUTER = "openrouter"


class Settings(BaseModel):
    """Single global settings document.

    Stored as settings.json and overwritten wholesale on every save. Field
    names are camelCase on the wire to match the front end.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    webhook_url: str = ""

    # AI provider selection and credentials
    ai_provider: AIProviderName = AIProviderName.GEMINI
    openai_api_key: str = ""
    openrouter_api_key: str = ""
    openai_model: str = "gpt-4o"
    openrouter_model: str = "anthropic/claude-3-haiku"

    # Discovery job
    is_auto_discover_enabled: bool = False
    auto_discover_frequency: int = Field(default=2, ge=1)

    # Notification job
    is_auto_notify_enabled: bool = False
    notify_days_before: int = Field(default=7, ge=0)
    is_daily_briefing_enabled: bool = False
    daily_briefing_time: str = "09:00"

    def to_document(self) -> dict:
        """Serialize with camelCase keys for storage and the API."""
        return self.model_dump(mode="json", by_alias=True)


class ChatMessage(BaseModel):
    """One turn of the assistant conversation."""

    role: Literal["user", "model"]
    content: str


class SchedulerState(BaseModel):
    """Bookkeeping kept apart from settings so saves cannot reset it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    last_discovery_run: Optional[datetime] = None
