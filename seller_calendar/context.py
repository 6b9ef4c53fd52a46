"""Shared context with lazy-initialized dependencies."""

from typing import Optional

from seller_calendar.config import CalendarConfig
from seller_calendar.jobs import (
    DiscoveryJob,
    NotificationJob,
    Notifier,
    ProviderFactory,
)
from seller_calendar.models.event import set_calendar_timezone
from seller_calendar.models.settings import Settings
from seller_calendar.notifier import notify
from seller_calendar.providers import get_provider
from seller_calendar.providers.base import AIProvider
from seller_calendar.scheduler import CalendarScheduler
from seller_calendar.storage.calendar_repository import CalendarRepository
from seller_calendar.storage.json_store import JsonStore


class CalendarContext:
    """Shared context used by the HTTP app and the CLI commands.

    Usage:
        ctx = CalendarContext()
        settings = ctx.repository.load_settings()
    """

    def __init__(
        self,
        config: Optional[CalendarConfig] = None,
        provider_factory: Optional[ProviderFactory] = None,
        notifier: Optional[Notifier] = None,
    ):
        """Initialize context.

        Args:
            config: Configuration; loaded from the environment when omitted
            provider_factory: Builds an AI provider from settings
            notifier: Sends a webhook payload, returns success
        """
        self._config = config
        if config is not None:
            set_calendar_timezone(config.timezone)
        self._provider_factory = provider_factory
        self.notifier = notifier or notify

        # Lazy-loaded dependencies
        self._repository: Optional[CalendarRepository] = None
        self._discovery_job: Optional[DiscoveryJob] = None
        self._notification_job: Optional[NotificationJob] = None
        self._scheduler: Optional[CalendarScheduler] = None

    @property
    def config(self) -> CalendarConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            self._config = CalendarConfig.from_env()
            set_calendar_timezone(self._config.timezone)
        return self._config

    @property
    def repository(self) -> CalendarRepository:
        """Get calendar repository (lazy-loaded)."""
        if self._repository is None:
            self._repository = CalendarRepository(JsonStore(self.config.data_dir))
        return self._repository

    def provider(self, settings: Settings) -> AIProvider:
        """Build the AI provider selected in settings.

        Raises:
            ProviderError: If the provider is unknown or not configured
        """
        if self._provider_factory is not None:
            return self._provider_factory(settings)
        return get_provider(settings, self.config)

    @property
    def discovery_job(self) -> DiscoveryJob:
        if self._discovery_job is None:
            self._discovery_job = DiscoveryJob(
                self.repository, self.config, self.provider, self.notifier
            )
        return self._discovery_job

    @property
    def notification_job(self) -> NotificationJob:
        if self._notification_job is None:
            self._notification_job = NotificationJob(
                self.repository, self.config, self.provider, self.notifier
            )
        return self._notification_job

    @property
    def scheduler(self) -> CalendarScheduler:
        """Get job scheduler (lazy-loaded, not started)."""
        if self._scheduler is None:
            self._scheduler = CalendarScheduler(
                self.config, self.discovery_job, self.notification_job
            )
        return self._scheduler
