"""Scheduled background jobs: event discovery and notification dispatch.

Both jobs are safe to run on every tick. Each one reloads settings, decides
whether it has anything to do, and degrades to a logged no-op when an AI
provider or the webhook is unavailable.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from seller_calendar import embeds
from seller_calendar.ai_service import discover_events, marketing_tip
from seller_calendar.config import CalendarConfig
from seller_calendar.dates import get_special_dates
from seller_calendar.exceptions import CalendarError, ProviderError
from seller_calendar.models.event import CalendarEvent, merge_events
from seller_calendar.models.settings import SchedulerState, Settings
from seller_calendar.notifier import notify
from seller_calendar.providers import get_provider, has_credentials
from seller_calendar.providers.base import AIProvider
from seller_calendar.storage.calendar_repository import CalendarRepository

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[Settings], AIProvider]
Notifier = Callable[[str, dict], bool]


class JobStatus(str, Enum):
    """Outcome of one job tick."""

    DISABLED = "disabled"
    NOT_CONFIGURED = "not_configured"
    TOO_SOON = "too_soon"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class DiscoveryResult:
    status: JobStatus
    added: list = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "added": [e.model_dump(mode="json", exclude_none=True) for e in self.added],
            "error": self.error,
        }


@dataclass
class NotificationResult:
    status: JobStatus
    briefing_sent: bool = False
    reminders_sent: list[str] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "briefingSent": self.briefing_sent,
            "remindersSent": self.reminders_sent,
            "error": self.error,
        }


def reminder_id(event: CalendarEvent, days_before: int) -> str:
    """Sent-log entry for one event at one lead time."""
    return f"{event.event_id}@{days_before}d"


class _Job:
    """Shared wiring for the scheduled jobs."""

    def __init__(
        self,
        repository: CalendarRepository,
        config: CalendarConfig,
        provider_factory: Optional[ProviderFactory] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.repository = repository
        self.config = config
        self.provider_factory = provider_factory or (
            lambda settings: get_provider(settings, config)
        )
        self.notifier = notifier or notify

    def now(self) -> datetime:
        return datetime.now(ZoneInfo(self.config.timezone))


class DiscoveryJob(_Job):
    """Periodically ask the AI provider for new commercial events."""

    def run(self, now: Optional[datetime] = None) -> DiscoveryResult:
        """
        Run one discovery tick.

        The run is skipped when discovery is disabled, the provider lacks
        credentials, or fewer than ``autoDiscoverFrequency`` days have passed
        since the last successful run. On failure the last-run timestamp is
        left unchanged so the next tick retries.
        """
        now = now or self.now()
        settings = self.repository.load_settings()

        if not settings.is_auto_discover_enabled:
            logger.debug("Auto-discovery disabled, skipping")
            return DiscoveryResult(JobStatus.DISABLED)

        if not has_credentials(settings, self.config):
            logger.info(
                f"Auto-discovery skipped: provider '{settings.ai_provider.value}' "
                "has no credentials"
            )
            return DiscoveryResult(JobStatus.NOT_CONFIGURED)

        state = self.repository.load_scheduler_state()
        last_run = state.last_discovery_run
        if last_run is not None:
            if last_run.tzinfo is None:
                last_run = last_run.replace(tzinfo=now.tzinfo)
            interval = timedelta(days=settings.auto_discover_frequency)
            if now - last_run < interval:
                logger.info(
                    f"Auto-discovery ran at {last_run.isoformat()}, next run due "
                    f"after {(last_run + interval).isoformat()}"
                )
                return DiscoveryResult(JobStatus.TOO_SOON)

        logger.info(f"Running auto-discovery for {now.strftime('%B %Y')}")
        try:
            provider = self.provider_factory(settings)
            candidates = discover_events(provider, now.year, now.month)
            added = self.repository.add_discovered_events(candidates)

            if added and settings.webhook_url:
                self.notifier(
                    settings.webhook_url,
                    embeds.discovery_summary(added, now.strftime("%B %Y")),
                )

            # Minute precision so a tick at the same cron time N days later is due
            self.repository.save_scheduler_state(
                SchedulerState(last_discovery_run=now.replace(second=0, microsecond=0))
            )
        except Exception as e:
            if isinstance(e, CalendarError):
                logger.error(f"Auto-discovery failed: {e}")
            else:
                logger.exception("Auto-discovery failed unexpectedly")
            if settings.webhook_url:
                self.notifier(settings.webhook_url, embeds.discovery_failed(str(e)))
            return DiscoveryResult(JobStatus.FAILED, error=str(e))

        logger.info(f"Auto-discovery added {len(added)} new events")
        return DiscoveryResult(JobStatus.COMPLETED, added=added)


class NotificationJob(_Job):
    """Daily briefing and lead-time reminders posted to the webhook."""

    def collect_events(self, *days: date) -> list[CalendarEvent]:
        """Built-in dates for the years spanned by days, plus stored events."""
        special = []
        for year in sorted({d.year for d in days}):
            special.extend(get_special_dates(year))
        return merge_events(
            special,
            self.repository.load_user_events(),
            self.repository.load_discovered_events(),
        )

    def _provider_or_none(self, settings: Settings) -> Optional[AIProvider]:
        try:
            return self.provider_factory(settings)
        except ProviderError as e:
            logger.info(f"No AI provider for the daily tip: {e}")
            return None

    def run(self, now: Optional[datetime] = None) -> NotificationResult:
        """Run one notification tick."""
        now = now or self.now()
        settings = self.repository.load_settings()
        briefing = settings.is_daily_briefing_enabled
        reminders = settings.is_auto_notify_enabled

        if not (briefing or reminders):
            logger.debug("Notifications disabled, skipping")
            return NotificationResult(JobStatus.DISABLED)
        if not settings.webhook_url:
            logger.info("Notifications skipped: no webhook URL configured")
            return NotificationResult(JobStatus.NOT_CONFIGURED)

        today = now.date()
        days_before = settings.notify_days_before
        target = today + timedelta(days=days_before)
        result = NotificationResult(JobStatus.COMPLETED)

        try:
            events = self.collect_events(today, target)

            if briefing:
                todays = [e for e in events if e.date == today]
                if todays:
                    tip = marketing_tip(self._provider_or_none(settings), todays)
                    result.briefing_sent = self.notifier(
                        settings.webhook_url, embeds.daily_briefing(today, todays, tip)
                    )
                else:
                    logger.info("No events today, daily briefing not sent")

            if reminders:
                sent = self.repository.load_sent_notifications()
                for event in events:
                    if event.date != target:
                        continue
                    rid = reminder_id(event, days_before)
                    if rid in sent:
                        continue
                    payload = embeds.reminder(event, days_before)
                    if self.notifier(settings.webhook_url, payload):
                        sent.add(rid)
                        result.reminders_sent.append(rid)
                if result.reminders_sent:
                    self.repository.save_sent_notifications(sent)
        except Exception as e:
            if isinstance(e, CalendarError):
                logger.error(f"Notification job failed: {e}")
            else:
                logger.exception("Notification job failed unexpectedly")
            result.status = JobStatus.FAILED
            result.error = str(e)

        logger.info(
            f"Notification job: briefing={'sent' if result.briefing_sent else 'no'}, "
            f"reminders={len(result.reminders_sent)}"
        )
        return result
