"""Cron wiring for the discovery and notification jobs."""

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from seller_calendar.config import CalendarConfig
from seller_calendar.constants import DEFAULT_BRIEFING_HOUR, DEFAULT_BRIEFING_MINUTE
from seller_calendar.jobs import (
    DiscoveryJob,
    DiscoveryResult,
    NotificationJob,
    NotificationResult,
)
from seller_calendar.models.settings import Settings

logger = logging.getLogger(__name__)

DISCOVERY_JOB_ID = "event-discovery"
NOTIFICATION_JOB_ID = "notifications"


def parse_time_of_day(
    value: Optional[str],
    default: tuple[int, int] = (DEFAULT_BRIEFING_HOUR, DEFAULT_BRIEFING_MINUTE),
) -> tuple[int, int]:
    """
    Parse "HH:MM" into (hour, minute).

    Invalid input logs a warning and returns default instead of failing.
    """
    try:
        hour_text, minute_text = value.strip().split(":")
        hour, minute = int(hour_text), int(minute_text)
    except (AttributeError, ValueError):
        hour, minute = -1, -1

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        fallback = f"{default[0]:02d}:{default[1]:02d}"
        logger.warning(f"Invalid time of day {value!r}, using {fallback}")
        return default
    return hour, minute


class CalendarScheduler:
    """Runs the discovery job at a fixed time and the notification job at the
    user's daily briefing time."""

    def __init__(
        self,
        config: CalendarConfig,
        discovery_job: DiscoveryJob,
        notification_job: NotificationJob,
        scheduler: Optional[BackgroundScheduler] = None,
    ):
        self.config = config
        self.discovery_job = discovery_job
        self.notification_job = notification_job
        self.scheduler = scheduler or BackgroundScheduler(timezone=config.timezone)

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def _daily_trigger(self, hour: int, minute: int) -> CronTrigger:
        return CronTrigger(hour=hour, minute=minute, timezone=self.config.timezone)

    def discovery_trigger(self) -> CronTrigger:
        hour, minute = parse_time_of_day(self.config.discovery_time, default=(8, 0))
        return self._daily_trigger(hour, minute)

    def notification_trigger(self, settings: Settings) -> CronTrigger:
        hour, minute = parse_time_of_day(settings.daily_briefing_time)
        return self._daily_trigger(hour, minute)

    def start(self, settings: Settings) -> None:
        """Register both jobs and start the background thread."""
        self.scheduler.add_job(
            self.discovery_job.run,
            trigger=self.discovery_trigger(),
            id=DISCOVERY_JOB_ID,
            name="Event discovery",
            replace_existing=True,
            coalesce=True,
        )
        self.scheduler.add_job(
            self.notification_job.run,
            trigger=self.notification_trigger(settings),
            id=NOTIFICATION_JOB_ID,
            name="Notifications",
            replace_existing=True,
            coalesce=True,
        )
        self.scheduler.start()
        logger.info(
            f"Scheduler started: discovery at {self.config.discovery_time}, "
            f"notifications at {settings.daily_briefing_time} ({self.config.timezone})"
        )

    def reschedule_notifications(self, settings: Settings) -> None:
        """Move the notification job to the current daily briefing time."""
        trigger = self.notification_trigger(settings)
        if self.scheduler.get_job(NOTIFICATION_JOB_ID) is None:
            self.scheduler.add_job(
                self.notification_job.run,
                trigger=trigger,
                id=NOTIFICATION_JOB_ID,
                name="Notifications",
                coalesce=True,
            )
        else:
            self.scheduler.reschedule_job(NOTIFICATION_JOB_ID, trigger=trigger)
        logger.info(f"Notifications rescheduled to {settings.daily_briefing_time}")

    def run_discovery_now(self) -> DiscoveryResult:
        """Run the discovery job in the calling thread."""
        return self.discovery_job.run()

    def run_notifications_now(self) -> NotificationResult:
        """Run the notification job in the calling thread."""
        return self.notification_job.run()

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")
