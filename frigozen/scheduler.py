"""Scheduled expiry reminders."""

from __future__ import annotations

import logging
from datetime import datetime

from .db import LocalStorage
from .i18n import label
from .inventory import InventoryStore
from .models import FoodItem
from .state import AppState
from .views import expiring_soon, expiry_status

logger = logging.getLogger(__name__)


class ExpiryReminderScheduler:
    """Logs items close to expiry on a cron schedule.

    Uses APScheduler for cron-based scheduling.
    """

    def __init__(self, config) -> None:
        """Initialize scheduler with a FrigozenConfig.

        Raises:
            ImportError: If apscheduler is not installed.
        """
        try:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler
            from apscheduler.triggers.cron import CronTrigger
        except ImportError:
            raise ImportError(
                "apscheduler est requis : pip install 'frigozen[scheduler]'"
            )

        self._config = config
        self._scheduler = AsyncIOScheduler()
        self._CronTrigger = CronTrigger
        self._running = False

    def setup_jobs(self) -> None:
        """Register the reminder job if reminders are enabled."""
        if not self._config.reminders.enabled:
            logger.info("Expiry reminders disabled")
            return
        trigger = self._parse_cron(self._config.reminders.schedule)
        self._scheduler.add_job(
            self._job_expiry_reminder,
            trigger=trigger,
            id="expiry_reminder",
            name="Rappel des dates de péremption",
            replace_existing=True,
        )
        logger.info("Expiry reminder job registered: %s", self._config.reminders.schedule)

    def start(self) -> None:
        self.setup_jobs()
        self._scheduler.start()
        self._running = True
        logger.info("Scheduler started")

    def stop(self) -> None:
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Scheduler stopped")

    @property
    def running(self) -> bool:
        return self._running

    def get_jobs(self) -> list[dict]:
        jobs = []
        for job in self._scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": str(next_run) if next_run else None,
            })
        return jobs

    def _parse_cron(self, expr: str):
        parts = expr.split()
        if len(parts) == 5:
            return self._CronTrigger(
                minute=parts[0],
                hour=parts[1],
                day=parts[2],
                month=parts[3],
                day_of_week=parts[4],
            )
        raise ValueError(f"expression cron invalide : {expr}")

    async def _job_expiry_reminder(self) -> list[FoodItem]:
        logger.info("Running expiry reminder")
        try:
            return self.check_now()
        except Exception:
            logger.exception("Expiry reminder failed")
            return []

    def check_now(self, now: datetime | None = None) -> list[FoodItem]:
        """Log and return the items expiring soon."""
        storage = LocalStorage(self._config.storage.path)
        try:
            language = AppState.load(storage).language
            store = InventoryStore.load(storage)
        finally:
            storage.close()

        soon = expiring_soon(store, now, self._config.inventory.expiring_soon_days)
        for item in soon:
            status, days = expiry_status(item, now)
            logger.warning(
                "%s: %s", item.name, label(language, status, days=days)
            )
        if soon:
            logger.info("%d items expiring soon", len(soon))
        return soon

