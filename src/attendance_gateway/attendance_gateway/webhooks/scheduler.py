from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from apscheduler.events import EVENT_JOB_MAX_INSTANCES
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from ..core.enums import WebhookType
from .service import WebhookService

logger = logging.getLogger(__name__)

JOB_ID = "fleet_webhook"


class WebhookScheduler:
    """Periodically pushes the fleet's shift data to the configured webhook."""

    def __init__(
        self,
        service: WebhookService,
        *,
        interval_minutes: float = 15,
        webhook_type: WebhookType = WebhookType.TODAY_SHIFT,
    ):
        self._service = service
        self._interval_minutes = float(interval_minutes)
        self._type = webhook_type
        self._scheduler: Optional[BackgroundScheduler] = None
        self.last_run: Optional[datetime] = None
        self.last_summary: Optional[dict] = None
        self.runs = 0
        self.skipped = 0

    @property
    def active(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        if self.active:
            return
        scheduler = BackgroundScheduler()
        scheduler.add_job(
            func=self.run_once,
            trigger=IntervalTrigger(minutes=self._interval_minutes),
            id=JOB_ID,
            name=f"Fleet {self._type.value} webhook",
            max_instances=1,
            coalesce=True,
            misfire_grace_time=60,
            next_run_time=datetime.now(),
        )
        scheduler.add_listener(self._on_max_instances, EVENT_JOB_MAX_INSTANCES)
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Webhook scheduler started (every %s minutes)", self._interval_minutes)

    def stop(self, wait: bool = True) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
        self._scheduler = None
        logger.info("Webhook scheduler stopped")

    def _on_max_instances(self, event) -> None:
        self.skipped += 1
        logger.warning("Previous webhook run still in progress, skipping")

    def run_once(self) -> Optional[dict]:
        """Run one fleet push and return its summary, or None when it failed."""
        self.last_run = datetime.now()
        try:
            result = self._service.trigger_fleet(self._type)
        except Exception:
            logger.exception("Scheduled webhook run failed")
            return None
        self.last_summary = result["summary"]
        self.runs += 1
        logger.info("Scheduled webhook run finished", extra={"summary": self.last_summary})
        return self.last_summary

    def next_run(self) -> Optional[datetime]:
        if not self.active:
            return None
        job = self._scheduler.get_job(JOB_ID)
        return job.next_run_time if job else None

    def status(self) -> dict:
        next_run = self.next_run()
        return {
            "active": self.active,
            "intervalMinutes": self._interval_minutes,
            "webhookType": self._type.value,
            "lastRun": self.last_run.isoformat() if self.last_run else None,
            "nextRun": next_run.isoformat() if next_run else None,
            "lastSummary": self.last_summary,
            "runs": self.runs,
            "skipped": self.skipped,
        }
