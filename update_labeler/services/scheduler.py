"""Internal task scheduler using APScheduler.

Runs the weekly update-labeler job within the FastAPI process. A process-wide
lock keeps a manual trigger from overlapping a scheduled run.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from update_labeler.config import settings

logger = logging.getLogger(__name__)

UPDATE_LABELS_JOB_ID = "update_labels"

_run_lock = asyncio.Lock()


@asynccontextmanager
async def run_lock() -> AsyncIterator[bool]:
    """
    Hold the labeler lock for the duration of the context.

    Non-blocking: yields False immediately if a run is already in progress.
    """
    if _run_lock.locked():
        yield False
        return

    async with _run_lock:
        yield True


async def run_update_labels() -> dict[str, Any] | None:
    """
    Execute the update-labeler job with lock protection.

    Returns the report dict if executed, None if skipped (already running) or failed.
    """
    async with run_lock() as acquired:
        if not acquired:
            logger.info("[scheduler] Update-labels: skipped (a run is already in progress)")
            return None

        logger.info("[scheduler] Update-labels: starting")

        try:
            from update_labeler.services.labeler import run_update_labeler

            report = await run_update_labeler()

            logger.info(
                f"[scheduler] Update-labels: completed "
                f"({report.issues_labeled} labeled, "
                f"{report.issues_failed} failed, "
                f"{report.duration_seconds}s)"
            )
            return asdict(report)

        except Exception as e:
            logger.exception(f"[scheduler] Update-labels: failed with error: {e}")
            return None


class Scheduler:
    """Manages the APScheduler instance and job registration."""

    def __init__(self) -> None:
        self._scheduler: AsyncIOScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        """Start the scheduler and register jobs."""
        if not settings.scheduler_enabled:
            logger.info("[scheduler] Disabled via SCHEDULER_ENABLED=false")
            return

        self._scheduler = AsyncIOScheduler(timezone="UTC")

        # Update labels: weekly on the configured day and hour (UTC)
        self._scheduler.add_job(
            run_update_labels,
            trigger=CronTrigger(
                day_of_week=settings.labeler_day,
                hour=settings.labeler_hour,
                minute=0,
                timezone="UTC",
            ),
            id=UPDATE_LABELS_JOB_ID,
            name="Weekly Update Labels",
            replace_existing=True,
            max_instances=1,
        )

        self._scheduler.start()
        logger.info(
            f"[scheduler] Started with update-labels every "
            f"{settings.labeler_day} at {settings.labeler_hour:02d}:00 UTC"
        )

    def stop(self) -> None:
        """Gracefully shut down the scheduler."""
        if self._scheduler:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("[scheduler] Stopped")

    async def trigger_now(self, job_id: str) -> dict[str, Any] | None:
        """
        Manually trigger a job immediately (for testing/debugging).

        Returns the job result or None if job not found.
        """
        if job_id == UPDATE_LABELS_JOB_ID:
            return await run_update_labels()
        return None


scheduler = Scheduler()
