"""Internal API endpoints — protected by shared secret, not user auth.

These endpoints are called by cron jobs / external schedulers (e.g. a GitHub
Actions workflow), not by human users. They validate a shared secret via the
X-Cron-Secret header.
"""

import logging
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Header, HTTPException, status

from update_labeler.config.settings import settings
from update_labeler.core.exceptions import ForbiddenError, ServiceUnavailableError
from update_labeler.services.scheduler import run_lock

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/internal", tags=["internal"])


def _verify_cron_secret(x_cron_secret: str) -> None:
    """Validate the X-Cron-Secret header against the configured secret."""
    if not settings.cron_secret:
        raise ServiceUnavailableError("Cron secret not configured")
    if x_cron_secret != settings.cron_secret:
        raise ForbiddenError()


@router.post("/update-labels")
async def trigger_update_labels(
    x_cron_secret: str = Header(...),
    column_id: int | None = None,
    dry_run: bool | None = None,
) -> dict[str, Any]:
    """
    Run the update labeler over the configured project column.

    Protected by X-Cron-Secret header. Classifies every issue in the column
    and relabels it; `dry_run=true` only logs the changes. Returns 409 while
    another run (scheduled or manual) is in progress.
    """
    _verify_cron_secret(x_cron_secret)

    from update_labeler.services.labeler import run_update_labeler

    async with run_lock() as acquired:
        if not acquired:
            logger.info("[internal] Update-labels: skipped (a run is already in progress)")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="An update-labels run is already in progress",
            )

        try:
            report = await run_update_labeler(column_id=column_id, dry_run=dry_run)
        except ValueError as e:
            raise ServiceUnavailableError(str(e)) from e

    return asdict(report)
