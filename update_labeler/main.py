import logging
import sys
from contextlib import asynccontextmanager
from typing import TextIO

from fastapi import FastAPI

from update_labeler import __version__
from update_labeler.api.router import api_router
from update_labeler.config import settings


def setup_logging(stream: TextIO | None = None) -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    # Configure root logger
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=stream or sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("apscheduler").setLevel(logging.WARNING)

    # Quieten uvicorn access logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    from update_labeler.services.github import close_github_client
    from update_labeler.services.scheduler import scheduler

    # Startup
    setup_logging()
    logger.info("Update labeler starting up")
    if not settings.github_enabled:
        logger.warning("GITHUB_TOKEN / GITHUB_REPOSITORY not set; runs will fail until configured")
    scheduler.start()
    yield
    # Shutdown
    scheduler.stop()
    await close_github_client()
    logger.info("Update labeler shutting down")


app = FastAPI(
    title="Update Labeler",
    description="Relabels project-board issues by assignee activity",
    version=__version__,
    lifespan=lifespan,
)

# Include API routes
app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
