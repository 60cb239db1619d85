"""Root conftest — shared fixtures for all tests.

Provides:
- anyio backend selection for @pytest.mark.anyio tests
- Settings isolation (tests never pick up a real token or repository)
"""

from __future__ import annotations

import pytest

from update_labeler.config.settings import settings


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch):
    """Pin settings to known test values for every test."""
    monkeypatch.setattr(settings, "github_token", "ghp_test_token_12345")
    monkeypatch.setattr(settings, "github_repository", "hackers/website")
    monkeypatch.setattr(settings, "project_column_id", 7198257)
    monkeypatch.setattr(settings, "dry_run", False)
    monkeypatch.setattr(settings, "cron_secret", "")
    monkeypatch.setattr(settings, "scheduler_enabled", False)
    monkeypatch.setattr(settings, "comment_template_path", "")
    yield
