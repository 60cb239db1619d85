"""API tests for the health check and the cron-triggered labeler endpoint."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from update_labeler.config.settings import settings
from update_labeler.main import app
from update_labeler.services.labeler.orchestrator import LabelRunReport
from update_labeler.services.scheduler import run_lock

ENDPOINT = "/api/v1/internal/update-labels"
RUNNER = "update_labeler.services.labeler.run_update_labeler"


@pytest.fixture
async def api_client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def cron_secret(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setattr(settings, "cron_secret", "s3cret")
    return "s3cret"


class TestHealth:
    @pytest.mark.anyio
    async def test_health(self, api_client: AsyncClient):
        response = await api_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestTriggerUpdateLabels:
    """Tests for POST /internal/update-labels."""

    @pytest.mark.anyio
    async def test_missing_header_is_rejected(self, api_client: AsyncClient, cron_secret: str):
        response = await api_client.post(ENDPOINT)

        assert response.status_code == 422

    @pytest.mark.anyio
    async def test_unconfigured_secret_returns_503(self, api_client: AsyncClient):
        response = await api_client.post(ENDPOINT, headers={"X-Cron-Secret": "anything"})

        assert response.status_code == 503
        assert response.json()["detail"] == "Cron secret not configured"

    @pytest.mark.anyio
    async def test_wrong_secret_returns_403(self, api_client: AsyncClient, cron_secret: str):
        response = await api_client.post(ENDPOINT, headers={"X-Cron-Secret": "wrong"})

        assert response.status_code == 403

    @pytest.mark.anyio
    @patch(RUNNER, new_callable=AsyncMock)
    async def test_runs_labeler(
        self, mock_run: AsyncMock, api_client: AsyncClient, cron_secret: str
    ):
        mock_run.return_value = LabelRunReport(
            issues_checked=2, issues_labeled=2, results={"updated": 2}
        )

        response = await api_client.post(
            ENDPOINT,
            headers={"X-Cron-Secret": cron_secret},
            params={"column_id": 123, "dry_run": "true"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["issues_checked"] == 2
        assert body["results"] == {"updated": 2}
        mock_run.assert_awaited_once_with(column_id=123, dry_run=True)

    @pytest.mark.anyio
    @patch(RUNNER, new_callable=AsyncMock)
    async def test_misconfiguration_returns_503(
        self, mock_run: AsyncMock, api_client: AsyncClient, cron_secret: str
    ):
        mock_run.side_effect = ValueError("No project column configured (PROJECT_COLUMN_ID)")

        response = await api_client.post(ENDPOINT, headers={"X-Cron-Secret": cron_secret})

        assert response.status_code == 503
        assert "PROJECT_COLUMN_ID" in response.json()["detail"]

    @pytest.mark.anyio
    @patch(RUNNER, new_callable=AsyncMock)
    async def test_returns_409_while_another_run_holds_lock(
        self, mock_run: AsyncMock, api_client: AsyncClient, cron_secret: str
    ):
        async with run_lock() as acquired:
            assert acquired is True
            response = await api_client.post(ENDPOINT, headers={"X-Cron-Secret": cron_secret})

        assert response.status_code == 409
        assert "already in progress" in response.json()["detail"]
        mock_run.assert_not_awaited()

    @pytest.mark.anyio
    @patch(RUNNER, new_callable=AsyncMock)
    async def test_lock_released_after_request(
        self, mock_run: AsyncMock, api_client: AsyncClient, cron_secret: str
    ):
        mock_run.return_value = LabelRunReport()

        await api_client.post(ENDPOINT, headers={"X-Cron-Secret": cron_secret})

        async with run_lock() as acquired:
            assert acquired is True
