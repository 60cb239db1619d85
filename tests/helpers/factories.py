"""Factories for GitHub API payloads and normalized timeline events."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import httpx

from update_labeler.services.classifier import TimelineEvent

NOW = datetime(2026, 10, 16, 7, 0, tzinfo=UTC)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def iso(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


def make_response(
    status_code: int = 200,
    json_data: object = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a fake httpx.Response."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        headers=headers or {},
    )


# ---------------------------------------------------------------------------
# Normalized events
# ---------------------------------------------------------------------------


def commented(actor: str, at: datetime) -> TimelineEvent:
    return TimelineEvent(kind="commented", actor=actor, timestamp=at)


def assigned(assignee: str, at: datetime, actor: str | None = None) -> TimelineEvent:
    return TimelineEvent(kind="assigned", actor=actor or assignee, timestamp=at, assignee=assignee)


def cross_referenced(actor: str, text: str, at: datetime | None = None) -> TimelineEvent:
    return TimelineEvent(
        kind="cross-referenced",
        actor=actor,
        timestamp=at or days_ago(60),
        linked_issue_text=text,
    )


# ---------------------------------------------------------------------------
# Raw GitHub payloads
# ---------------------------------------------------------------------------


def comment_json(login: str, created: datetime, updated: datetime | None = None) -> dict:
    return {
        "event": "commented",
        "actor": {"login": login},
        "user": {"login": login},
        "created_at": iso(created),
        "updated_at": iso(updated or created),
        "body": "Working on it",
    }


def assigned_json(assignee: str, created: datetime, actor: str | None = None) -> dict:
    return {
        "event": "assigned",
        "actor": {"login": actor or assignee},
        "assignee": {"login": assignee},
        "created_at": iso(created),
    }


def cross_reference_json(login: str, body: str, created: datetime) -> dict:
    return {
        "event": "cross-referenced",
        "actor": {"login": login},
        "created_at": iso(created),
        "updated_at": iso(created),
        "source": {"type": "issue", "issue": {"number": 99, "body": body}},
    }


def issue_json(
    number: int = 42,
    assignees: list[str] | None = None,
    labels: list[str] | None = None,
) -> dict:
    return {
        "number": number,
        "title": f"Issue {number}",
        "state": "open",
        "html_url": f"https://github.com/hackers/website/issues/{number}",
        "assignees": [{"login": login} for login in (assignees or [])],
        "labels": [{"name": name} for name in (labels or [])],
    }


def card_json(issue_number: int | None) -> dict:
    if issue_number is None:
        return {"id": 1, "note": "Just a note"}
    return {
        "id": issue_number * 10,
        "content_url": f"https://api.github.com/repos/hackers/website/issues/{issue_number}",
    }
