"""
GitHub API read operations.

Provides all read-only operations the labeler needs:
- Issue numbers from a (classic) project board column
- Issue details and assignees
- Issue timeline events, normalized for the classifier
"""

import logging
from collections.abc import AsyncIterator
from datetime import datetime
from typing import Any

from update_labeler.core.exceptions import InvalidInputError
from update_labeler.services.classifier.types import (
    ASSIGNED,
    COMMENTED,
    CROSS_REFERENCED,
    TimelineEvent,
)
from update_labeler.services.github.constants import (
    API_VERSION,
    BASE_URL,
    MAX_COLUMN_PAGES,
    PER_PAGE,
)
from update_labeler.services.github.helpers import has_next_page, request_with_retry
from update_labeler.services.github.http_client import get_github_client
from update_labeler.services.github.types import GitHubIssue

logger = logging.getLogger(__name__)

# Event kinds whose fields the classifier relies on
CLASSIFIED_KINDS = {CROSS_REFERENCED, COMMENTED, ASSIGNED}


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a GitHub ISO 8601 timestamp into an aware datetime.

    Raises:
        InvalidInputError: If the value is missing or not a valid timestamp
    """
    if not isinstance(value, str) or not value:
        raise InvalidInputError(f"Missing timestamp: {value!r}", field="timestamp")
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise InvalidInputError(f"Malformed timestamp: {value!r}", field="timestamp") from e
    if parsed.tzinfo is None:
        raise InvalidInputError(f"Timestamp without timezone: {value!r}", field="timestamp")
    return parsed


def _login(data: dict[str, Any] | None) -> str | None:
    if not data:
        return None
    login = data.get("login")
    return login if isinstance(login, str) and login else None


def normalize_timeline_event(data: dict[str, Any]) -> TimelineEvent | None:
    """
    Convert a GitHub timeline API item to a TimelineEvent.

    The timestamp is the item's updated_at, falling back to created_at
    (comments carry both; most other events only have created_at).

    Returns:
        The normalized event, or None for an unclassified event kind that
        lacks a timestamp or actor

    Raises:
        InvalidInputError: If a commented/assigned/cross-referenced item is
            missing its timestamp or the logins the classifier needs
    """
    kind = data.get("event") or ""
    raw_timestamp = data.get("updated_at") or data.get("created_at")
    actor = _login(data.get("actor")) or _login(data.get("user"))

    if kind not in CLASSIFIED_KINDS:
        if not raw_timestamp or not actor:
            return None
        try:
            timestamp = parse_timestamp(raw_timestamp)
        except InvalidInputError:
            logger.debug(f"Dropping {kind or 'unknown'} event with bad timestamp {raw_timestamp!r}")
            return None
        return TimelineEvent(kind=kind, actor=actor, timestamp=timestamp)

    timestamp = parse_timestamp(raw_timestamp)
    if actor is None:
        raise InvalidInputError(f"{kind} event without actor login", field="actor")

    if kind == CROSS_REFERENCED:
        source_issue = (data.get("source") or {}).get("issue") or {}
        return TimelineEvent(
            kind=kind,
            actor=actor,
            timestamp=timestamp,
            linked_issue_text=source_issue.get("body") or "",
        )

    if kind == ASSIGNED:
        assignee = _login(data.get("assignee"))
        if assignee is None:
            raise InvalidInputError("assigned event without assignee login", field="assignee")
        return TimelineEvent(kind=kind, actor=actor, timestamp=timestamp, assignee=assignee)

    return TimelineEvent(kind=kind, actor=actor, timestamp=timestamp)


def issue_number_from_card(card: dict[str, Any]) -> int | None:
    """Extract the issue number from a project card's content_url (None for note cards)."""
    content_url = card.get("content_url")
    if not content_url:
        return None
    tail = content_url.rstrip("/").rsplit("/", 1)[-1]
    return int(tail) if tail.isdigit() else None


class GitHubReadOperations:
    """
    Read-only operations for GitHub API.

    Uses a shared HTTP client singleton for connection pooling.
    """

    BASE_URL = BASE_URL
    API_VERSION = API_VERSION

    def __init__(self, token: str):
        self.token = token
        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

    def _normalize_issue(self, data: dict[str, Any]) -> GitHubIssue:
        """Convert GitHub API response to GitHubIssue dataclass."""
        return GitHubIssue(
            number=data["number"],
            title=data.get("title", ""),
            state=data.get("state", "open"),
            url=data.get("html_url", ""),
            assignees=[a["login"] for a in data.get("assignees") or [] if a.get("login")],
            labels=[label["name"] for label in data.get("labels") or [] if label.get("name")],
        )

    async def list_column_issue_numbers(self, column_id: int) -> AsyncIterator[int]:
        """
        Yield the issue numbers of the cards in a project column.

        Note cards (no content_url) are skipped. Stops at the first empty page.

        Args:
            column_id: ID of the project board column
        """
        client = get_github_client()

        for page in range(1, MAX_COLUMN_PAGES + 1):
            response = await request_with_retry(
                lambda page=page: client.get(
                    f"{self.BASE_URL}/projects/columns/{column_id}/cards",
                    headers=self._headers,
                    params={"per_page": PER_PAGE, "page": page},
                ),
                f"column {column_id} page {page}",
            )

            cards = response.json()
            if not cards:
                return

            for card in cards:
                issue_number = issue_number_from_card(card)
                if issue_number is not None:
                    yield issue_number

    async def get_issue(self, owner: str, repo: str, issue_number: int) -> GitHubIssue:
        """
        Fetch a single issue.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue number

        Returns:
            GitHubIssue with assignee logins and label names
        """
        client = get_github_client()
        response = await request_with_retry(
            lambda: client.get(
                f"{self.BASE_URL}/repos/{owner}/{repo}/issues/{issue_number}",
                headers=self._headers,
            ),
            f"{owner}/{repo}#{issue_number}",
        )
        return self._normalize_issue(response.json())

    async def get_assignees(self, owner: str, repo: str, issue_number: int) -> list[str]:
        """Get the logins currently assigned to an issue."""
        issue = await self.get_issue(owner, repo, issue_number)
        return issue.assignees

    async def get_timeline(
        self,
        owner: str,
        repo: str,
        issue_number: int,
    ) -> list[TimelineEvent]:
        """
        Fetch the full timeline of an issue.

        Pages through GET /repos/{owner}/{repo}/issues/{n}/timeline until an
        empty page or a response without a rel="next" link.

        Returns:
            Normalized events, oldest first (API order)

        Raises:
            InvalidInputError: If a classified event is malformed
            GitHubAPIError: If the API request fails
        """
        client = get_github_client()
        events: list[TimelineEvent] = []
        page = 1

        while True:
            response = await request_with_retry(
                lambda page=page: client.get(
                    f"{self.BASE_URL}/repos/{owner}/{repo}/issues/{issue_number}/timeline",
                    headers=self._headers,
                    params={"per_page": PER_PAGE, "page": page},
                ),
                f"{owner}/{repo}#{issue_number} timeline page {page}",
            )

            items = response.json()
            if not items:
                break

            for item in items:
                event = normalize_timeline_event(item)
                if event is not None:
                    events.append(event)

            if not has_next_page(response):
                break
            page += 1

        logger.debug(f"Fetched {len(events)} timeline events for {owner}/{repo}#{issue_number}")
        return events
