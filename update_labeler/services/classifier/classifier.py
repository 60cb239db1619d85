"""
Timeline classifier.

Decides whether an issue's assignees have kept it up to date, based on the
issue's timeline of events:

- A cross-reference by an assignee that closes this issue counts as updated,
  however old it is.
- Otherwise the most recent assignee comment and the most recent assignment
  of a current assignee are compared against the update/inactive windows.

The classifier is pure: the current time is passed in, and the input events
are never mutated.
"""

from collections.abc import Collection, Iterable
from datetime import datetime, timedelta

from update_labeler.core.exceptions import InvalidInputError
from update_labeler.services.classifier.linked_issue import find_linked_issue
from update_labeler.services.classifier.types import (
    ASSIGNED,
    COMMENTED,
    CROSS_REFERENCED,
    DEFAULT_WINDOWS,
    ActivityWindows,
    ClassificationResult,
    TimelineEvent,
)


def _require_aware(value: datetime, field: str) -> None:
    if not isinstance(value, datetime) or value.tzinfo is None:
        raise InvalidInputError(f"{field} must be a timezone-aware datetime", field=field)


def is_closing_reference(
    event: TimelineEvent,
    subject_issue_id: int,
    assignees: Collection[str],
) -> bool:
    """Check if an event is an assignee's cross-reference that closes the issue."""
    return (
        event.kind == CROSS_REFERENCED
        and event.actor in assignees
        and find_linked_issue(event.linked_issue_text) == subject_issue_id
    )


def _latest(
    events: list[TimelineEvent],
    kind: str,
    assignees: Collection[str],
) -> datetime | None:
    """Timestamp of the most recent qualifying event of a kind, or None."""
    for event in events:
        if event.kind != kind:
            continue
        # Comments count for their author; assignments count for who was assigned
        login = event.assignee if kind == ASSIGNED else event.actor
        if login in assignees:
            return event.timestamp
    return None


def classify(
    events: Iterable[TimelineEvent],
    subject_issue_id: int,
    assignees: Collection[str],
    now: datetime,
    windows: ActivityWindows = DEFAULT_WINDOWS,
) -> ClassificationResult:
    """
    Classify an issue by the recency of its assignees' activity.

    Args:
        events: Timeline events of the issue, in any order
        subject_issue_id: Number of the issue being classified
        assignees: Logins currently assigned to the issue (must be non-empty)
        now: Reference time the windows are measured back from
        windows: Update/inactive windows in days

    Returns:
        UPDATED if an assignee closed the issue via a cross-reference or
        commented within the update window; RECENTLY_ASSIGNED if an assignee
        was assigned within the update window without commenting since;
        NEEDS_UPDATE if the last comment or assignment falls within the
        inactive window; INACTIVE otherwise.

    Raises:
        InvalidInputError: If assignees is empty or a timestamp is not timezone-aware
    """
    if not assignees:
        raise InvalidInputError("Cannot classify an issue without assignees", field="assignees")
    _require_aware(now, "now")

    timeline = list(events)
    for event in timeline:
        _require_aware(event.timestamp, "timestamp")

    if any(is_closing_reference(e, subject_issue_id, assignees) for e in timeline):
        return ClassificationResult.UPDATED

    # Newest first; sorted() is stable so equal timestamps keep input order
    newest_first = sorted(timeline, key=lambda e: e.timestamp, reverse=True)
    last_comment = _latest(newest_first, COMMENTED, assignees)
    last_assigned = _latest(newest_first, ASSIGNED, assignees)

    update_cutoff = now - timedelta(days=windows.update_days)
    inactive_cutoff = now - timedelta(days=windows.inactive_days)

    if last_comment is not None and last_comment >= update_cutoff:
        return ClassificationResult.UPDATED
    if last_assigned is not None and last_assigned >= update_cutoff:
        return ClassificationResult.RECENTLY_ASSIGNED
    if (last_comment is not None and last_comment >= inactive_cutoff) or (
        last_assigned is not None and last_assigned >= inactive_cutoff
    ):
        return ClassificationResult.NEEDS_UPDATE
    return ClassificationResult.INACTIVE
