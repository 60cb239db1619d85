from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from update_labeler.core.exceptions import InvalidInputError

# Timeline event kinds the classifier looks at; anything else is ignored
CROSS_REFERENCED = "cross-referenced"
COMMENTED = "commented"
ASSIGNED = "assigned"


class ClassificationResult(str, Enum):
    """Outcome of classifying one issue's timeline."""

    UPDATED = "updated"
    NEEDS_UPDATE = "needs_update"
    INACTIVE = "inactive"
    RECENTLY_ASSIGNED = "recently_assigned"


@dataclass(frozen=True)
class TimelineEvent:
    """Single activity on an issue, normalized from the GitHub timeline API."""

    kind: str  # "cross-referenced" | "commented" | "assigned" | other
    actor: str  # login of the user who performed the event
    timestamp: datetime  # timezone-aware

    # Cross-referenced events: body of the referencing issue/PR
    linked_issue_text: str | None = None
    # Assigned events: login of the user who was assigned
    assignee: str | None = None


@dataclass(frozen=True)
class ActivityWindows:
    """Recency windows, in days, used to bucket assignee activity."""

    update_days: int = 7
    inactive_days: int = 14

    def __post_init__(self) -> None:
        if self.update_days <= 0 or self.update_days >= self.inactive_days:
            raise InvalidInputError(
                f"Invalid activity windows: update_days={self.update_days}, "
                f"inactive_days={self.inactive_days}",
                field="windows",
            )


DEFAULT_WINDOWS = ActivityWindows()
