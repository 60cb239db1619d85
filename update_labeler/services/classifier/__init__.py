"""
Timeline classifier package.

Usage: `from update_labeler.services.classifier import classify, TimelineEvent`
"""

from update_labeler.services.classifier.classifier import classify, is_closing_reference
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

__all__ = [
    "classify",
    "is_closing_reference",
    "find_linked_issue",
    # Types
    "ActivityWindows",
    "ClassificationResult",
    "TimelineEvent",
    "DEFAULT_WINDOWS",
    # Event kinds
    "ASSIGNED",
    "COMMENTED",
    "CROSS_REFERENCED",
]
