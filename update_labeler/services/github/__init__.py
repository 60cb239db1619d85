"""
GitHub service package.

Usage: `from update_labeler.services.github import GitHubService`

Module structure:
- service.py: Main GitHubService facade
- read_operations.py: Column, issue and timeline reads
- write_operations.py: Label and comment mutations
- helpers.py: Rate limit handling, error utilities, retry
- types.py: Data types and response models
- exceptions.py: Custom exceptions
- constants.py: API constants and configuration
"""

from update_labeler.services.github.exceptions import GitHubAPIError
from update_labeler.services.github.helpers import (
    RateLimitInfo,
    handle_error_response,
    request_with_retry,
)
from update_labeler.services.github.http_client import close_github_client
from update_labeler.services.github.read_operations import (
    GitHubReadOperations,
    normalize_timeline_event,
)
from update_labeler.services.github.service import GitHubService
from update_labeler.services.github.types import GitHubIssue
from update_labeler.services.github.write_operations import GitHubWriteOperations

__all__ = [
    # Service (main entry point)
    "GitHubService",
    # Operation classes (for direct use if needed)
    "GitHubReadOperations",
    "GitHubWriteOperations",
    # HTTP client lifecycle
    "close_github_client",
    # Utilities
    "handle_error_response",
    "normalize_timeline_event",
    "request_with_retry",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    # Types
    "GitHubIssue",
]
