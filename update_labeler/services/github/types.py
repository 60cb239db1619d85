"""Data types for GitHub API responses."""

from dataclasses import dataclass, field


@dataclass
class GitHubIssue:
    """Normalized GitHub issue data (only the fields the labeler uses)."""

    number: int
    title: str
    state: str  # "open" or "closed"
    url: str
    assignees: list[str] = field(default_factory=list)  # logins
    labels: list[str] = field(default_factory=list)  # label names
