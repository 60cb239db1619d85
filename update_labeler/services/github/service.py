"""
GitHub API service facade.

Combines the read and write operations behind a single token-bound object,
which is what the labeler orchestrator talks to.
"""

from update_labeler.services.github.read_operations import GitHubReadOperations
from update_labeler.services.github.write_operations import GitHubWriteOperations


class GitHubService(GitHubReadOperations, GitHubWriteOperations):
    """Service for interacting with the GitHub REST API issues endpoints."""

    def __init__(self, token: str):
        GitHubReadOperations.__init__(self, token)
