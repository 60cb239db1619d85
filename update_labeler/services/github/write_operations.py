"""
GitHub API write operations.

Provides the issue mutations the labeler performs:
- Adding and removing labels
- Posting comments
"""

import logging
from urllib.parse import quote

from update_labeler.services.github.constants import API_VERSION, BASE_URL
from update_labeler.services.github.exceptions import GitHubAPIError
from update_labeler.services.github.helpers import handle_error_response
from update_labeler.services.github.http_client import get_github_client

logger = logging.getLogger(__name__)


class GitHubWriteOperations:
    """
    Write operations for GitHub API.

    Mutations are not retried: a failed write is reported to the caller,
    which decides whether to carry on with the next issue.
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

    def _issue_url(self, owner: str, repo: str, issue_number: int) -> str:
        return f"{self.BASE_URL}/repos/{owner}/{repo}/issues/{issue_number}"

    async def add_labels(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        labels: list[str],
    ) -> list[str]:
        """
        Add labels to an issue.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue number
            labels: Label names to add (created on the repo if missing)

        Returns:
            Names of all labels on the issue after the update
        """
        client = get_github_client()
        response = await client.post(
            f"{self._issue_url(owner, repo, issue_number)}/labels",
            headers=self._headers,
            json={"labels": labels},
        )
        handle_error_response(response, f"{owner}/{repo}#{issue_number}")

        logger.info(f"Added labels to issue #{issue_number}: {', '.join(labels)}")
        return [label["name"] for label in response.json()]

    async def remove_label(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        name: str,
    ) -> bool:
        """
        Remove a label from an issue.

        Returns:
            True if the label was removed, False if the issue did not have it
        """
        client = get_github_client()
        response = await client.delete(
            f"{self._issue_url(owner, repo, issue_number)}/labels/{quote(name, safe='')}",
            headers=self._headers,
        )

        if response.status_code == 404:
            logger.debug(f'Label "{name}" not present on issue #{issue_number}')
            return False
        handle_error_response(response, f"{owner}/{repo}#{issue_number}")

        logger.info(f'Removed "{name}" from issue #{issue_number}')
        return True

    async def create_comment(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        body: str,
    ) -> str:
        """
        Post a comment on an issue.

        Returns:
            URL of the created comment
        """
        if not body.strip():
            raise GitHubAPIError("Refusing to post an empty comment", 422)

        client = get_github_client()
        response = await client.post(
            f"{self._issue_url(owner, repo, issue_number)}/comments",
            headers=self._headers,
            json={"body": body},
        )
        handle_error_response(response, f"{owner}/{repo}#{issue_number}")

        comment_url: str = response.json().get("html_url", "")
        logger.info(f"Posted comment on issue #{issue_number}")
        return comment_url
