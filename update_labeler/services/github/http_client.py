"""
Shared HTTP client for GitHub API calls.

A labeler run makes its requests strictly one after another (column pages,
then per issue: issue, timeline pages, label and comment writes), so a single
kept-alive HTTP/1.1 connection carries the whole run. The client is created
lazily and closed by the app lifespan or at the end of a CLI run.
"""

import logging

import httpx

from update_labeler import __version__

logger = logging.getLogger(__name__)

# GitHub rejects API requests without a User-Agent
USER_AGENT = f"update-labeler/{__version__}"

_client: httpx.AsyncClient | None = None


def get_github_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client.

    Auth headers are passed per request by GitHubService, so one client can
    serve services built with different tokens.
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            # Timeline pages of long-lived issues can be slow to render
            timeout=httpx.Timeout(30.0, connect=5.0),
            limits=httpx.Limits(max_connections=4, max_keepalive_connections=2),
        )
        logger.debug("Created GitHub HTTP client")
    return _client


async def close_github_client() -> None:
    """Close the shared HTTP client if it is open."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")
