"""
GitHub API helper utilities.

Provides rate limit handling, error response processing and retry of
transient failures for GitHub API calls.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx

from update_labeler.services.github.constants import MAX_RETRIES, RETRY_DELAYS
from update_labeler.services.github.exceptions import GitHubAPIError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def has_next_page(response: httpx.Response) -> bool:
    """Check the Link header for a rel="next" page."""
    return 'rel="next"' in response.headers.get("Link", "")


def handle_error_response(response: httpx.Response, resource: str) -> None:
    """
    Handle common error responses from GitHub API.

    Args:
        response: The HTTP response from GitHub API
        resource: Resource description for error context (e.g. "owner/repo#12")

    Raises:
        GitHubAPIError: For authentication, authorization, or other API errors
    """
    if response.is_success:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 301:
        location = response.headers.get("Location", "")
        logger.warning(f"{resource} was moved (301), Location: {location!r}")
        raise GitHubAPIError(f"Resource {resource} was moved", 301)
    elif response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Resource not found: {resource}", 404)
    elif response.status_code == 403 or response.status_code == 429:
        if rate_info.is_exhausted or response.status_code == 429:
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                response.status_code,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError("GitHub API forbidden", 403)
    else:
        raise GitHubAPIError(
            f"GitHub API error: {response.status_code}", response.status_code
        )


async def request_with_retry(
    send: Callable[[], Awaitable[httpx.Response]],
    resource: str,
) -> httpx.Response:
    """
    Send a request, retrying network errors and 5xx responses with backoff.

    Args:
        send: Zero-argument coroutine factory issuing the request
        resource: Resource description for log and error context

    Returns:
        The first successful response

    Raises:
        GitHubAPIError: On non-retryable errors, or when retries are exhausted
    """
    last_error: Exception | None = None

    for attempt in range(MAX_RETRIES):
        try:
            response = await send()
            handle_error_response(response, resource)
            return response
        except (httpx.TransportError, GitHubAPIError) as e:
            if isinstance(e, GitHubAPIError) and not e.is_transient:
                raise
            last_error = e
            if attempt < MAX_RETRIES - 1:
                delay = RETRY_DELAYS[attempt]
                logger.warning(
                    f"GitHub request for {resource} failed "
                    f"(attempt {attempt + 1}/{MAX_RETRIES}), retrying in {delay}s: {e}"
                )
                await asyncio.sleep(delay)
            else:
                logger.error(f"GitHub request for {resource} failed after {MAX_RETRIES} attempts: {e}")

    if isinstance(last_error, GitHubAPIError):
        raise last_error
    raise GitHubAPIError(f"GitHub request for {resource} failed: {last_error}")
