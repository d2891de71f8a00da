"""
GitHub API helper utilities.

Provides request header construction, contents path building, JSON body
parsing, rate limit handling and error response processing for GitHub API calls.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from coding_agent.services.github.constants import ACCEPT_HEADER, API_VERSION
from coding_agent.services.github.exceptions import GitHubAPIError

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def build_headers(token: str, user_agent: str) -> dict[str, str]:
    """Headers sent with every GitHub API call."""
    return {
        "Authorization": f"Bearer {token}",
        "Accept": ACCEPT_HEADER,
        "X-GitHub-Api-Version": API_VERSION,
        "User-Agent": user_agent,
    }


def contents_path(owner: str, repo: str, path: str) -> str:
    """
    Build the contents API path for a repository file, relative to the API base.

    Every segment is percent-encoded on its own. Empty, ``.`` and ``..``
    segments are rejected so the request can never resolve outside
    ``/repos/{owner}/{repo}/contents/``.

    Raises:
        GitHubAPIError: If the path contains a segment that would be normalised away
    """
    segments = path.split("/")
    if any(segment in ("", ".", "..") for segment in segments):
        raise GitHubAPIError(f"Invalid file path: {path!r}")
    encoded_path = "/".join(quote(segment, safe="") for segment in segments)
    return f"/repos/{owner}/{repo}/contents/{encoded_path}"


def parse_json(response: httpx.Response) -> Any:
    """Decode a successful response body, treating non-JSON as an API error."""
    try:
        return response.json()
    except ValueError as e:
        raise GitHubAPIError("Invalid JSON from GitHub", response.status_code) from e


def extract_error_message(response: httpx.Response) -> str | None:
    """Return GitHub's ``message`` field from an error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


def handle_error_response(
    response: httpx.Response,
    repo_name: str,
    ok_statuses: tuple[int, ...] = (200,),
) -> None:
    """
    Handle common error responses from GitHub API.

    GitHub's own error text is preferred over the generic messages below so
    callers can report exactly what the service said.

    Args:
        response: The HTTP response from GitHub API
        repo_name: Repository name for error context (format: "owner/repo")
        ok_statuses: Status codes that count as success

    Raises:
        GitHubAPIError: For authentication, authorization, conflict or other API errors
    """
    status_code = response.status_code
    if status_code in ok_statuses:
        return

    github_message = extract_error_message(response)

    if status_code == 401:
        raise GitHubAPIError(github_message or "Invalid or expired GitHub token", 401)
    elif status_code == 404:
        raise GitHubAPIError(
            github_message or f"Repository or resource not found: {repo_name}", 404
        )
    elif status_code in (403, 429):
        if status_code == 429 or RateLimitInfo(response).is_exhausted:
            raise GitHubAPIError(github_message or "GitHub API rate limit exceeded", status_code)
        raise GitHubAPIError(github_message or "GitHub API forbidden", 403)
    elif status_code == 409:
        raise GitHubAPIError(github_message or f"Conflict writing to {repo_name}", 409)
    elif status_code == 422:
        raise GitHubAPIError(github_message or "GitHub rejected the request", 422)

    logger.debug(f"Unexpected GitHub response for {repo_name}: {status_code}")
    raise GitHubAPIError(github_message or f"GitHub API error: {status_code}", status_code)
