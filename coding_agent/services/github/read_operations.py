"""
GitHub API read operations.

Looks up the current blob SHA of a file so a following write can be sent
as a conditional update rather than a create.
"""

import logging

import httpx

from coding_agent.services.github.exceptions import GitHubAPIError
from coding_agent.services.github.helpers import (
    contents_path,
    handle_error_response,
    parse_json,
)

logger = logging.getLogger(__name__)


class GitHubReadOperations:
    """Read-only operations for GitHub API."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def get_file_sha(
        self,
        owner: str,
        repo: str,
        path: str,
        ref: str = "main",
    ) -> str | None:
        """
        Get the SHA of a specific file in the repository.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path
            ref: Branch name to read from

        Returns:
            File SHA, or None if the file doesn't exist (or the path is a directory)

        Raises:
            GitHubAPIError: On any failure other than "not found"
        """
        url = contents_path(owner, repo, path)
        try:
            response = await self.client.get(url, params={"ref": ref})
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"Request to GitHub failed: {e}") from e

        if response.status_code == 404:
            return None

        handle_error_response(response, f"{owner}/{repo}")

        data = parse_json(response)
        if not isinstance(data, dict):
            # Directory listings come back as a JSON array
            logger.debug(f"{path} on {ref} is not a file, treating as missing")
            return None

        sha = data.get("sha")
        return sha if isinstance(sha, str) else None
