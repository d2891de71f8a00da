"""
GitHub API write operations.

Creates or updates single files through the contents API. Each call
produces exactly one commit on the target branch.
"""

import httpx

from coding_agent.services.github.constants import WRITE_OK_STATUSES
from coding_agent.services.github.exceptions import GitHubAPIError
from coding_agent.services.github.helpers import (
    contents_path,
    handle_error_response,
    parse_json,
)
from coding_agent.services.github.types import FileCommit


class GitHubWriteOperations:
    """
    Write operations for GitHub API.

    This class provides all methods for modifying GitHub repository content.
    """

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def create_or_update_file(
        self,
        owner: str,
        repo: str,
        path: str,
        content: str,
        message: str,
        branch: str = "main",
        sha: str | None = None,
    ) -> FileCommit:
        """
        Create or update a file in the repository.

        Args:
            owner: Repository owner
            repo: Repository name
            path: File path
            content: File content, already base64-encoded
            message: Commit message
            branch: Branch name (default: "main")
            sha: Blob SHA of the file being replaced; omit to create a new file

        Returns:
            FileCommit with the SHA of the commit produced by the write

        Raises:
            GitHubAPIError: If GitHub rejects the write (including SHA conflicts)
                or answers with a body that carries no commit
        """
        payload: dict[str, str] = {
            "message": message,
            "content": content,
            "branch": branch,
        }
        if sha:
            payload["sha"] = sha

        url = contents_path(owner, repo, path)
        try:
            response = await self.client.put(url, json=payload)
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"Request to GitHub failed: {e}") from e

        handle_error_response(response, f"{owner}/{repo}", ok_statuses=WRITE_OK_STATUSES)

        data = parse_json(response)
        commit = data.get("commit") if isinstance(data, dict) else None
        commit_sha = commit.get("sha") if isinstance(commit, dict) else None
        if not isinstance(commit_sha, str) or not commit_sha:
            raise GitHubAPIError(
                "GitHub response did not include a commit SHA", response.status_code
            )

        return FileCommit(path=path, commit_sha=commit_sha)
