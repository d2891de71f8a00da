"""
GitHub API service for repository file operations.

Facade over the read and write operation classes so callers deal with a
single object bound to one configured HTTP client.
"""

import httpx

from coding_agent.services.github.read_operations import GitHubReadOperations
from coding_agent.services.github.types import FileCommit
from coding_agent.services.github.write_operations import GitHubWriteOperations


class GitHubService:
    """Service for interacting with the GitHub contents API."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self._reader = GitHubReadOperations(client)
        self._writer = GitHubWriteOperations(client)

    async def get_file_sha(self, owner: str, repo: str, path: str, ref: str = "main") -> str | None:
        """Current blob SHA of ``path`` on ``ref``, or None if the file doesn't exist."""
        return await self._reader.get_file_sha(owner, repo, path, ref)

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
        """Write base64 ``content`` to ``path``; ``sha`` turns the create into an update."""
        return await self._writer.create_or_update_file(
            owner, repo, path, content, message, branch=branch, sha=sha
        )
