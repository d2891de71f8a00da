"""
Batch file writer.

Writes every file of a batch into the configured repository through the
GitHub contents API: look up the current blob SHA, then create or update
the file. One commit per file. Failures are recorded per file and never
abort the rest of the batch.
"""

import asyncio
import base64
import binascii
import logging
from collections import Counter
from typing import Any

from coding_agent.config.settings import Settings
from coding_agent.schemas.tasks import FileResult, FileSpec
from coding_agent.services.github import GitHubAPIError, GitHubService

logger = logging.getLogger(__name__)


class ContentEncodingError(ValueError):
    """File content could not be decoded with its declared encoding."""


def encode_content(spec: FileSpec) -> str:
    """
    Convert a FileSpec's content to the base64 text GitHub expects.

    ``base64`` content is decoded first so the bytes written are the bytes
    the caller meant; whitespace, URL-safe characters and missing padding
    are tolerated. Any other encoding is treated as UTF-8 text.
    """
    if spec.is_base64:
        raw = "".join(spec.content.split()).replace("-", "+").replace("_", "/")
        raw += "=" * (-len(raw) % 4)
        try:
            data = base64.b64decode(raw, validate=True)
        except binascii.Error as e:
            raise ContentEncodingError("invalid base64 content") from e
    else:
        try:
            data = spec.content.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ContentEncodingError("content is not valid UTF-8 text") from e
    return base64.b64encode(data).decode("ascii")


class BatchFileWriter:
    """Writes batches of files into a single repository."""

    def __init__(
        self,
        github: GitHubService,
        owner: str,
        repo: str,
        strict_sha_lookup: bool = False,
        max_concurrency: int = 1,
    ):
        self.github = github
        self.owner = owner
        self.repo = repo
        self.strict_sha_lookup = strict_sha_lookup
        self.max_concurrency = max(1, max_concurrency)

    @classmethod
    def from_settings(cls, settings: Settings, github: GitHubService) -> "BatchFileWriter":
        return cls(
            github,
            settings.target_repo_owner,
            settings.target_repo_name,
            strict_sha_lookup=settings.strict_sha_lookup,
            max_concurrency=settings.max_parallel_writes if settings.parallel_writes else 1,
        )

    async def write_batch(
        self,
        files: list[Any],
        commit_message: str,
        branch: str,
    ) -> list[FileResult]:
        """
        Write every entry of ``files`` to ``branch``.

        Args:
            files: Raw file entries from the request body
            commit_message: Message used for every commit in the batch
            branch: Target branch

        Returns:
            One FileResult per entry, in input order
        """
        if self.max_concurrency == 1:
            results = []
            for entry in files:
                results.append(await self.write_file(entry, commit_message, branch))
        else:
            results = await self._write_concurrently(files, commit_message, branch)

        counts = Counter(result.status for result in results)
        logger.info(
            f"Batch to {self.owner}/{self.repo}@{branch}: {len(results)} files "
            f"({counts['ok']} ok, {counts['skipped']} skipped, {counts['error']} error)"
        )
        return results

    async def _write_concurrently(
        self,
        files: list[Any],
        commit_message: str,
        branch: str,
    ) -> list[FileResult]:
        slots: list[FileResult | None] = [None] * len(files)
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def write_slot(index: int, entry: Any) -> None:
            async with semaphore:
                slots[index] = await self.write_file(entry, commit_message, branch)

        await asyncio.gather(*(write_slot(i, entry) for i, entry in enumerate(files)))
        return [result for result in slots if result is not None]

    async def write_file(self, entry: Any, commit_message: str, branch: str) -> FileResult:
        """Validate, encode and write a single file entry."""
        spec = FileSpec.parse_entry(entry)
        if spec is None:
            return FileResult.skipped(_entry_path(entry))

        try:
            sha = await self._lookup_sha(spec.path, branch)
        except GitHubAPIError as e:
            return FileResult.error(spec.path, e.message)

        try:
            content = encode_content(spec)
        except ContentEncodingError as e:
            return FileResult.error(spec.path, str(e))

        try:
            commit = await self.github.create_or_update_file(
                self.owner,
                self.repo,
                spec.path,
                content,
                commit_message,
                branch=branch,
                sha=sha,
            )
        except GitHubAPIError as e:
            logger.warning(f"Write failed for {spec.path} on {branch}: {e.message}")
            return FileResult.error(spec.path, e.message)

        action = "Updated" if sha else "Created"
        logger.debug(f"{action} {spec.path} on {branch} in commit {commit.commit_sha}")
        return FileResult.ok(spec.path, commit.commit_sha)

    async def _lookup_sha(self, path: str, branch: str) -> str | None:
        """
        Current blob SHA for ``path``, or None to create the file.

        A missing file is the expected case. Other lookup failures fall back
        to a create unless ``strict_sha_lookup`` is set, in which case they
        propagate and the file is reported as an error.
        """
        try:
            return await self.github.get_file_sha(self.owner, self.repo, path, branch)
        except GitHubAPIError as e:
            if self.strict_sha_lookup:
                raise
            logger.warning(f"SHA lookup failed for {path} on {branch}, writing without it: {e.message}")
            return None


def _entry_path(entry: Any) -> str | None:
    if isinstance(entry, dict):
        path = entry.get("path")
        if isinstance(path, str) and path:
            return path
    return None
