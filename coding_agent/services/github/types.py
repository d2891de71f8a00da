"""Data types for GitHub API responses."""

from dataclasses import dataclass


@dataclass
class FileCommit:
    """Result of a create-or-update call on the contents API."""

    path: str
    commit_sha: str
