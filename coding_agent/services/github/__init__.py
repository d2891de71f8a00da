"""
GitHub service package.

Usage: `from coding_agent.services.github import GitHubService, GitHubAPIError`

Module structure:
- service.py: Main GitHubService facade
- read_operations.py: File SHA lookup
- write_operations.py: Create-or-update file writes
- helpers.py: Headers, contents paths, JSON parsing and error utilities
- http_client.py: Construction of the configured AsyncClient
- types.py: Data types
- exceptions.py: Custom exceptions
- constants.py: API constants and configuration
"""

from coding_agent.services.github.exceptions import GitHubAPIError
from coding_agent.services.github.helpers import RateLimitInfo, handle_error_response
from coding_agent.services.github.http_client import create_github_client
from coding_agent.services.github.read_operations import GitHubReadOperations
from coding_agent.services.github.service import GitHubService
from coding_agent.services.github.types import FileCommit
from coding_agent.services.github.write_operations import GitHubWriteOperations

__all__ = [
    # Service (main entry point)
    "GitHubService",
    # Operation classes (for direct use if needed)
    "GitHubReadOperations",
    "GitHubWriteOperations",
    # HTTP client construction
    "create_github_client",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "GitHubAPIError",
    # Types
    "FileCommit",
]
