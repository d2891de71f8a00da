"""Exceptions for GitHub service."""


class GitHubAPIError(Exception):
    """Error from GitHub API.

    ``message`` carries GitHub's own error text when the response had one,
    so it can be reported back to callers verbatim. ``status_code`` is None
    for transport failures and invalid paths.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
