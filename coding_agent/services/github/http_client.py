"""
HTTP client for GitHub API operations.

One AsyncClient per application, built from the loaded configuration and
owned by the app (created in ``create_app``, closed in its lifespan). The
base URL and identity headers live on the client, so operations only pass
repository-relative paths.
"""

import logging

import httpx

from coding_agent.config.settings import Settings
from coding_agent.services.github.constants import CONNECT_TIMEOUT, REQUEST_TIMEOUT
from coding_agent.services.github.helpers import build_headers

logger = logging.getLogger(__name__)


def create_github_client(settings: Settings) -> httpx.AsyncClient:
    """
    Build the pooled client used for every GitHub call.

    Args:
        settings: Loaded configuration (API URL, token, User-Agent)

    Returns:
        httpx.AsyncClient bound to the configured GitHub API
    """
    client = httpx.AsyncClient(
        base_url=settings.github_api_url,
        headers=build_headers(settings.agent_github_token, settings.user_agent),
        timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT),
        limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        http2=True,
    )
    logger.debug(f"Created GitHub HTTP client for {settings.github_api_url}")
    return client
