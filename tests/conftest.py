"""Root conftest — test infrastructure for all agent tests.

Provides:
- Clean environment: agent env vars removed so host config never leaks in
- Settings fixture built explicitly (no .env file)
- Mocked GitHubService (no real GitHub calls, ever)
- API client over ASGITransport with the mocked service wired in
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from coding_agent.config.settings import Settings
from coding_agent.main import create_app
from coding_agent.services.batch_writer import BatchFileWriter
from coding_agent.services.github import FileCommit, GitHubService

AGENT_ENV_VARS = (
    "TARGET_REPO_OWNER",
    "TARGET_REPO_NAME",
    "AGENT_GITHUB_TOKEN",
    "TARGET_BRANCH",
    "ALLOWED_ORIGINS",
    "PORT",
    "HOST",
    "USER_AGENT",
    "GITHUB_API_URL",
    "DEFAULT_COMMIT_MESSAGE",
    "MAX_BODY_BYTES",
    "STRICT_SHA_LOOKUP",
    "PARALLEL_WRITES",
    "MAX_PARALLEL_WRITES",
    "FORWARDED_ALLOW_IPS",
    "LOG_LEVEL",
)

TOKEN = "ghp_test_token_12345"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """SAFETY: never pick up a real token or repository from the host environment."""
    for name in AGENT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "target_repo_owner": "acme",
        "target_repo_name": "generated",
        "agent_github_token": TOKEN,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    return make_settings


# ─────────────────────────────────────────────────────────────────────────────
# GitHub mock
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def mock_github() -> MagicMock:
    """GitHubService double: every file is new and every write succeeds."""
    github = MagicMock(spec=GitHubService)
    github.get_file_sha = AsyncMock(return_value=None)

    async def fake_write(owner, repo, path, content, message, branch="main", sha=None):
        return FileCommit(path=path, commit_sha=f"commit-{path}")

    github.create_or_update_file = AsyncMock(side_effect=fake_write)
    return github


# ─────────────────────────────────────────────────────────────────────────────
# API Client
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def build_app(mock_github: MagicMock) -> Callable[..., FastAPI]:
    """Factory for an app with the mocked GitHub service and optional setting overrides."""

    def _build(**overrides: object) -> FastAPI:
        app_settings = make_settings(**overrides)
        app = create_app(app_settings)
        app.state.batch_writer = BatchFileWriter.from_settings(app_settings, github=mock_github)
        return app

    return _build


@pytest.fixture
async def api_client(build_app: Callable[..., FastAPI]):
    """HTTP client against the default app (empty origin allow-list)."""
    transport = ASGITransport(app=build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
