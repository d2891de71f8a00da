"""Unit tests for GitHub service — read and write operations.

Tests GitHubService with mocked HTTP responses to verify:
- Request construction (paths, params, payloads)
- Response parsing, including bodies that are not JSON
- Error handling (404 as "missing", conflicts, transport failures)
- Every request stays under the configured repository
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from coding_agent.services.github.exceptions import GitHubAPIError
from coding_agent.services.github.helpers import build_headers
from coding_agent.services.github.service import GitHubService
from coding_agent.services.github.types import FileCommit

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

TOKEN = "ghp_test_token_12345"
CONTENTS_PATH = "/repos/acme/generated/contents/src/a.txt"


def _make_response(
    status_code: int = 200,
    json_data: object = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Build a fake httpx.Response with the given status, JSON body, and headers."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        headers=headers or {},
    )


def _write_json(commit_sha: str = "c0ffee") -> dict:
    """Minimal contents API PUT payload."""
    return {
        "content": {"path": "src/a.txt", "sha": "b10b"},
        "commit": {"sha": commit_sha, "message": "Agent: generate files"},
    }


def _service() -> tuple[GitHubService, AsyncMock]:
    client = AsyncMock(spec=httpx.AsyncClient)
    return GitHubService(client), client


# ═══════════════════════════════════════════════════════════════════════════
# get_file_sha
# ═══════════════════════════════════════════════════════════════════════════


class TestGetFileSha:
    """Tests for looking up the current blob SHA of a file."""

    @pytest.mark.anyio
    async def test_returns_sha_for_existing_file(self):
        svc, client = _service()
        client.get.return_value = _make_response(
            json_data={"type": "file", "path": "src/a.txt", "sha": "abc123"}
        )

        sha = await svc.get_file_sha("acme", "generated", "src/a.txt", "develop")

        assert sha == "abc123"
        call = client.get.call_args
        assert call.args[0] == CONTENTS_PATH
        assert call.kwargs["params"] == {"ref": "develop"}

    @pytest.mark.anyio
    async def test_404_returns_none(self):
        svc, client = _service()
        client.get.return_value = _make_response(404, json_data={"message": "Not Found"})

        assert await svc.get_file_sha("acme", "generated", "src/a.txt") is None

    @pytest.mark.anyio
    async def test_directory_returns_none(self):
        svc, client = _service()
        client.get.return_value = _make_response(
            json_data=[{"type": "file", "path": "src/a.txt", "sha": "abc123"}]
        )

        assert await svc.get_file_sha("acme", "generated", "src") is None

    @pytest.mark.anyio
    async def test_401_raises(self):
        svc, client = _service()
        client.get.return_value = _make_response(401, json_data={"message": "Bad credentials"})

        with pytest.raises(GitHubAPIError, match="Bad credentials") as exc_info:
            await svc.get_file_sha("acme", "generated", "src/a.txt")

        assert exc_info.value.status_code == 401

    @pytest.mark.anyio
    async def test_non_json_body_raises_api_error(self):
        svc, client = _service()
        client.get.return_value = httpx.Response(200, text="<html>proxy</html>")

        with pytest.raises(GitHubAPIError, match="Invalid JSON"):
            await svc.get_file_sha("acme", "generated", "src/a.txt")

    @pytest.mark.anyio
    async def test_transport_error_wrapped(self):
        svc, client = _service()
        client.get.side_effect = httpx.ConnectTimeout("timed out")

        with pytest.raises(GitHubAPIError, match="timed out") as exc_info:
            await svc.get_file_sha("acme", "generated", "src/a.txt")

        assert exc_info.value.status_code is None

    @pytest.mark.anyio
    async def test_dot_segment_path_never_requested(self):
        svc, client = _service()

        with pytest.raises(GitHubAPIError, match="Invalid file path"):
            await svc.get_file_sha("acme", "generated", "../../other-repo/contents/x.txt")

        client.get.assert_not_called()


# ═══════════════════════════════════════════════════════════════════════════
# create_or_update_file
# ═══════════════════════════════════════════════════════════════════════════


class TestCreateOrUpdateFile:
    """Tests for single-file writes through the contents API."""

    @pytest.mark.anyio
    async def test_create_omits_sha(self):
        svc, client = _service()
        client.put.return_value = _make_response(201, json_data=_write_json())

        result = await svc.create_or_update_file(
            "acme", "generated", "src/a.txt", "aGk=", "Add a", branch="main"
        )

        assert result == FileCommit(path="src/a.txt", commit_sha="c0ffee")
        call = client.put.call_args
        assert call.args[0] == CONTENTS_PATH
        assert call.kwargs["json"] == {"message": "Add a", "content": "aGk=", "branch": "main"}

    @pytest.mark.anyio
    async def test_update_sends_sha(self):
        svc, client = _service()
        client.put.return_value = _make_response(200, json_data=_write_json("d00d"))

        result = await svc.create_or_update_file(
            "acme", "generated", "src/a.txt", "aGk=", "Update a", branch="develop", sha="abc123"
        )

        assert result.commit_sha == "d00d"
        assert client.put.call_args.kwargs["json"] == {
            "message": "Update a",
            "content": "aGk=",
            "branch": "develop",
            "sha": "abc123",
        }

    @pytest.mark.anyio
    async def test_conflict_raises_with_github_message(self):
        svc, client = _service()
        client.put.return_value = _make_response(
            409, json_data={"message": "src/a.txt does not match abc123"}
        )

        with pytest.raises(GitHubAPIError) as exc_info:
            await svc.create_or_update_file(
                "acme", "generated", "src/a.txt", "aGk=", "Update a", sha="abc123"
            )

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "src/a.txt does not match abc123"

    @pytest.mark.anyio
    async def test_missing_sha_for_existing_file_is_422(self):
        svc, client = _service()
        client.put.return_value = _make_response(
            422, json_data={"message": 'Invalid request.\n\n"sha" wasn\'t supplied.'}
        )

        with pytest.raises(GitHubAPIError, match="wasn't supplied") as exc_info:
            await svc.create_or_update_file("acme", "generated", "src/a.txt", "aGk=", "Add a")

        assert exc_info.value.status_code == 422

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        "body",
        [
            {"content": {"sha": "b10b"}},
            {"commit": None},
            {"commit": "c0ffee"},
            {"commit": {"sha": 7}},
            ["not", "an", "object"],
        ],
    )
    async def test_response_without_commit_raises(self, body):
        svc, client = _service()
        client.put.return_value = _make_response(200, json_data=body)

        with pytest.raises(GitHubAPIError, match="commit SHA"):
            await svc.create_or_update_file("acme", "generated", "src/a.txt", "aGk=", "Add a")

    @pytest.mark.anyio
    async def test_non_json_body_raises_api_error(self):
        svc, client = _service()
        client.put.return_value = httpx.Response(200, text="not json")

        with pytest.raises(GitHubAPIError, match="Invalid JSON") as exc_info:
            await svc.create_or_update_file("acme", "generated", "src/a.txt", "aGk=", "Add a")

        assert exc_info.value.status_code == 200

    @pytest.mark.anyio
    async def test_transport_error_wrapped(self):
        svc, client = _service()
        client.put.side_effect = httpx.ReadTimeout("read timed out")

        with pytest.raises(GitHubAPIError, match="read timed out"):
            await svc.create_or_update_file("acme", "generated", "src/a.txt", "aGk=", "Add a")


# ═══════════════════════════════════════════════════════════════════════════
# Over a real client
# ═══════════════════════════════════════════════════════════════════════════


class TestOverTransport:
    """Requests as they reach the wire, through httpx URL merging."""

    @pytest.mark.anyio
    async def test_paths_join_configured_base_url(self):
        seen: list[tuple[str, str]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, request.url.raw_path.decode()))
            if request.method == "GET":
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(201, json=_write_json())

        async with httpx.AsyncClient(
            base_url="https://ghe.example.com/api/v3",
            headers=build_headers(TOKEN, "test-agent"),
            transport=httpx.MockTransport(handler),
        ) as client:
            svc = GitHubService(client)
            sha = await svc.get_file_sha("acme", "generated", "src/a.txt", "main")
            await svc.create_or_update_file(
                "acme", "generated", "src/a.txt", "aGk=", "Add a", sha=sha
            )

        assert seen == [
            ("GET", "/api/v3/repos/acme/generated/contents/src/a.txt?ref=main"),
            ("PUT", "/api/v3/repos/acme/generated/contents/src/a.txt"),
        ]

    @pytest.mark.anyio
    async def test_identity_headers_sent(self):
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"sha": "abc"})

        async with httpx.AsyncClient(
            base_url="https://api.github.com",
            headers=build_headers(TOKEN, "test-agent"),
            transport=httpx.MockTransport(handler),
        ) as client:
            await GitHubService(client).get_file_sha("acme", "generated", "src/a.txt")

        assert captured[0].headers["Authorization"] == f"Bearer {TOKEN}"
        assert captured[0].headers["User-Agent"] == "test-agent"
