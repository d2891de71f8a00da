import json
from typing import Any

from fastapi import Depends, Request

from coding_agent.config.settings import Settings
from coding_agent.core.exceptions import (
    BadRequestError,
    OriginNotAllowedError,
    PayloadTooLargeError,
)
from coding_agent.core.security import is_origin_allowed
from coding_agent.services.batch_writer import BatchFileWriter


def get_app_settings(request: Request) -> Settings:
    """Settings loaded at startup and attached to the application."""
    settings: Settings = request.app.state.settings
    return settings


def get_batch_writer(request: Request) -> BatchFileWriter:
    writer: BatchFileWriter = request.app.state.batch_writer
    return writer


async def require_allowed_origin(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> None:
    if not is_origin_allowed(request, settings.allowed_origin_list):
        raise OriginNotAllowedError()


async def read_json_body(request: Request, max_bytes: int) -> Any:
    """
    Read and decode the request body, enforcing the size limit.

    An empty body decodes to an empty object so the caller reports the
    missing file list rather than a parse error.
    """
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > max_bytes:
        raise PayloadTooLargeError()

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise PayloadTooLargeError()

    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError as e:
        raise BadRequestError("invalid JSON body") from e
