"""Batch file-writing endpoint.

Accepts a list of files and writes each one to the configured repository,
reporting a result per file. Per-file failures are returned in-band with a
200; only malformed requests and rejected origins change the status code.
Unexpected errors reach the generic 500 handler in core/exceptions.py.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from coding_agent.api.deps import (
    get_app_settings,
    get_batch_writer,
    read_json_body,
    require_allowed_origin,
)
from coding_agent.config.settings import Settings
from coding_agent.core.exceptions import BadRequestError
from coding_agent.schemas.tasks import BatchRequest, BatchResponse
from coding_agent.services.batch_writer import BatchFileWriter

router = APIRouter(tags=["tasks"])


@router.post(
    "/tasks",
    response_model=BatchResponse,
    dependencies=[Depends(require_allowed_origin)],
)
async def create_files(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    writer: BatchFileWriter = Depends(get_batch_writer),
) -> JSONResponse:
    """
    Create or update a batch of files in the target repository.

    Body: ``{"files": [{"path", "content", "encoding"?}], "commitMessage"?, "branch"?}``.
    Each file is committed separately, in order.
    """
    payload = await read_json_body(request, settings.max_body_bytes)

    files = payload.get("files") if isinstance(payload, dict) else None
    if not isinstance(files, list) or not files:
        raise BadRequestError("files array required")

    try:
        batch = BatchRequest.model_validate(payload)
    except ValidationError as e:
        raise BadRequestError("invalid request body") from e

    results = await writer.write_batch(
        batch.files,
        batch.commit_message or settings.default_commit_message,
        batch.branch or settings.target_branch,
    )
    response = BatchResponse(results=results)
    return JSONResponse(content=response.model_dump(by_alias=True))
