"""Pydantic schemas for API request/response models."""

from coding_agent.schemas.tasks import (
    BatchRequest,
    BatchResponse,
    FileResult,
    FileSpec,
    FileStatus,
)

__all__ = [
    "BatchRequest",
    "BatchResponse",
    "FileResult",
    "FileSpec",
    "FileStatus",
]
