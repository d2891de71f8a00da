"""Pydantic schemas for the batch file-writing endpoint."""

from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_serializer,
)

FileStatus = Literal["ok", "skipped", "error"]

INVALID_FILE_REASON = "invalid file object"


class FileSpec(BaseModel):
    """A single file to write: repo-relative path plus content."""

    path: str = Field(min_length=1)
    content: str  # May be empty, but must be present
    encoding: str = "utf-8"  # "base64" or anything else (treated as UTF-8 text)

    @field_validator("path")
    @classmethod
    def _path_stays_in_repo(cls, value: str) -> str:
        # Dot and empty segments would be normalised out of the contents URL
        if any(segment in ("", ".", "..") for segment in value.split("/")):
            raise ValueError("path must not contain empty, \".\" or \"..\" segments")
        return value

    @field_validator("encoding", mode="before")
    @classmethod
    def _non_string_encoding_is_text(cls, value: Any) -> Any:
        return value if isinstance(value, str) else "utf-8"

    @property
    def is_base64(self) -> bool:
        return self.encoding == "base64"

    @classmethod
    def parse_entry(cls, entry: Any) -> "FileSpec | None":
        """Validate one raw ``files`` entry; None when it isn't a usable file object."""
        if not isinstance(entry, dict):
            return None
        try:
            return cls.model_validate(entry)
        except ValidationError:
            return None


class BatchRequest(BaseModel):
    """Body of POST /tasks.

    ``files`` entries stay raw here; each one is validated on its own so a
    bad entry becomes a "skipped" result instead of failing the batch.
    """

    model_config = ConfigDict(populate_by_name=True)

    files: list[Any] = Field(min_length=1)
    commit_message: str | None = Field(default=None, alias="commitMessage")
    branch: str | None = None


class FileResult(BaseModel):
    """Outcome for one FileSpec. Only the fields relevant to ``status`` are emitted."""

    model_config = ConfigDict(populate_by_name=True)

    path: str | None
    status: FileStatus
    reason: str | None = None  # skipped
    message: str | None = None  # error
    commit_sha: str | None = Field(default=None, alias="commitSha")  # ok

    @classmethod
    def ok(cls, path: str, commit_sha: str) -> "FileResult":
        return cls(path=path, status="ok", commit_sha=commit_sha)

    @classmethod
    def skipped(cls, path: str | None, reason: str = INVALID_FILE_REASON) -> "FileResult":
        return cls(path=path, status="skipped", reason=reason)

    @classmethod
    def error(cls, path: str, message: str) -> "FileResult":
        return cls(path=path, status="error", message=message)

    @model_serializer(mode="wrap")
    def _drop_unused_fields(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        # path stays even when null so skipped entries line up with the request
        return {key: value for key, value in data.items() if value is not None or key == "path"}


class BatchResponse(BaseModel):
    """Response for POST /tasks: one result per input file, same order."""

    ok: bool = True
    results: list[FileResult]
