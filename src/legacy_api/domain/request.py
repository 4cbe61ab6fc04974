"""Request description models: what the caller asks for and what gets sent."""

import typing as t
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import aiofiles
from multidict import CIMultiDict
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


class HttpMethod(str, Enum):
    """HTTP verbs supported by the legacy API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def sends_query(self) -> bool:
        """GET carries params in the query string; the write verbs in the body."""
        return self is HttpMethod.GET


class FileAttachment(BaseModel):
    """A file to upload as one multipart part.

    Exactly one content source must be given: in-memory ``content`` or a
    ``path`` read at send time. The legacy payload keys ``title``/``name``/
    ``file`` are accepted alongside the snake and camel case names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    field_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("field_name", "fieldName", "title"),
        description="Form field the file is attached under",
    )
    file_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("file_name", "fileName", "name"),
        description="File name sent to the server; defaults to the path's name",
    )
    content: bytes | None = Field(default=None, description="Raw file bytes")
    path: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("path", "file"),
        description="Location of the file to read",
    )

    @model_validator(mode="after")
    def _require_single_source(self) -> "FileAttachment":
        if (self.content is None) == (self.path is None):
            raise ValueError("exactly one of 'content' or 'path' must be provided")
        return self

    @property
    def resolved_file_name(self) -> str:
        if self.file_name:
            return self.file_name
        if self.path is not None:
            return self.path.name
        return self.field_name

    async def read_content(self) -> bytes:
        """Return the raw bytes, reading from disk without blocking the loop."""
        if self.content is not None:
            return self.content
        async with aiofiles.open(t.cast(Path, self.path), "rb") as handle:
            return await handle.read()


class RequestSpec(BaseModel):
    """Declarative description of one legacy API call.

    Optional fields left as None fall back to the client's configured
    defaults, then to the hard-coded constants. Both ``snake_case`` and the
    legacy ``camelCase`` keys are accepted, so an existing payload such as
    ``{"method": "get", "resource": "/users", "shouldRetry": True}``
    validates unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        revalidate_instances="always",
    )

    # ========== Required ==========
    method: HttpMethod = Field(description="HTTP verb (case-insensitive on input)")
    resource: str = Field(min_length=1, description="Path below /api/<version>")

    # ========== Addressing ==========
    base_url: str | None = Field(default=None, description="API root override")
    api_url: str | None = Field(
        default=None,
        description="Full URL override; skips base URL and version composition",
    )
    api_version: str | None = Field(default=None, min_length=1)

    # ========== Payload ==========
    headers: dict[str, str] = Field(default_factory=dict)
    params: dict[str, t.Any] = Field(default_factory=dict)
    files: list[FileAttachment] = Field(default_factory=list)
    debug: bool = Field(default=False, description="Verbose transport logging")

    # ========== Retry ==========
    should_retry: bool | None = None
    max_retries: int | None = Field(default=None, gt=0)
    retry_delay_milliseconds: int | None = Field(default=None, ge=0)

    @field_validator("method", mode="before")
    @classmethod
    def _normalise_method(cls, value: t.Any) -> t.Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("resource")
    @classmethod
    def _normalise_resource(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("resource must not be blank")
        return value if value.startswith("/") else f"/{value}"


@dataclass(frozen=True)
class FilePart:
    """A file attachment with its bytes already read."""

    field_name: str
    file_name: str
    content: bytes


@dataclass(frozen=True)
class PreparedRequest:
    """Fully resolved outbound request handed to the transport."""

    method: HttpMethod
    url: str
    headers: CIMultiDict[str]
    params: dict[str, t.Any] = field(default_factory=dict)
    files: tuple[FilePart, ...] = ()
    debug: bool = False
