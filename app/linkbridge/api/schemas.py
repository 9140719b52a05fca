"""Request and response bodies for the HTTP API.

Field names are camelCase on the wire. Request bodies also accept the
snake_case spelling, which older sidecar clients send.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from linkbridge.links.models import BatchResult, LinkRecord, LinkRequest


class ApiModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LinkItem(ApiModel):
    """A single item of an add request."""

    source_path: Annotated[str, Field(min_length=1)]
    target_directory: str | None = None
    deletion_date: datetime | None = None

    def to_request(self) -> LinkRequest:
        """Convert to the domain LinkRequest."""
        return LinkRequest(
            source_path=self.source_path,
            target_directory=self.target_directory or None,
            deletion_date=self.deletion_date,
        )


class AddItemsRequest(ApiModel):
    items: list[LinkItem]


class AddItemsResponse(ApiModel):
    success: bool
    created_symlinks: list[str]
    errors: list[str]

    @classmethod
    def from_result(cls, result: BatchResult) -> "AddItemsResponse":
        return cls(
            success=result.success,
            created_symlinks=result.succeeded_paths,
            errors=result.errors,
        )


class RemoveItemsRequest(ApiModel):
    symlink_paths: list[str]


class ClearItemsRequest(ApiModel):
    directory: str | None = None


class RemoveItemsResponse(ApiModel):
    success: bool
    removed_symlinks: list[str]
    errors: list[str]

    @classmethod
    def from_result(cls, result: BatchResult) -> "RemoveItemsResponse":
        return cls(
            success=result.success,
            removed_symlinks=result.succeeded_paths,
            errors=result.errors,
        )


class SymlinkInfo(ApiModel):
    path: str
    target: str
    name: str

    @classmethod
    def from_record(cls, record: LinkRecord) -> "SymlinkInfo":
        return cls(path=record.path, target=record.target, name=record.name)


class ListSymlinksResponse(ApiModel):
    symlinks: list[SymlinkInfo]
    count: int
    message: str


class CreateDirectoryRequest(ApiModel):
    directory: str


class CreateDirectoryResponse(ApiModel):
    success: bool
    directory: str
    created: bool
    message: str


class RemoveDirectoryRequest(ApiModel):
    directory: str
    force: bool = False


class RemoveDirectoryResponse(ApiModel):
    success: bool
    directory: str
    message: str


class StatusResponse(ApiModel):
    version: str
    catalog_connected: bool | None = None


class HealthResponse(ApiModel):
    status: str = "healthy"


class ErrorResponse(ApiModel):
    error: str
