"""Link domain models.

This module defines the data structures exchanged between the link
store, the batch coordinator and the outer surfaces (HTTP API and CLI).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class BatchOperation(str, Enum):
    """Kind of batch being executed.

    Attributes:
        ADD: Create (or replace) links.
        REMOVE: Remove links by path.
        CLEAR: Remove every link in a directory.
    """

    ADD = "add"
    REMOVE = "remove"
    CLEAR = "clear"


@dataclass(frozen=True, slots=True)
class LinkRequest:
    """A desired link mapping submitted as part of an add-batch.

    Attributes:
        source_path: File the link should point at.
        target_directory: Directory the link is created in. None means the
            configured default link directory.
        deletion_date: When the source is scheduled for deletion. Carried
            for callers' bookkeeping only.
    """

    source_path: str
    target_directory: str | None = None
    deletion_date: datetime | None = None

    def __post_init__(self) -> None:
        """Validate request data after initialization."""
        if not self.source_path:
            msg = "Source path cannot be empty"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class LinkRecord:
    """A symlink found on disk.

    Attributes:
        path: Path of the symlink itself.
        target: Absolute path the symlink points at.
        name: Base filename of the symlink.
    """

    path: str
    target: str
    name: str

    def to_dict(self) -> dict[str, str]:
        """Convert to a JSON-serializable dictionary."""
        return {"path": self.path, "target": self.target, "name": self.name}


@dataclass(slots=True)
class BatchResult:
    """Aggregate outcome of one batch call.

    `success` is True whenever the batch ran to completion, including
    when individual items failed. Callers detect partial failure through
    `errors`.

    Attributes:
        operation: Which batch produced this result.
        succeeded_paths: Link paths created or removed by the batch.
        errors: One message per failed item or catalog stage.
        success: Whether the batch executed.
    """

    operation: BatchOperation
    succeeded_paths: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    success: bool = True

    @property
    def has_errors(self) -> bool:
        """Check if any item or stage failed."""
        return bool(self.errors)
