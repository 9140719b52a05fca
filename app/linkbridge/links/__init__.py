"""Symlink store and batch coordination.

This module provides the filesystem link store, the link domain models
and the coordinator that runs batches of link operations.
"""

from linkbridge.links.batch import BatchCoordinator, CatalogTarget
from linkbridge.links.models import BatchOperation, BatchResult, LinkRecord, LinkRequest
from linkbridge.links.store import LinkStore

__all__ = [
    "BatchCoordinator",
    "BatchOperation",
    "BatchResult",
    "CatalogTarget",
    "LinkRecord",
    "LinkRequest",
    "LinkStore",
]
