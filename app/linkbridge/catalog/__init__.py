"""Catalog service client.

This module provides the HTTP client for the media catalog's virtual
folder API and the models it returns.
"""

from linkbridge.catalog.client import CatalogClient
from linkbridge.catalog.models import CatalogFolder, EnsureOutcome

__all__ = ["CatalogClient", "CatalogFolder", "EnsureOutcome"]
