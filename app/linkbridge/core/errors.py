"""Exception hierarchy for linkbridge.

All errors raised by the link store, the catalog client, the batch
coordinator and the configuration loader derive from LinkBridgeError.
Whole-call errors (InvalidRequestError, DirectoryNotEmptyError) are
surfaced to HTTP callers as 4xx responses; everything else raised while
processing a batch item is captured into the batch's error list.
"""


class LinkBridgeError(Exception):
    """Base exception for all linkbridge errors."""


class InvalidRequestError(LinkBridgeError):
    """Raised when a request is empty or otherwise malformed."""


# =============================================================================
# Link store errors
# =============================================================================


class LinkStoreError(LinkBridgeError):
    """Base exception for filesystem link store errors."""


class SourceNotFoundError(LinkStoreError):
    """Raised when a link source does not resolve to an existing file."""


class LinkCreationError(LinkStoreError):
    """Raised when the symlink itself cannot be created."""


class RemovalError(LinkStoreError):
    """Raised when an existing link cannot be removed."""


class NotASymlinkError(LinkStoreError):
    """Raised when a removal targets an entry that is not a symlink."""


class DirectoryNotEmptyError(LinkStoreError):
    """Raised when removing a non-empty directory without force."""


class DirectoryError(LinkStoreError):
    """Raised when a directory cannot be created or removed."""


class EnumerationError(LinkStoreError):
    """Raised when an existing directory cannot be enumerated."""


# =============================================================================
# Catalog errors
# =============================================================================


class CatalogError(LinkBridgeError):
    """Base exception for catalog service errors."""


class CatalogUnavailableError(CatalogError):
    """Raised when the catalog service cannot be queried."""


class CatalogOperationError(CatalogError):
    """Raised when the catalog service rejects a mutating request."""


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigError(LinkBridgeError):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file does not exist."""


class ConfigParseError(ConfigError):
    """Raised when the config file is not valid TOML."""
