"""HTTP client for the catalog service.

Talks to the virtual-folder endpoints of a Jellyfin/Emby-compatible
media server. Every call is a single blocking request bounded by a fixed
timeout; there is no retry policy, so transient failures surface
immediately and are left to the caller to retry.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

import requests
from pydantic import ValidationError

from linkbridge.catalog.models import CatalogFolder, EnsureOutcome
from linkbridge.core.config import CatalogConfig
from linkbridge.core.errors import CatalogError, CatalogOperationError, CatalogUnavailableError

logger = logging.getLogger(__name__)

# Header carrying the API token
TOKEN_HEADER = "X-Emby-Token"

# Options sent when the client creates a new virtual folder
DEFAULT_LIBRARY_OPTIONS: dict[str, bool] = {
    "EnablePhotos": False,
    "EnableRealtimeMonitor": True,
    "EnableChapterImageExtraction": False,
    "EnableInternetProviders": True,
    "SaveLocalMetadata": False,
}


class CatalogClient:
    """Thin client for the catalog service's library management API.

    Attributes:
        _base_url: Service base URL without trailing slash.
        _timeout: Per-request timeout in seconds.
        _settle_seconds: Pause after creating a folder, giving the service
            time to finish initializing it before paths are added.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        settle_seconds: float = 2.0,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the CatalogClient.

        Args:
            base_url: Catalog service base URL (e.g. "http://jellyfin:8096").
            api_key: API token sent with every request.
            timeout: Per-request timeout in seconds.
            settle_seconds: Seconds to wait after creating a folder.
            session: Optional requests session to reuse.
            sleep: Sleep function, replaceable in tests.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._settle_seconds = settle_seconds
        self._sleep = sleep
        self._session = session or requests.Session()
        if api_key:
            self._session.headers[TOKEN_HEADER] = api_key

    @classmethod
    def from_config(cls, config: CatalogConfig) -> "CatalogClient":
        """Build a client from the [catalog] configuration section."""
        return cls(
            config.url,
            config.api_key,
            timeout=config.timeout_seconds,
            settle_seconds=config.settle_seconds,
        )

    @property
    def base_url(self) -> str:
        """Return the catalog service base URL."""
        return self._base_url

    def get_folders(self) -> list[CatalogFolder]:
        """Fetch all virtual folders.

        Returns:
            List of CatalogFolder as reported by the service.

        Raises:
            CatalogUnavailableError: On transport errors, non-2xx responses
                or an unexpected response body.
        """
        response = self._request(
            "GET",
            "/Library/VirtualFolders",
            action="get virtual folders",
            error_cls=CatalogUnavailableError,
        )
        try:
            payload = response.json()
            if not isinstance(payload, list):
                msg = "expected a JSON array"
                raise ValueError(msg)
            return [CatalogFolder.model_validate(item) for item in payload]
        except (ValueError, ValidationError) as e:
            raise CatalogUnavailableError(f"Invalid virtual folder response: {e}") from e

    def create_folder(self, name: str, collection_type: str) -> None:
        """Create a virtual folder.

        Not idempotent on its own; see ensure_folder().

        Args:
            name: Folder name.
            collection_type: Collection type (e.g. "movies", "tvshows", "mixed").

        Raises:
            CatalogOperationError: If the request fails or is rejected.
        """
        logger.info("Creating virtual folder: %s (%s)", name, collection_type)
        self._request(
            "POST",
            "/Library/VirtualFolders",
            params={"name": name, "collectionType": collection_type, "refreshLibrary": "true"},
            json={"LibraryOptions": DEFAULT_LIBRARY_OPTIONS},
            action="create virtual folder",
            error_cls=CatalogOperationError,
        )

    def add_path(self, folder_name: str, path: str) -> None:
        """Add a filesystem path to an existing virtual folder.

        Args:
            folder_name: Name of the folder to extend.
            path: Filesystem path the folder should index.

        Raises:
            CatalogOperationError: If the request fails or is rejected.
        """
        logger.info("Adding path to virtual folder %s: %s", folder_name, path)
        self._request(
            "POST",
            "/Library/VirtualFolders/Paths",
            params={"name": folder_name, "path": path, "refreshLibrary": "true"},
            action="add media path",
            error_cls=CatalogOperationError,
        )

    def refresh_library(self) -> None:
        """Ask the catalog service to re-scan its libraries.

        The scan runs asynchronously on the service. Returning without an
        error means the request was accepted, not that the scan finished.

        Raises:
            CatalogOperationError: If the request fails or is rejected.
        """
        logger.info("Requesting library refresh")
        self._request(
            "POST",
            "/Library/Refresh",
            action="refresh library",
            error_cls=CatalogOperationError,
        )

    def ensure_folder(self, name: str, collection_type: str, path: str) -> EnsureOutcome:
        """Make sure a virtual folder exists and indexes a path.

        Creates the folder if no folder matches name (case-insensitive),
        then adds path if it is not among the folder's locations. The path is
        added under the existing folder's own spelling of its name. Calling
        this repeatedly with the same arguments is a no-op after the first
        successful call.

        Args:
            name: Folder name.
            collection_type: Collection type used if the folder is created.
            path: Filesystem path the folder must index.

        Returns:
            EnsureOutcome describing which steps ran.

        Raises:
            CatalogUnavailableError: If the folder list cannot be fetched.
            CatalogOperationError: If creating the folder or adding the path fails.
        """
        folders = self.get_folders()
        existing = next((folder for folder in folders if folder.matches(name)), None)

        folder_created = False
        if existing is None:
            self.create_folder(name, collection_type)
            folder_created = True
            self._sleep(self._settle_seconds)
        else:
            logger.debug("Virtual folder already exists: %s", existing.name)

        if existing is not None and existing.has_location(path):
            logger.debug("Virtual folder %s already indexes %s", name, path)
            return EnsureOutcome(folder_created=folder_created, path_added=False)

        self.add_path(existing.name if existing is not None else name, path)
        return EnsureOutcome(folder_created=folder_created, path_added=True)

    def ping(self) -> bool:
        """Check if the catalog service is reachable.

        Returns:
            True if the folder list can currently be fetched.
        """
        try:
            self.get_folders()
        except CatalogError as e:
            logger.debug("Catalog ping failed: %s", e)
            return False
        return True

    def _request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        error_cls: type[CatalogError],
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> requests.Response:
        """Send a request and translate failures into catalog errors.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            action: Human-readable description used in error messages.
            error_cls: Exception type raised on failure.
            params: Query parameters.
            json: JSON request body.

        Returns:
            The successful response.

        Raises:
            CatalogError: Instance of error_cls on transport errors or
                non-2xx responses.
        """
        url = f"{self._base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.warning("Catalog request failed (%s %s): %s", method, url, e)
            raise error_cls(f"Failed to {action}: {e}") from e

        if not 200 <= response.status_code < 300:
            detail = response.text.strip()
            msg = f"Failed to {action}: {response.status_code} {response.reason}"
            if detail:
                msg = f"{msg} - {detail}"
            logger.warning("Catalog request rejected (%s %s): %s", method, url, msg)
            raise error_cls(msg)

        return response
