"""Batch coordinator for link operations.

Drives the link store once per requested item, isolating failures so one
bad item never aborts the rest of the batch, and keeps the catalog service
in sync after add-batches that produced at least one link.
"""

import logging
from dataclasses import dataclass

from linkbridge.catalog.client import CatalogClient
from linkbridge.core.config import DEFAULT_COLLECTION_TYPE, DEFAULT_FOLDER_NAME, BridgeConfig
from linkbridge.core.errors import CatalogError, InvalidRequestError, LinkStoreError
from linkbridge.links.models import BatchOperation, BatchResult, LinkRequest
from linkbridge.links.store import LinkStore

logger = logging.getLogger(__name__)

# Prefixes that tell catalog failures apart from filesystem failures
FOLDER_ERROR_PREFIX = "virtual folder: "
REFRESH_ERROR_PREFIX = "library refresh: "


@dataclass(frozen=True, slots=True)
class CatalogTarget:
    """Virtual folder that add-batches are synchronized into.

    Attributes:
        folder_name: Name of the catalog folder.
        collection_type: Collection type used when the folder is created.
    """

    folder_name: str = DEFAULT_FOLDER_NAME
    collection_type: str = DEFAULT_COLLECTION_TYPE


class BatchCoordinator:
    """Runs batches of link operations against a LinkStore.

    Every batch returns a BatchResult whose `success` is True once the
    batch has executed; per-item and catalog failures are reported in
    `errors` instead of aborting the call. Only an empty request is
    rejected as a whole.

    Attributes:
        _store: Link store that performs the filesystem work.
        _catalog: Catalog client, or None to skip catalog sync.
        _target: Catalog folder that add-batches sync into.
        _default_directory: Directory used for requests without one.
    """

    def __init__(
        self,
        store: LinkStore,
        catalog: CatalogClient | None = None,
        target: CatalogTarget | None = None,
        default_directory: str | None = None,
    ) -> None:
        """Initialize the BatchCoordinator.

        Args:
            store: Link store used for every item.
            catalog: Catalog client used after add-batches. None disables sync.
            target: Catalog folder to sync into. Defaults to CatalogTarget().
            default_directory: Link directory for requests that name none.
        """
        self._store = store
        self._catalog = catalog
        self._target = target or CatalogTarget()
        self._default_directory = default_directory

    @classmethod
    def from_config(
        cls,
        config: BridgeConfig,
        store: LinkStore | None = None,
        catalog: CatalogClient | None = None,
    ) -> "BatchCoordinator":
        """Build a coordinator from configuration.

        A catalog client is created from the [catalog] section when one is
        not passed in and the section is configured.

        Args:
            config: Loaded configuration.
            store: Link store to use. Defaults to a new LinkStore.
            catalog: Catalog client to use instead of building one.

        Returns:
            Configured BatchCoordinator.
        """
        if catalog is None and config.catalog.is_configured:
            catalog = CatalogClient.from_config(config.catalog)
        return cls(
            store or LinkStore(),
            catalog=catalog,
            target=CatalogTarget(
                folder_name=config.links.virtual_folder_name,
                collection_type=config.links.collection_type,
            ),
            default_directory=config.links.base_path,
        )

    @property
    def store(self) -> LinkStore:
        """Return the underlying link store."""
        return self._store

    @property
    def catalog(self) -> CatalogClient | None:
        """Return the catalog client, if catalog sync is enabled."""
        return self._catalog

    @property
    def target(self) -> CatalogTarget:
        """Return the catalog folder add-batches sync into."""
        return self._target

    @property
    def default_directory(self) -> str | None:
        """Return the directory used for requests that name none."""
        return self._default_directory

    def add_links(self, items: list[LinkRequest], sync_catalog: bool = True) -> BatchResult:
        """Create a link for each requested item.

        After the items are processed, if at least one link was created
        and a catalog client is configured, each target directory that
        received a link is ensured in the catalog folder and a single
        library refresh is requested.

        Args:
            items: Desired link mappings.
            sync_catalog: Set to False to skip the catalog stage.

        Returns:
            BatchResult with created link paths and per-item errors.

        Raises:
            InvalidRequestError: If items is empty.
        """
        if not items:
            raise InvalidRequestError("No items provided")

        logger.info("Creating %d symlink(s)", len(items))
        result = BatchResult(operation=BatchOperation.ADD)
        touched_directories: list[str] = []

        for item in items:
            target_dir = item.target_directory or self._default_directory
            if not target_dir:
                result.errors.append(
                    f"{item.source_path}: No target directory given "
                    "and no default link directory configured"
                )
                continue

            try:
                link_path = self._store.create_link(item.source_path, target_dir)
            except (LinkStoreError, ValueError) as e:
                logger.error("Failed to create symlink for %s: %s", item.source_path, e)
                result.errors.append(f"{item.source_path}: {e}")
                continue

            result.succeeded_paths.append(link_path)
            if target_dir not in touched_directories:
                touched_directories.append(target_dir)

        if touched_directories and sync_catalog and self._catalog is not None:
            self._sync_catalog(self._catalog, touched_directories, result)

        return result

    def remove_links(self, paths: list[str]) -> BatchResult:
        """Remove each listed symlink.

        Paths that do not exist are skipped silently: they appear neither
        in the removed list nor in the errors.

        Args:
            paths: Symlink paths to remove.

        Returns:
            BatchResult with removed link paths and per-item errors.

        Raises:
            InvalidRequestError: If paths is empty.
        """
        if not paths:
            raise InvalidRequestError("No symlink paths provided")

        logger.info("Removing %d symlink(s)", len(paths))
        result = BatchResult(operation=BatchOperation.REMOVE)
        for path in paths:
            self._remove_one(path, result)
        return result

    def clear_links(self, directory: str | None = None) -> BatchResult:
        """Remove every symlink directly inside a directory.

        Regular files and subdirectories are left alone. A directory that
        does not exist yields an empty result.

        Args:
            directory: Directory to clear. Defaults to the default link directory.

        Returns:
            BatchResult with removed link paths and per-item errors.

        Raises:
            InvalidRequestError: If no directory is given or configured.
            EnumerationError: If the directory exists but cannot be read.
        """
        directory = directory or self._default_directory
        if not directory:
            raise InvalidRequestError("Directory parameter is required")

        logger.info("Clearing symlinks in: %s", directory)
        result = BatchResult(operation=BatchOperation.CLEAR)
        for record in self._store.list_links(directory):
            self._remove_one(record.path, result)
        return result

    def _remove_one(self, path: str, result: BatchResult) -> None:
        """Remove a single link, recording the outcome on result."""
        if not path:
            result.errors.append("Empty symlink path")
            return

        try:
            removed = self._store.remove_link(path)
        except (LinkStoreError, ValueError) as e:
            logger.error("Failed to remove symlink %s: %s", path, e)
            result.errors.append(f"{path}: {e}")
            return

        if removed:
            result.succeeded_paths.append(path)

    def _sync_catalog(
        self,
        catalog: CatalogClient,
        directories: list[str],
        result: BatchResult,
    ) -> None:
        """Ensure the catalog folder indexes each directory, then refresh.

        The refresh is skipped when no directory could be ensured.
        """
        ensured = 0
        for directory in directories:
            try:
                catalog.ensure_folder(
                    self._target.folder_name,
                    self._target.collection_type,
                    directory,
                )
            except CatalogError as e:
                logger.error("Failed to ensure virtual folder for %s: %s", directory, e)
                result.errors.append(f"{FOLDER_ERROR_PREFIX}{e}")
                continue
            ensured += 1

        if not ensured:
            return

        try:
            catalog.refresh_library()
        except CatalogError as e:
            logger.error("Failed to refresh library: %s", e)
            result.errors.append(f"{REFRESH_ERROR_PREFIX}{e}")
