"""Filesystem link store.

Owns every direct interaction with the filesystem: creating, replacing,
removing and enumerating symbolic links, plus the lifecycle of the
directories that hold them. The store keeps no state of its own; the
filesystem is the only record of which links exist.

No locking is performed. Replacing a link is remove-then-create, so two
writers racing on the same link name leave whichever wrote last.
"""

import logging
import os
import shutil
import stat
from pathlib import Path

from linkbridge.core.errors import (
    DirectoryError,
    DirectoryNotEmptyError,
    EnumerationError,
    LinkCreationError,
    NotASymlinkError,
    RemovalError,
    SourceNotFoundError,
)
from linkbridge.links.models import LinkRecord

logger = logging.getLogger(__name__)


class LinkStore:
    """Creates, removes and enumerates symlinks on the local filesystem.

    Example:
        >>> store = LinkStore()
        >>> store.create_link("/media/movies/M.mkv", "/out")
        '/out/M.mkv'
        >>> [r.name for r in store.list_links("/out")]
        ['M.mkv']
    """

    def create_link(self, source_path: str, target_dir: str) -> str:
        """Create a symlink to a source file inside a target directory.

        The link is named after the source's base filename and points at
        the source's resolved real path. An existing entry with that name
        is replaced unless it is already a link resolving to the source,
        so repeated calls with the same arguments are idempotent. A source
        that itself sits at the link path is refused rather than replaced.
        The target directory is created (with parents) when it does not
        exist yet.

        Args:
            source_path: Existing file the link should point at.
            target_dir: Directory the link is created in.

        Returns:
            Path of the created symlink.

        Raises:
            SourceNotFoundError: If source_path is not an existing file.
            LinkCreationError: If the source occupies the link path, or if
                the directory, the replacement or the link itself cannot
                be created.
        """
        source = Path(source_path)
        if not source.is_file():
            raise SourceNotFoundError(f"Source file not found: {source_path}")

        target = Path(target_dir)
        if not target.is_dir():
            logger.info("Creating target directory: %s", target)
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                msg = f"Failed to create target directory {target}: {e}"
                raise LinkCreationError(msg) from e

        link_path = target / source.name
        link_target = os.path.realpath(source_path)

        # Never replace the source itself
        if os.path.realpath(link_path) == link_target:
            if link_path.is_symlink():
                logger.debug("Symlink already points at source: %s", link_path)
                return str(link_path)
            msg = f"Source file already occupies the link path: {link_path}"
            raise LinkCreationError(msg)

        self._discard_existing(link_path)

        logger.info("Creating symlink: %s -> %s", link_path, link_target)
        try:
            try:
                link_path.symlink_to(link_target)
            except FileExistsError:
                # Another writer got in between; last writer wins
                self._discard_existing(link_path)
                link_path.symlink_to(link_target)
        except OSError as e:
            msg = f"Failed to create symlink {link_path}: {e}"
            raise LinkCreationError(msg) from e

        return str(link_path)

    def remove_link(self, link_path: str) -> bool:
        """Remove a symlink.

        Removing a path that does not exist is a no-op, which keeps
        repeated or out-of-order removals safe. Only symlinks are ever
        removed; the files they point at are untouched.

        Args:
            link_path: Path of the symlink to remove.

        Returns:
            True if a link was removed, False if nothing existed.

        Raises:
            NotASymlinkError: If link_path exists but is not a symlink.
            RemovalError: If the link cannot be inspected or removed.
        """
        path = Path(link_path)
        try:
            mode = path.lstat().st_mode
        except FileNotFoundError:
            logger.warning("Symlink does not exist: %s", link_path)
            return False
        except OSError as e:
            raise RemovalError(f"Failed to stat {link_path}: {e}") from e

        if not stat.S_ISLNK(mode):
            raise NotASymlinkError(f"Path is not a symlink: {link_path}")

        logger.info("Removing symlink: %s", link_path)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise RemovalError(f"Failed to remove symlink {link_path}: {e}") from e

        return True

    def list_links(self, directory: str) -> list[LinkRecord]:
        """List the symlinks that are direct children of a directory.

        Regular files and subdirectories are skipped. A link whose target
        cannot be read is skipped with a warning. Results come back in
        directory enumeration order.

        Args:
            directory: Directory to enumerate.

        Returns:
            LinkRecord per symlink; empty if the directory does not exist.

        Raises:
            EnumerationError: If the directory exists but cannot be read.
        """
        records: list[LinkRecord] = []

        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if not entry.is_symlink():
                        continue
                    try:
                        raw_target = os.readlink(entry.path)
                    except OSError as e:
                        logger.warning("Failed to read symlink target for %s: %s", entry.path, e)
                        continue
                    records.append(
                        LinkRecord(
                            path=entry.path,
                            target=_resolve_link_target(directory, raw_target),
                            name=entry.name,
                        )
                    )
        except FileNotFoundError:
            logger.warning("Directory does not exist: %s", directory)
            return []
        except OSError as e:
            raise EnumerationError(f"Failed to list {directory}: {e}") from e

        logger.debug("Found %d symlink(s) in %s", len(records), directory)
        return records

    def ensure_directory(self, path: str) -> bool:
        """Create a directory (and parents) if it does not exist.

        Args:
            path: Directory to create.

        Returns:
            True if the directory was created, False if it already existed.

        Raises:
            DirectoryError: If path exists as a non-directory or cannot be created.
        """
        target = Path(path)
        if target.is_dir():
            return False
        if target.exists():
            raise DirectoryError(f"Path exists and is not a directory: {path}")

        logger.info("Creating directory: %s", path)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryError(f"Failed to create directory {path}: {e}") from e
        return True

    def remove_directory(self, path: str, force: bool = False) -> None:
        """Remove a directory.

        Without force, a directory that has any entries is left untouched.
        With force, the directory and everything in it is removed; symlinks
        inside are removed without touching their targets.

        Args:
            path: Directory to remove. A missing directory is a no-op.
            force: Remove the directory even if it is not empty.

        Raises:
            DirectoryNotEmptyError: If the directory has entries and force is False.
            DirectoryError: If path is not a directory or removal fails.
        """
        target = Path(path)
        if not target.exists() and not target.is_symlink():
            logger.warning("Directory does not exist: %s", path)
            return
        if target.is_symlink() or not target.is_dir():
            raise DirectoryError(f"Path is not a directory: {path}")

        try:
            if not force:
                if any(target.iterdir()):
                    msg = (
                        f"Directory is not empty: {path}. "
                        "Use force=true to remove it with its contents."
                    )
                    raise DirectoryNotEmptyError(msg)
                target.rmdir()
            else:
                shutil.rmtree(target)
        except DirectoryNotEmptyError:
            raise
        except OSError as e:
            raise DirectoryError(f"Failed to remove directory {path}: {e}") from e

        logger.info("Removed directory: %s (force=%s)", path, force)

    def _discard_existing(self, link_path: Path) -> None:
        """Remove a file or link occupying the destination of a new link.

        Args:
            link_path: Destination path of the link about to be created.

        Raises:
            LinkCreationError: If the existing entry cannot be removed.
        """
        if not (link_path.is_symlink() or link_path.exists()):
            return

        logger.info("Removing existing entry: %s", link_path)
        try:
            link_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            msg = f"Failed to remove existing entry {link_path}: {e}"
            raise LinkCreationError(msg) from e


def _resolve_link_target(directory: str, raw_target: str) -> str:
    """Turn a raw readlink() value into an absolute path.

    Args:
        directory: Directory containing the link.
        raw_target: Value stored in the link.

    Returns:
        Absolute, normalized target path.
    """
    if os.path.isabs(raw_target):
        return raw_target
    return os.path.normpath(os.path.join(os.path.abspath(directory), raw_target))
