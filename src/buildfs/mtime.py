"""Freshest modification time across a directory tree.

Used as a rebuild signal: cheaper and coarser than hashing contents.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

from .infrastructure.config import FsSettings, default_settings
from .infrastructure.logger import logger
from .types import FileTimestamp, TreeEntry
from .walk import walk_tree


def _log_walk_error(err: OSError) -> None:
    logger.debug("Failed to determine mtime while walking", path=err.filename, error=str(err))


def _entry_mtime(entry: TreeEntry) -> FileTimestamp | None:
    if entry.is_symlink:
        # Use the mtime of both the link and its target so that repointing
        # the link to an older target still counts as a change.
        try:
            link_mtime = FileTimestamp.from_stat(os.lstat(entry.path))
        except OSError as err:
            logger.debug("Failed to read symlink metadata", path=str(entry.path), error=str(err))
            return None
        try:
            target_mtime = FileTimestamp.from_stat(os.stat(entry.path))
        except OSError as err:
            logger.debug("Failed to read symlink target metadata", path=str(entry.path), error=str(err))
            return link_mtime
        return max(link_mtime, target_mtime)

    try:
        return FileTimestamp.from_stat(os.stat(entry.path))
    except OSError as err:
        logger.debug("Failed to read metadata", path=str(entry.path), error=str(err))
        return None


def mtime_recursive(path: str | os.PathLike[str], *, settings: FsSettings | None = None) -> FileTimestamp:
    """Return the most recent mtime found under path, following symlinks.

    A non-directory path returns its own mtime. Entries whose metadata can't be
    read are skipped; if nothing could be read the directory's own mtime is used.

    Without explicit settings, default_settings() loads them from the current
    directory and environment, and an invalid BUILDFS_* value raises
    pydantic.ValidationError.
    """
    settings = settings or default_settings()
    root = Path(path)
    root_stat = os.stat(root)
    root_mtime = FileTimestamp.from_stat(root_stat)
    if not stat.S_ISDIR(root_stat.st_mode):
        return root_mtime

    candidates = (
        _entry_mtime(entry)
        for entry in walk_tree(root, follow_links=True, skip_hidden=settings.skip_hidden, on_error=_log_walk_error)
    )
    return max((m for m in candidates if m is not None), default=root_mtime)
