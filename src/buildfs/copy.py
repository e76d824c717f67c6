"""Recursive directory copy."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from .infrastructure.logger import logger
from .walk import walk_tree


def copy_folder(source_dir: str | os.PathLike[str], dest_dir: str | os.PathLike[str]) -> None:
    """Copy the whole content of source_dir into dest_dir.

    Directories are created as needed; files are copied with their permission
    bits. Symlinks are not followed during the walk, so a link is copied as the
    content it points to. Stops on the first error without undoing what was
    already copied.
    """
    source = Path(source_dir)
    dest = Path(dest_dir)
    files = dirs = 0

    for entry in walk_tree(source):
        out_path = dest / entry.path.relative_to(source)

        if entry.is_dir:
            out_path.mkdir(parents=True, exist_ok=True)
            dirs += 1
            continue

        shutil.copy(entry.path, out_path)
        files += 1

    logger.debug("Copied folder", source=str(source), dest=str(dest), files=files, dirs=dirs)
