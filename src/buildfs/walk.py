"""Lazy directory tree walking."""

from __future__ import annotations

import errno
import os
import stat
from collections.abc import Callable, Iterator
from pathlib import Path

from .types import TreeEntry

ErrorHandler = Callable[[OSError], None]


def _inspect(path: Path, follow_links: bool) -> tuple[TreeEntry, os.stat_result]:
    st = os.lstat(path)
    is_symlink = stat.S_ISLNK(st.st_mode)
    if is_symlink and follow_links:
        st = os.stat(path)
    return TreeEntry(path=path, is_dir=stat.S_ISDIR(st.st_mode), is_symlink=is_symlink), st


def _report(err: OSError, on_error: ErrorHandler | None) -> None:
    if on_error is None:
        raise err
    on_error(err)


def walk_tree(
    root: str | os.PathLike[str],
    *,
    follow_links: bool = False,
    skip_hidden: bool = False,
    on_error: ErrorHandler | None = None,
) -> Iterator[TreeEntry]:
    """Yield the root and every entry below it, parents before children.

    A symlinked root is always resolved. Below the root, symlinks are only
    descended when follow_links is set; they keep is_symlink=True either way.
    Errors raise immediately unless on_error is given, in which case the
    handler receives them and the walk carries on.
    """
    root_path = Path(root)
    try:
        entry, st = _inspect(root_path, True)
    except OSError as err:
        _report(err, on_error)
        return

    yield entry
    if entry.is_dir:
        yield from _walk_dir(root_path, {(st.st_dev, st.st_ino)}, follow_links, skip_hidden, on_error)


def _walk_dir(
    directory: Path,
    ancestors: set[tuple[int, int]],
    follow_links: bool,
    skip_hidden: bool,
    on_error: ErrorHandler | None,
) -> Iterator[TreeEntry]:
    try:
        with os.scandir(directory) as it:
            names = [e.name for e in it]
    except OSError as err:
        _report(err, on_error)
        return

    for name in names:
        if skip_hidden and name.startswith("."):
            continue

        path = directory / name
        try:
            entry, st = _inspect(path, follow_links)
        except OSError as err:
            _report(err, on_error)
            continue

        key = (st.st_dev, st.st_ino)
        if entry.is_dir and key in ancestors:
            _report(OSError(errno.ELOOP, "Filesystem loop detected", str(path)), on_error)
            continue

        yield entry
        if entry.is_dir:
            yield from _walk_dir(path, ancestors | {key}, follow_links, skip_hidden, on_error)
