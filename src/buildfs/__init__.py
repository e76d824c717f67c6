"""Filesystem helpers for fetching and building packages: copy, freshness and archive extraction."""

from __future__ import annotations

from .archive import sniff_archive_format, untar_archive
from .copy import copy_folder
from .errors import ArchiveError, ArchiveFormatError, BuildFsError, CorruptArchiveError
from .infrastructure.config import FsSettings, load_settings
from .mtime import mtime_recursive
from .types import ArchiveFormat, ExtractionResult, FileTimestamp, TreeEntry
from .walk import walk_tree

__all__ = [
    # archive
    "sniff_archive_format",
    "untar_archive",
    # copy
    "copy_folder",
    # errors
    "ArchiveError",
    "ArchiveFormatError",
    "BuildFsError",
    "CorruptArchiveError",
    # config
    "FsSettings",
    "load_settings",
    # mtime
    "mtime_recursive",
    # types
    "ArchiveFormat",
    "ExtractionResult",
    "FileTimestamp",
    "TreeEntry",
    # walk
    "walk_tree",
]
