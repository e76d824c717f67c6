"""Exceptions raised by buildfs itself.

Filesystem failures are not wrapped: they surface as the builtin OSError family.
"""

from __future__ import annotations


class BuildFsError(Exception):
    """Base class for errors raised by buildfs."""


class ArchiveError(BuildFsError):
    """The archive input could not be extracted."""


class ArchiveFormatError(ArchiveError):
    """The leading bytes match neither a zip nor a gzip archive."""


class CorruptArchiveError(ArchiveError):
    """The archive format was recognized but its content failed to decode."""
