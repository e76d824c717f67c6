"""Value types produced by the filesystem operations."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel


@dataclass(frozen=True, order=True, slots=True)
class FileTimestamp:
    """Last-modification time at the precision the filesystem exposes."""

    nanos: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> FileTimestamp:
        return cls(st.st_mtime_ns)

    @property
    def seconds(self) -> float:
        return self.nanos / 1_000_000_000

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.seconds, tz=UTC)


@dataclass(frozen=True, slots=True)
class TreeEntry:
    path: Path
    is_dir: bool
    is_symlink: bool


class ArchiveFormat(enum.Enum):
    ZIP = "zip"
    TAR_GZ = "tar.gz"


class ExtractionResult(BaseModel):
    """Outcome of an archive extraction.

    root_dir is the first directory found at the top of the destination, which
    is the archive's root folder when the producer follows the single-folder
    convention. sha256 is only set when hashing was requested.
    """

    root_dir: Path | None = None
    sha256: str | None = None
