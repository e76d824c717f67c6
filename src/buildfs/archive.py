"""Extraction of downloaded package archives (zip or tar.gz)."""

from __future__ import annotations

import gzip
import hashlib
import io
import os
import tarfile
import zipfile
import zlib
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from .errors import ArchiveFormatError, CorruptArchiveError
from .infrastructure.config import FsSettings, default_settings
from .infrastructure.logger import logger
from .types import ArchiveFormat, ExtractionResult

ZIP_MAGIC = b"\x50\x4b\x03\x04"
GZIP_MAGIC = b"\x1f\x8b"

# Unix "made by" value in zip central directory entries.
_ZIP_SYSTEM_UNIX = 3

_DECODE_ERRORS = (zipfile.BadZipFile, tarfile.TarError, gzip.BadGzipFile, EOFError, zlib.error)


def sniff_archive_format(buffer: bytes) -> ArchiveFormat | None:
    """Classify an archive by its leading bytes. Inputs shorter than 4 bytes are unrecognized."""
    if len(buffer) < 4:
        return None
    if buffer.startswith(ZIP_MAGIC):
        return ArchiveFormat.ZIP
    if buffer.startswith(GZIP_MAGIC):
        return ArchiveFormat.TAR_GZ
    return None


def _extract_zip(buffer: bytes, dest: Path, settings: FsSettings) -> None:
    modes: list[tuple[str, int]] = []
    with zipfile.ZipFile(io.BytesIO(buffer)) as zf:
        for info in zf.infolist():
            try:
                out_path = zf.extract(info, dest)
            except (RuntimeError, NotImplementedError) as err:
                # zipfile reports encrypted members and unsupported methods/flags this way.
                raise CorruptArchiveError(f"Cannot extract zip member {info.filename}: {err}") from err
            mode = (info.external_attr >> 16) & 0o777
            if settings.restore_zip_permissions and info.create_system == _ZIP_SYSTEM_UNIX and mode:
                modes.append((out_path, mode))

    # Applied after extraction so a read-only directory doesn't block its children.
    for out_path, mode in reversed(modes):
        os.chmod(out_path, mode)


def _extract_tar_gz(buffer: bytes, dest: Path, settings: FsSettings) -> None:
    with tarfile.open(fileobj=io.BytesIO(buffer), mode="r:gz") as tar:
        tar.extractall(dest, filter=settings.tar_filter)


_EXTRACTORS: dict[ArchiveFormat, Callable[[bytes, Path, FsSettings], None]] = {
    ArchiveFormat.ZIP: _extract_zip,
    ArchiveFormat.TAR_GZ: _extract_tar_gz,
}


def _first_subdirectory(dest: Path) -> Path | None:
    with os.scandir(dest) as it:
        for entry in it:
            try:
                if entry.is_dir(follow_symlinks=False):
                    return Path(entry.path)
            except OSError:
                continue
    return None


def untar_archive(
    input_stream: BinaryIO,
    dest_dir: str | os.PathLike[str],
    compute_hash: bool,
    *,
    settings: FsSettings | None = None,
) -> ExtractionResult:
    """Extract a zip or tar.gz archive into dest_dir.

    The stream is read fully into memory. When compute_hash is set, the result
    carries the SHA-256 of the raw archive bytes. The returned root_dir is the
    first directory found directly under dest_dir, since package archives hold
    a single top-level folder. Existing content in dest_dir is left in place.

    Raises ArchiveFormatError for input that is neither zip nor gzip and
    CorruptArchiveError when a recognized archive fails to decode. OSError
    from reading or writing propagates unchanged.

    Without explicit settings, default_settings() loads them from the current
    directory and environment, and an invalid BUILDFS_* value raises
    pydantic.ValidationError.
    """
    settings = settings or default_settings()
    dest = Path(dest_dir)
    dest.mkdir(parents=True, exist_ok=True)

    buffer = input_stream.read()
    sha256 = hashlib.sha256(buffer).hexdigest() if compute_hash else None

    archive_format = sniff_archive_format(buffer)
    if archive_format is None:
        raise ArchiveFormatError("not tar.gz or a .zip archive")

    try:
        _EXTRACTORS[archive_format](buffer, dest, settings)
    except _DECODE_ERRORS as err:
        raise CorruptArchiveError(f"Failed to extract {archive_format.value} archive: {err}") from err

    logger.debug("Extracted archive", format=archive_format.value, size=len(buffer), dest=str(dest))
    return ExtractionResult(root_dir=_first_subdirectory(dest), sha256=sha256)
