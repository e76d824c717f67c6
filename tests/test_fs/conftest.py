"""Archive builders for the filesystem tests."""

from __future__ import annotations

import io
import tarfile
import zipfile


def make_zip(files: dict[str, bytes], dirs: list[str] | None = None) -> bytes:
    """Build an in-memory zip with the given directory entries and files."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name in dirs or []:
            zf.mkdir(name)
        for name, data in files.items():
            zf.writestr(name, data)
    return buf.getvalue()


def make_tar_gz(files: dict[str, bytes], dirs: list[str] | None = None) -> bytes:
    """Build an in-memory gzip-compressed tarball with the given directories and files."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name in dirs or []:
            info = tarfile.TarInfo(name)
            info.type = tarfile.DIRTYPE
            info.mode = 0o755
            tar.addfile(info)
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o644
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()
