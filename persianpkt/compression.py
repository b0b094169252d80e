"""Compressed data and tar archives in gzip, xz or plain form."""

from __future__ import annotations

import enum
import gzip
import lzma
import tarfile
from pathlib import Path

GZIP_LEVEL = 6
XZ_PRESET = 6


class CompressionFormat(enum.Enum):
    """Compression applied to data or to a tar archive."""

    GZIP = "gz"
    XZ = "xz"
    PLAIN = ""

    @classmethod
    def from_extension(cls, path: Path | str) -> CompressionFormat:
        """Pick the format from the final extension of ``path``."""
        suffix = Path(path).suffix
        if suffix == ".gz":
            return cls.GZIP
        if suffix == ".xz":
            return cls.XZ
        return cls.PLAIN


def _check_members(archive: tarfile.TarFile, target: Path) -> None:
    root = target.resolve()
    for member in archive.getmembers():
        destination = (root / member.name).resolve()
        if destination != root and root not in destination.parents:
            raise ValueError(f"archive entry escapes the target directory: {member.name}")


def extract_archive(archive_path: Path | str, target_dir: Path | str) -> None:
    """Unpack a (possibly compressed) tar archive into ``target_dir``."""
    archive_path = Path(archive_path)
    target = Path(target_dir)
    fmt = CompressionFormat.from_extension(archive_path)
    mode = "r:" + fmt.value
    with tarfile.open(archive_path, mode) as archive:
        _check_members(archive, target)
        target.mkdir(parents=True, exist_ok=True)
        if hasattr(tarfile, "data_filter"):
            archive.extractall(target, filter="data")
        else:
            archive.extractall(target)


def _add_directory(archive: tarfile.TarFile, source_dir: Path, base: Path | None) -> None:
    for path in sorted(source_dir.iterdir()):
        relative = Path(path.name) if base is None else base / path.name
        if path.is_dir():
            archive.add(path, arcname=str(relative), recursive=False)
            _add_directory(archive, path, relative)
        else:
            archive.add(path, arcname=str(relative))


def create_archive(source_dir: Path | str, archive_path: Path | str) -> None:
    """Pack the contents of ``source_dir`` into a tar archive at ``archive_path``.

    The compression is chosen from the archive's extension.
    """
    source_dir = Path(source_dir)
    archive_path = Path(archive_path)
    fmt = CompressionFormat.from_extension(archive_path)
    if fmt is CompressionFormat.GZIP:
        archive = tarfile.open(archive_path, "w:gz", compresslevel=GZIP_LEVEL)
    elif fmt is CompressionFormat.XZ:
        archive = tarfile.open(archive_path, "w:xz", preset=XZ_PRESET)
    else:
        archive = tarfile.open(archive_path, "w")
    with archive:
        _add_directory(archive, source_dir, None)


def compress_data(data: bytes, fmt: CompressionFormat) -> bytes:
    if fmt is CompressionFormat.GZIP:
        return gzip.compress(data, compresslevel=GZIP_LEVEL)
    if fmt is CompressionFormat.XZ:
        return lzma.compress(data, format=lzma.FORMAT_XZ, preset=XZ_PRESET)
    return bytes(data)


def decompress_data(data: bytes, fmt: CompressionFormat) -> bytes:
    if fmt is CompressionFormat.GZIP:
        return gzip.decompress(data)
    if fmt is CompressionFormat.XZ:
        return lzma.decompress(data, format=lzma.FORMAT_XZ)
    return bytes(data)