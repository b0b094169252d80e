import io
import lzma
import tarfile
from pathlib import Path

import pytest

from persianpkt.compression import (
    CompressionFormat,
    compress_data,
    create_archive,
    decompress_data,
    extract_archive,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("pkg.tar.gz", CompressionFormat.GZIP),
        ("pkg.tar.xz", CompressionFormat.XZ),
        ("pkg.tar", CompressionFormat.PLAIN),
        ("pkg", CompressionFormat.PLAIN),
        (".gz", CompressionFormat.PLAIN),
    ],
)
def test_from_extension(name, expected):
    assert CompressionFormat.from_extension(Path(name)) is expected


@pytest.mark.parametrize("fmt", list(CompressionFormat))
def test_data_round_trip(fmt):
    data = b"persianpkt " * 200
    assert decompress_data(compress_data(data, fmt), fmt) == data


def test_gzip_magic():
    assert compress_data(b"abc", CompressionFormat.GZIP)[:2] == b"\x1f\x8b"


def test_xz_magic():
    assert compress_data(b"abc", CompressionFormat.XZ)[:6] == b"\xfd7zXZ\x00"


def test_plain_is_identity():
    assert compress_data(b"abc", CompressionFormat.PLAIN) == b"abc"
    assert decompress_data(b"abc", CompressionFormat.PLAIN) == b"abc"


def test_gzip_garbage_raises():
    with pytest.raises(OSError):
        decompress_data(b"not compressed", CompressionFormat.GZIP)


def test_xz_garbage_raises():
    with pytest.raises(lzma.LZMAError):
        decompress_data(b"not compressed", CompressionFormat.XZ)


def _make_tree(root: Path) -> None:
    (root / "bin").mkdir(parents=True)
    (root / "bin" / "tool").write_bytes(b"#!/bin/sh\necho hi\n")
    (root / "share" / "doc").mkdir(parents=True)
    (root / "share" / "doc" / "README").write_text("docs")
    (root / "top.txt").write_text("top")


@pytest.mark.parametrize("suffix", ["tar", "tar.gz", "tar.xz"])
def test_archive_round_trip(tmp_path, suffix):
    source = tmp_path / "src"
    _make_tree(source)
    archive = tmp_path / f"pkg.{suffix}"
    create_archive(source, archive)
    target = tmp_path / "out"
    extract_archive(archive, target)
    assert (target / "bin" / "tool").read_bytes() == b"#!/bin/sh\necho hi\n"
    assert (target / "share" / "doc" / "README").read_text() == "docs"
    assert (target / "top.txt").read_text() == "top"


def test_archive_entry_names_are_relative(tmp_path):
    source = tmp_path / "src"
    _make_tree(source)
    archive = tmp_path / "pkg.tar"
    create_archive(source, archive)
    with tarfile.open(archive) as tar:
        names = set(tar.getnames())
    assert names == {
        "bin",
        "bin/tool",
        "share",
        "share/doc",
        "share/doc/README",
        "top.txt",
    }


def test_gz_archive_is_gzip_compressed(tmp_path):
    source = tmp_path / "src"
    _make_tree(source)
    archive = tmp_path / "pkg.tar.gz"
    create_archive(source, archive)
    assert archive.read_bytes()[:2] == b"\x1f\x8b"


def test_extract_rejects_escaping_entries(tmp_path):
    archive = tmp_path / "evil.tar"
    with tarfile.open(archive, "w") as tar:
        payload = b"boom"
        info = tarfile.TarInfo("../evil.txt")
        info.size = len(payload)
        tar.addfile(info, io.BytesIO(payload))
    with pytest.raises(ValueError):
        extract_archive(archive, tmp_path / "out")
    assert not (tmp_path / "evil.txt").exists()


def test_extract_missing_archive(tmp_path):
    with pytest.raises(FileNotFoundError):
        extract_archive(tmp_path / "missing.tar.gz", tmp_path / "out")