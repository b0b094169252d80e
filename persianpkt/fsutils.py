"""Filesystem helpers for package directories."""

from __future__ import annotations

import shutil
from collections.abc import Iterator
from pathlib import Path


def _walk(root: Path | str) -> Iterator[Path]:
    """Yield ``root`` and everything below it, without following directory links."""
    root = Path(root)
    if not root.exists() and not root.is_symlink():
        raise FileNotFoundError(f"No such file or directory: {root}")
    yield root
    yield from _descendants(root)


def _descendants(directory: Path) -> Iterator[Path]:
    if directory.is_symlink() or not directory.is_dir():
        return
    for child in sorted(directory.iterdir()):
        yield child
        yield from _descendants(child)


def ensure_dir_exists(path: Path | str) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def remove_dir_contents(path: Path | str) -> None:
    """Delete everything inside ``path``, keeping the directory itself."""
    path = Path(path)
    if not path.exists():
        return
    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def copy_dir_contents(src: Path | str, dst: Path | str) -> None:
    """Copy the tree under ``src`` into ``dst``, creating directories as needed."""
    src, dst = Path(src), Path(dst)
    ensure_dir_exists(dst)
    for path in _walk(src):
        if path == src:
            continue
        target = dst / path.relative_to(src)
        if path.is_dir():
            ensure_dir_exists(target)
        else:
            ensure_dir_exists(target.parent)
            shutil.copy(path, target)


def file_size(path: Path | str) -> int:
    return Path(path).stat().st_size


def dir_size(path: Path | str) -> int:
    """Total size in bytes of all files under ``path``."""
    return sum(file_size(p) for p in _walk(path) if p.is_file())


def find_files_by_extension(directory: Path | str, extension: str) -> list[Path]:
    """Files under ``directory`` whose final extension equals ``extension`` (no dot)."""
    return [
        p for p in _walk(directory)
        if p.is_file() and p.suffix and p.suffix[1:] == extension
    ]


def find_files_by_name(directory: Path | str, name: str) -> list[Path]:
    return [p for p in _walk(directory) if p.is_file() and p.name == name]