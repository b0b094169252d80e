"""On-disk cache of downloaded package files."""

from __future__ import annotations

import time
from datetime import timedelta
from pathlib import Path

DEFAULT_MAX_AGE = timedelta(days=7)


class CacheSystem:
    """Stores package archives as ``<name>_<version>.pkg`` in one directory."""

    def __init__(self, cache_dir: Path | str, max_age: timedelta = DEFAULT_MAX_AGE) -> None:
        self.cache_dir = Path(cache_dir)
        self.max_age = max_age

    def init(self) -> None:
        """Create the cache directory if needed."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def package_path(self, package_name: str, version: str) -> Path:
        return self.cache_dir / f"{package_name}_{version}.pkg"

    def package_exists(self, package_name: str, version: str) -> bool:
        return self.package_path(package_name, version).exists()

    def store_package(self, package_name: str, version: str, data: bytes) -> None:
        self.package_path(package_name, version).write_bytes(data)

    def get_package(self, package_name: str, version: str) -> bytes | None:
        """Return the cached bytes, or ``None`` if the package is not cached."""
        path = self.package_path(package_name, version)
        if not path.exists():
            return None
        return path.read_bytes()

    def clean_old_packages(self) -> int:
        """Delete cached files older than ``max_age``; return how many were removed."""
        now = time.time()
        limit = self.max_age.total_seconds()
        removed = 0
        for path in self.cache_dir.iterdir():
            if not path.is_file():
                continue
            if now - path.stat().st_mtime > limit:
                path.unlink()
                removed += 1
        return removed

    def clean_all(self) -> int:
        """Delete every cached file; return how many were removed."""
        removed = 0
        for path in self.cache_dir.iterdir():
            if path.is_file():
                path.unlink()
                removed += 1
        return removed

    def cache_size(self) -> int:
        """Total size in bytes of the files directly in the cache directory."""
        return sum(path.stat().st_size for path in self.cache_dir.iterdir() if path.is_file())