"""Locations of configuration, cache and data directories."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import platformdirs

APP_NAME = "persianpkt"


def _default_base_dir() -> Path:
    return platformdirs.user_config_path(APP_NAME, appauthor=False)


def _default_cache_root() -> Path:
    return platformdirs.user_cache_path(APP_NAME, appauthor=False)


def _default_data_root() -> Path:
    return platformdirs.user_data_path(APP_NAME, appauthor=False)


@dataclass
class ConfigPaths:
    """Directories and files the package manager uses."""

    base_dir: Path = field(default_factory=_default_base_dir)
    cache_root: Path = field(default_factory=_default_cache_root)
    data_root: Path = field(default_factory=_default_data_root)

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir)
        self.cache_root = Path(self.cache_root)
        self.data_root = Path(self.data_root)

    @property
    def config_file(self) -> Path:
        return self.base_dir / "config.toml"

    @property
    def repositories_file(self) -> Path:
        return self.base_dir / "repositories.json"

    @property
    def mirrors_file(self) -> Path:
        return self.base_dir / "mirrors.json"

    @property
    def cache_dir(self) -> Path:
        return self.cache_root

    @property
    def packages_dir(self) -> Path:
        return self.data_root / "packages"

    @property
    def keys_dir(self) -> Path:
        return self.base_dir / "keys"

    @property
    def logs_dir(self) -> Path:
        return self.data_root / "logs"

    @property
    def temp_dir(self) -> Path:
        return self.cache_root / "temp"

    def ensure_dirs_exist(self) -> None:
        """Create every managed directory that does not yet exist."""
        for directory in (
            self.base_dir,
            self.cache_dir,
            self.packages_dir,
            self.keys_dir,
            self.logs_dir,
            self.temp_dir,
        ):
            directory.mkdir(parents=True, exist_ok=True)