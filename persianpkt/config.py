"""User configuration stored as TOML."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import tomli_w

from persianpkt.paths import ConfigPaths

DEFAULT_MIRRORS = (
    "https://mirror.iran-server.com/debian/",
    "https://debian.iranserver.com/debian/",
    "https://mirror.arvancloud.com/debian/",
)

_PATH_FIELDS = frozenset(
    {"repositories_file", "cache_dir", "packages_dir", "keys_dir", "mirrors_file"}
)
_BOOL_FIELDS = frozenset({"verbose", "auto_clean", "default_yes"})


@dataclass
class Config:
    """Settings for the package manager."""

    repositories_file: Path
    cache_dir: Path
    packages_dir: Path
    keys_dir: Path
    default_mirrors: list[str] = field(default_factory=lambda: list(DEFAULT_MIRRORS))
    architecture: str = "amd64"
    mirrors_file: Path = Path("mirrors.json")
    verbose: bool = False
    auto_clean: bool = True
    max_cache_size: int = 1024 * 1024 * 1024
    default_yes: bool = False

    @classmethod
    def default(cls, paths: ConfigPaths | None = None) -> Config:
        """Build the default configuration for the given directory layout."""
        paths = paths if paths is not None else ConfigPaths()
        return cls(
            repositories_file=paths.repositories_file,
            cache_dir=paths.cache_dir,
            packages_dir=paths.packages_dir,
            keys_dir=paths.keys_dir,
            mirrors_file=paths.mirrors_file,
        )

    @classmethod
    def load(cls, config_path: Path | str) -> Config:
        """Read the configuration, writing the default one if the file is missing."""
        config_path = Path(config_path)
        if not config_path.exists():
            config = cls.default()
            config.save(config_path)
            return config
        with config_path.open("rb") as handle:
            data = tomllib.load(handle)
        return cls._from_mapping(data)

    @classmethod
    def _from_mapping(cls, data: dict[str, Any]) -> Config:
        values: dict[str, Any] = {}
        for spec in fields(cls):
            if spec.name not in data:
                raise ValueError(f"missing field `{spec.name}`")
            value = data[spec.name]
            if spec.name in _PATH_FIELDS:
                if not isinstance(value, str):
                    raise ValueError(f"field `{spec.name}` must be a path string")
                value = Path(value)
            elif spec.name in _BOOL_FIELDS:
                if not isinstance(value, bool):
                    raise ValueError(f"field `{spec.name}` must be a boolean")
            elif spec.name == "max_cache_size":
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise ValueError("field `max_cache_size` must be a non-negative integer")
            elif spec.name == "default_mirrors":
                if not isinstance(value, list) or not all(isinstance(m, str) for m in value):
                    raise ValueError("field `default_mirrors` must be a list of strings")
                value = list(value)
            elif not isinstance(value, str):
                raise ValueError(f"field `{spec.name}` must be a string")
            values[spec.name] = value
        return cls(**values)

    def _to_mapping(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for spec in fields(self):
            value = getattr(self, spec.name)
            if isinstance(value, Path):
                value = str(value)
            elif isinstance(value, list):
                value = list(value)
            result[spec.name] = value
        return result

    def save(self, config_path: Path | str) -> None:
        """Write the configuration as TOML, creating parent directories."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(tomli_w.dumps(self._to_mapping()), encoding="utf-8")

    def add_default_mirror(self, mirror: str) -> None:
        if mirror not in self.default_mirrors:
            self.default_mirrors.append(mirror)

    def remove_default_mirror(self, mirror: str) -> None:
        self.default_mirrors = [m for m in self.default_mirrors if m != mirror]