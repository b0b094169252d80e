"""Installed package records and their JSON persistence."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from persianpkt.dependency import PackageDependency
from persianpkt.package_info import PackageInfo

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _encode_time(moment: datetime) -> dict[str, int]:
    delta = moment - _EPOCH
    return {
        "secs_since_epoch": delta.days * 86400 + delta.seconds,
        "nanos_since_epoch": delta.microseconds * 1000,
    }


def _decode_time(data: dict[str, int]) -> datetime:
    return _EPOCH + timedelta(
        seconds=data["secs_since_epoch"],
        microseconds=data["nanos_since_epoch"] // 1000,
    )


def _append_unique(items: list, item: Any) -> None:
    if item not in items:
        items.append(item)


@dataclass
class Package:
    """A package together with its installation details."""

    name: str
    version: str
    architecture: str
    description: str
    dependencies: list[PackageDependency] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)
    provides: list[str] = field(default_factory=list)
    replaces: list[str] = field(default_factory=list)
    install_path: Path | None = None
    files: list[Path] = field(default_factory=list)
    install_date: datetime = field(default_factory=_now)
    size: int = 0
    installed_size: int = 0
    maintainer: str = ""
    homepage: str | None = None
    section: str = ""
    priority: str = ""

    @classmethod
    def from_info(cls, info: PackageInfo, install_path: Path | str) -> Package:
        """Build a package record from repository metadata."""
        return cls(
            name=info.name,
            version=info.version,
            architecture=info.architecture,
            description=info.description,
            install_path=Path(install_path),
            size=info.size,
            installed_size=info.installed_size,
            maintainer=info.maintainer,
            homepage=info.homepage,
            section=info.section,
            priority=info.priority,
        )

    def is_installed(self) -> bool:
        return self.install_path is not None and self.install_path.exists()

    def add_file(self, file: Path | str) -> None:
        _append_unique(self.files, Path(file))

    def add_dependency(self, dependency: PackageDependency) -> None:
        """Add a dependency unless one with the same name is present."""
        if all(dep.name != dependency.name for dep in self.dependencies):
            self.dependencies.append(dependency)

    def add_conflict(self, conflict: str) -> None:
        _append_unique(self.conflicts, conflict)

    def add_provides(self, provides: str) -> None:
        _append_unique(self.provides, provides)

    def add_replaces(self, replaces: str) -> None:
        _append_unique(self.replaces, replaces)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "architecture": self.architecture,
            "description": self.description,
            "dependencies": [dep.to_dict() for dep in self.dependencies],
            "conflicts": list(self.conflicts),
            "provides": list(self.provides),
            "replaces": list(self.replaces),
            "install_path": "" if self.install_path is None else str(self.install_path),
            "files": [str(path) for path in self.files],
            "install_date": _encode_time(self.install_date),
            "size": self.size,
            "installed_size": self.installed_size,
            "maintainer": self.maintainer,
            "homepage": self.homepage,
            "section": self.section,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Package:
        install_path = data["install_path"]
        return cls(
            name=data["name"],
            version=data["version"],
            architecture=data["architecture"],
            description=data["description"],
            dependencies=[PackageDependency.from_dict(d) for d in data["dependencies"]],
            conflicts=list(data["conflicts"]),
            provides=list(data["provides"]),
            replaces=list(data["replaces"]),
            install_path=Path(install_path) if install_path else None,
            files=[Path(p) for p in data["files"]],
            install_date=_decode_time(data["install_date"]),
            size=int(data["size"]),
            installed_size=int(data["installed_size"]),
            maintainer=data["maintainer"],
            homepage=data.get("homepage"),
            section=data["section"],
            priority=data["priority"],
        )

    def save(self, path: Path | str) -> None:
        """Write the package record to ``path`` as pretty-printed JSON."""
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path | str) -> Package:
        """Read a package record written by :meth:`save`."""
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))