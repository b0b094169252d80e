"""Package metadata as published in a repository index."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PackageInfo:
    """Metadata describing one available package."""

    name: str
    version: str
    architecture: str
    description: str
    dependencies: list[str] = field(default_factory=list)
    size: int = 0
    installed_size: int = 0
    maintainer: str = ""
    homepage: str | None = None
    section: str = ""
    priority: str = ""
    filename: str = ""
    md5sum: str = ""
    sha256: str = ""

    def add_dependency(self, dependency: str) -> None:
        """Record a dependency unless it is already listed."""
        if dependency not in self.dependencies:
            self.dependencies.append(dependency)

    @property
    def full_name(self) -> str:
        """``name_version``, as used for package file names."""
        return f"{self.name}_{self.version}"