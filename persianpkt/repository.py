"""Package repositories and the persisted list of configured repositories."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urljoin, urlsplit, urlunsplit

import requests

from persianpkt.package import Package

DEFAULT_PRIORITY = 100
DEFAULT_DISTRIBUTION = "stable"
DEFAULT_COMPONENTS = ("main",)
DEFAULT_ARCHITECTURES = ("amd64", "i386")


class RepositoryError(Exception):
    """Raised for invalid repositories and repository configuration problems."""


def _normalize_url(url: str) -> str:
    try:
        parts = urlsplit(url)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError as exc:
        raise RepositoryError(f"Invalid URL: {exc}") from exc
    if not parts.scheme:
        raise RepositoryError("Invalid URL: relative URL without a base")
    scheme = parts.scheme.lower()
    if scheme not in ("http", "https"):
        raise RepositoryError("Invalid URL scheme. Only http and https are supported")
    if not parts.hostname:
        raise RepositoryError("URL must have a host")
    return urlunsplit((scheme, parts.netloc, parts.path or "/", parts.query, parts.fragment))


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


def _status_text(response: requests.Response) -> str:
    reason = response.reason or ""
    return f"{response.status_code} {reason}".rstrip()


@dataclass
class Repository:
    """A Debian-style package repository."""

    name: str
    url: str
    enabled: bool = True
    priority: int = DEFAULT_PRIORITY
    distribution: str = DEFAULT_DISTRIBUTION
    components: list[str] = field(default_factory=lambda: list(DEFAULT_COMPONENTS))
    architectures: list[str] = field(default_factory=lambda: list(DEFAULT_ARCHITECTURES))

    @classmethod
    def create(cls, name: str, url: str) -> Repository:
        """Create a repository after checking that ``url`` is an http(s) URL with a host."""
        return cls(name=name, url=_normalize_url(url))

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def add_component(self, component: str) -> None:
        if component not in self.components:
            self.components.append(component)

    def remove_component(self, component: str) -> None:
        self.components = [c for c in self.components if c != component]

    def add_architecture(self, arch: str) -> None:
        if arch not in self.architectures:
            self.architectures.append(arch)

    def remove_architecture(self, arch: str) -> None:
        self.architectures = [a for a in self.architectures if a != arch]

    def package_list_url(self, component: str, arch: str) -> str:
        return urljoin(self.url, f"dists/{self.distribution}/{component}/{arch}/Packages")

    def release_url(self) -> str:
        return urljoin(self.url, f"dists/{self.distribution}/Release")

    def update(self, session: requests.Session | None = None) -> None:
        """Fetch the release file and every package list of this repository."""
        owned = session is None
        http = requests.Session() if owned else session
        try:
            self._update(http)
        finally:
            if owned:
                http.close()

    def _update(self, http: requests.Session) -> None:
        print(f"Fetching repository information from {self.url}")
        try:
            response = http.get(self.release_url())
        except requests.RequestException as exc:
            raise RepositoryError(f"Failed to fetch release file: {exc}") from exc
        if not _is_success(response):
            raise RepositoryError(f"Failed to fetch release file: HTTP {_status_text(response)}")
        print("Successfully connected to repository")

        for component in self.components:
            for arch in self.architectures:
                print(f"Fetching package list for {component}/{arch}")
                try:
                    response = http.get(self.package_list_url(component, arch))
                except requests.RequestException as exc:
                    raise RepositoryError(f"Failed to fetch package list: {exc}") from exc
                if not _is_success(response):
                    print(
                        f"Warning: Could not fetch package list for {component}/{arch}: "
                        f"HTTP {_status_text(response)}"
                    )
                    continue
                print(f"Package list for {component}/{arch} updated")

        print(f"Repository {self.name} update completed")

    def search_packages(self, query: str) -> list[Package]:
        """Search this repository; only a built-in test package is known."""
        if not self.enabled or not query:
            return []
        if query in "test" or "test" in query:
            return [
                Package(
                    name="test-package",
                    version="1.0.0",
                    architecture="x86_64",
                    description="A test package for development",
                    size=1024,
                    installed_size=2048,
                    maintainer="PersianPKT Team",
                    homepage="https://example.com/test-package",
                    section="development",
                    priority="optional",
                )
            ]
        return []

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "url": self.url,
            "enabled": self.enabled,
            "priority": self.priority,
            "distribution": self.distribution,
            "components": list(self.components),
            "architectures": list(self.architectures),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Repository:
        enabled = data["enabled"]
        priority = data["priority"]
        if not isinstance(enabled, bool):
            raise ValueError("field `enabled` must be a boolean")
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise ValueError("field `priority` must be an integer")
        components = data["components"]
        architectures = data["architectures"]
        if not isinstance(components, list) or not isinstance(architectures, list):
            raise ValueError("components and architectures must be lists")
        return cls(
            name=str(data["name"]),
            url=str(data["url"]),
            enabled=enabled,
            priority=priority,
            distribution=str(data["distribution"]),
            components=[str(c) for c in components],
            architectures=[str(a) for a in architectures],
        )


class RepositoryManager:
    """Keeps the configured repositories and stores them as JSON."""

    def __init__(self, config_path: Path | str) -> None:
        self.config_path = Path(config_path)
        self.repositories: list[Repository] = []

    def load_repositories(self) -> None:
        """Read the repository file; a missing or blank file leaves the list unchanged."""
        if not self.config_path.exists():
            return
        try:
            content = self.config_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RepositoryError(
                f"Failed to read repository configuration file: {exc}"
            ) from exc
        if not content.strip():
            return
        try:
            data = json.loads(content)
            if not isinstance(data, list):
                raise TypeError("expected a list of repositories")
            repositories = [Repository.from_dict(item) for item in data]
        except (ValueError, KeyError, TypeError) as exc:
            raise RepositoryError(
                f"Failed to parse repository configuration file: {exc}"
            ) from exc
        self.repositories = repositories

    def save_repositories(self) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RepositoryError(f"Failed to create parent directories: {exc}") from exc
        content = json.dumps([repo.to_dict() for repo in self.repositories], indent=2)
        try:
            self.config_path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise RepositoryError(
                f"Failed to save repository configuration file: {exc}"
            ) from exc

    def add_repository(self, repo: Repository) -> None:
        existing = self.get_repository(repo.name)
        if existing is not None:
            raise RepositoryError(f"Repository with name {existing.name} already exists")
        self.repositories.append(repo)
        self.save_repositories()

    def remove_repository(self, name: str) -> bool:
        """Remove the named repository; return whether it existed."""
        before = len(self.repositories)
        self.repositories = [r for r in self.repositories if r.name != name]
        removed = len(self.repositories) < before
        if removed:
            self.save_repositories()
        return removed

    def get_repository(self, name: str) -> Repository | None:
        return next((r for r in self.repositories if r.name == name), None)

    def list_repositories(self) -> list[Repository]:
        return list(self.repositories)

    def list_enabled_repositories(self) -> list[Repository]:
        return [r for r in self.repositories if r.enabled]

    def _set_enabled(self, name: str, enabled: bool) -> bool:
        repo = self.get_repository(name)
        if repo is None:
            return False
        if enabled:
            repo.enable()
        else:
            repo.disable()
        self.save_repositories()
        return True

    def enable_repository(self, name: str) -> bool:
        return self._set_enabled(name, True)

    def disable_repository(self, name: str) -> bool:
        return self._set_enabled(name, False)