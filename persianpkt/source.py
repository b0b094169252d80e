"""Fetching and parsing repository indexes."""

from __future__ import annotations

import re

import requests

from persianpkt.package_info import PackageInfo
from persianpkt.repository import Repository

DEFAULT_TIMEOUT = 30.0
_U64_MAX = 2**64 - 1
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


def _lines(content: str) -> list[str]:
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _parse_unsigned(text: str) -> int | None:
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value <= _U64_MAX else None


def _split_field(line: str) -> tuple[str, str] | None:
    key, sep, value = line.partition(":")
    if not sep:
        return None
    return key.strip(), value.strip()


def _package_info(fields: dict[str, str]) -> PackageInfo | None:
    try:
        info = PackageInfo(
            name=fields["Package"],
            version=fields["Version"],
            architecture=fields["Architecture"],
            description=fields.get("Description", ""),
        )
    except KeyError:
        return None

    size = _parse_unsigned(fields.get("Size", ""))
    if size is not None:
        info.size = size
    installed_size = _parse_unsigned(fields.get("Installed-Size", ""))
    if installed_size is not None:
        info.installed_size = installed_size * 1024
    if "Homepage" in fields:
        info.homepage = fields["Homepage"]
    for key, attr in (
        ("Maintainer", "maintainer"),
        ("Section", "section"),
        ("Priority", "priority"),
        ("Filename", "filename"),
        ("MD5sum", "md5sum"),
        ("SHA256", "sha256"),
    ):
        if key in fields:
            setattr(info, attr, fields[key])
    if "Depends" in fields:
        info.dependencies = [dep.strip() for dep in fields["Depends"].split(",")]
    return info


def parse_packages_file(content: str) -> list[PackageInfo]:
    """Parse a ``Packages`` index into package records.

    Stanzas lacking Package, Version or Architecture are skipped; continuation
    lines are ignored.
    """
    packages: list[PackageInfo] = []
    current: dict[str, str] = {}

    def flush() -> None:
        info = _package_info(current)
        if info is not None:
            packages.append(info)

    for line in _lines(content):
        if not line:
            if current:
                flush()
                current = {}
            continue
        if line.startswith(" "):
            continue
        pair = _split_field(line)
        if pair is not None:
            current[pair[0]] = pair[1]
    if current:
        flush()
    return packages


def parse_release_file(content: str) -> dict[str, str]:
    """Parse every ``Key: value`` line of a ``Release`` file."""
    info: dict[str, str] = {}
    for line in _lines(content):
        pair = _split_field(line)
        if pair is not None:
            info[pair[0]] = pair[1]
    return info


class RepositorySource:
    """Downloads indexes and package files from a repository."""

    def __init__(
        self, session: requests.Session | None = None, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _get(self, url: str) -> requests.Response:
        return self.session.get(url, timeout=self.timeout)

    def fetch_package_list(
        self, repository: Repository, component: str, arch: str
    ) -> list[PackageInfo]:
        response = self._get(repository.package_list_url(component, arch))
        return parse_packages_file(response.text)

    def fetch_release_info(self, repository: Repository) -> dict[str, str]:
        response = self._get(repository.release_url())
        return parse_release_file(response.text)

    def download_package(self, url: str) -> bytes:
        return self._get(str(url)).content