"""Package dependencies and semantic-version requirement matching."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any

import semver

_COMPARATOR_RE = re.compile(r"^(>=|<=|=|>|<|~|\^)?\s*(.+)$")
_PARTIAL_RE = re.compile(
    r"^(\d+|[*xX])"
    r"(?:\.(\d+|[*xX])"
    r"(?:\.(\d+|[*xX])"
    r"(?:-([0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?)?)?$"
)
_WILDCARDS = frozenset("*xX")


@dataclass(frozen=True)
class _Comparator:
    op: str
    major: int
    minor: int | None
    patch: int | None
    pre: str


def _parse_comparator(text: str) -> _Comparator | None:
    """Parse one comparator; ``None`` stands for a bare wildcard matching everything."""
    match = _COMPARATOR_RE.match(text.strip())
    if match is None:
        raise ValueError(f"invalid version requirement: {text!r}")
    op, body = match.group(1), match.group(2).strip()
    partial = _PARTIAL_RE.match(body)
    if partial is None:
        raise ValueError(f"invalid version requirement: {text!r}")
    raw_parts = partial.group(1, 2, 3)
    pre = partial.group(4) or ""

    numbers: list[int] = []
    wildcard_seen = False
    for part in raw_parts:
        if part is None:
            break
        if part in _WILDCARDS:
            wildcard_seen = True
            continue
        if wildcard_seen:
            raise ValueError(f"unexpected number after wildcard in {text!r}")
        numbers.append(int(part))

    if wildcard_seen and pre:
        raise ValueError(f"wildcard cannot be combined with a pre-release in {text!r}")
    if not numbers:
        if op not in (None, "="):
            raise ValueError(f"wildcard cannot follow an operator in {text!r}")
        return None

    major = numbers[0]
    minor = numbers[1] if len(numbers) > 1 else None
    patch = numbers[2] if len(numbers) > 2 else None
    if wildcard_seen and op in (None, "="):
        kind = "*"
    elif op is None:
        kind = "^"
    else:
        kind = op
    return _Comparator(kind, major, minor, patch, pre)


def _parse_requirement(requirement: str) -> list[_Comparator]:
    pieces = requirement.split(",")
    comparators = []
    for piece in pieces:
        if not piece.strip():
            raise ValueError(f"invalid version requirement: {requirement!r}")
        comparator = _parse_comparator(piece)
        if comparator is not None:
            comparators.append(comparator)
    return comparators


def _pre_key(pre: str | None) -> semver.Version:
    return semver.Version(0, 0, 0, prerelease=pre or None)


def _exact(cmp: _Comparator, ver: semver.Version) -> bool:
    if ver.major != cmp.major:
        return False
    if cmp.minor is not None and ver.minor != cmp.minor:
        return False
    if cmp.patch is not None and ver.patch != cmp.patch:
        return False
    return (ver.prerelease or "") == cmp.pre


def _greater(cmp: _Comparator, ver: semver.Version) -> bool:
    if ver.major != cmp.major:
        return ver.major > cmp.major
    if cmp.minor is None:
        return False
    if ver.minor != cmp.minor:
        return ver.minor > cmp.minor
    if cmp.patch is None:
        return False
    if ver.patch != cmp.patch:
        return ver.patch > cmp.patch
    return _pre_key(ver.prerelease) > _pre_key(cmp.pre)


def _less(cmp: _Comparator, ver: semver.Version) -> bool:
    if ver.major != cmp.major:
        return ver.major < cmp.major
    if cmp.minor is None:
        return False
    if ver.minor != cmp.minor:
        return ver.minor < cmp.minor
    if cmp.patch is None:
        return False
    if ver.patch != cmp.patch:
        return ver.patch < cmp.patch
    return _pre_key(ver.prerelease) < _pre_key(cmp.pre)


def _tilde(cmp: _Comparator, ver: semver.Version) -> bool:
    if ver.major != cmp.major:
        return False
    if cmp.minor is not None and ver.minor != cmp.minor:
        return False
    if cmp.patch is not None and ver.patch != cmp.patch:
        return ver.patch > cmp.patch
    return _pre_key(ver.prerelease) >= _pre_key(cmp.pre)


def _caret(cmp: _Comparator, ver: semver.Version) -> bool:
    if ver.major != cmp.major:
        return False
    if cmp.minor is None:
        return True
    if cmp.patch is None:
        if cmp.major > 0:
            return ver.minor >= cmp.minor
        return ver.minor == cmp.minor
    if cmp.major > 0:
        if ver.minor != cmp.minor:
            return ver.minor > cmp.minor
        if ver.patch != cmp.patch:
            return ver.patch > cmp.patch
    elif cmp.minor > 0:
        if ver.minor != cmp.minor:
            return False
        if ver.patch != cmp.patch:
            return ver.patch > cmp.patch
    elif ver.minor != cmp.minor or ver.patch != cmp.patch:
        return False
    return _pre_key(ver.prerelease) >= _pre_key(cmp.pre)


def _wildcard(cmp: _Comparator, ver: semver.Version) -> bool:
    if ver.major != cmp.major:
        return False
    return cmp.minor is None or ver.minor == cmp.minor


_MATCHERS = {
    "=": _exact,
    ">": _greater,
    ">=": lambda c, v: _exact(c, v) or _greater(c, v),
    "<": _less,
    "<=": lambda c, v: _exact(c, v) or _less(c, v),
    "~": _tilde,
    "^": _caret,
    "*": _wildcard,
}


def matches_requirement(requirement: str, version: str) -> bool:
    """Tell whether ``version`` satisfies a semantic-version ``requirement``.

    Raises ``ValueError`` if either the requirement or the version is malformed.
    """
    comparators = _parse_requirement(requirement)
    ver = semver.Version.parse(version)
    if not all(_MATCHERS[cmp.op](cmp, ver) for cmp in comparators):
        return False
    if not ver.prerelease:
        return True
    return any(
        cmp.major == ver.major
        and cmp.minor == ver.minor
        and cmp.patch == ver.patch
        and cmp.pre
        for cmp in comparators
    )


@dataclass
class PackageDependency:
    """A dependency on another package, optionally constrained by version."""

    name: str
    version_req: str | None = None
    is_optional: bool = False

    def optional(self) -> PackageDependency:
        """Return a copy of this dependency marked as optional."""
        return replace(self, is_optional=True)

    def satisfies(self, version: str) -> bool:
        """Tell whether ``version`` meets this dependency's requirement."""
        if self.version_req is None:
            return True
        try:
            return matches_requirement(self.version_req, version)
        except ValueError:
            return False

    @classmethod
    def from_string(cls, dep_str: str) -> PackageDependency | None:
        """Parse ``"name [requirement...]"``; return ``None`` for blank input."""
        parts = dep_str.split()
        if not parts:
            return None
        name, *rest = parts
        return cls(name, " ".join(rest) if rest else None)

    def __str__(self) -> str:
        if self.version_req is not None:
            return f"{self.name} ({self.version_req})"
        return self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version_req": self.version_req,
            "is_optional": self.is_optional,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PackageDependency:
        return cls(
            name=data["name"],
            version_req=data.get("version_req"),
            is_optional=bool(data["is_optional"]),
        )