"""Mirror availability checks and selection."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import timedelta
from urllib.parse import urljoin

import requests

DEFAULT_TIMEOUT = 5.0
_SLOWEST_ACCEPTED = timedelta(seconds=60)
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


@dataclass
class Mirror:
    """A repository mirror and the result of its last check."""

    url: str
    name: str
    country: str
    speed: timedelta | None = None
    last_check: float | None = None
    is_available: bool = False


class MirrorSelector:
    """Probes mirrors and picks among them."""

    def __init__(
        self, session: requests.Session | None = None, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def select_fastest_mirror(self, mirrors: list[Mirror]) -> Mirror | None:
        """Return the available mirror with the lowest speed under 60 seconds."""
        fastest = None
        best = _SLOWEST_ACCEPTED
        for mirror in mirrors:
            if mirror.is_available and mirror.speed is not None and mirror.speed < best:
                best = mirror.speed
                fastest = mirror
        return fastest

    def check_mirrors(self, mirrors: list[Mirror]) -> None:
        """Send a HEAD request to each mirror's ``status`` path and record the result."""
        for mirror in mirrors:
            url = urljoin(mirror.url, "status")
            start = time.monotonic()
            try:
                response = self.session.head(url, timeout=self.timeout)
            except requests.RequestException:
                mirror.is_available = False
            else:
                mirror.speed = timedelta(seconds=time.monotonic() - start)
                mirror.is_available = 200 <= response.status_code < 300
            mirror.last_check = time.monotonic()

    def mirrors_by_country(self, mirrors: list[Mirror], country: str) -> list[Mirror]:
        """Available mirrors in ``country``, compared ignoring ASCII case."""
        wanted = _ascii_lower(country)
        return [
            m for m in mirrors if m.is_available and _ascii_lower(m.country) == wanted
        ]

    def mirror_status(self, mirrors: list[Mirror]) -> dict[str, bool]:
        return {m.name: m.is_available for m in mirrors}