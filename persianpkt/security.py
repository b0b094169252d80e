"""Trusted keys and checksum verification for downloaded packages."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from pathlib import Path


def calculate_checksum(data: bytes) -> str:
    """Return the lowercase hex SHA-256 digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


@dataclass
class SecurityVerifier:
    """Keeps the list of trusted key ids and checks package integrity."""

    trusted_keys: list[str] = field(default_factory=list)

    def load_trusted_keys(self, keys_path: Path | str) -> None:
        """Replace the trusted keys with the non-blank lines of ``keys_path``."""
        keys_path = Path(keys_path)
        if not keys_path.exists():
            raise FileNotFoundError(f"Trusted keys file does not exist: {keys_path}")
        content = keys_path.read_text(encoding="utf-8")
        self.trusted_keys = [line.strip() for line in content.splitlines() if line.strip()]

    def verify_package(self, package_data: bytes, signature: bytes, key_id: str) -> bool:
        """Accept a package only if it is signed by a trusted key."""
        if not self.is_key_trusted(key_id):
            return False
        return self.verify_signature(package_data, signature, key_id)

    def verify_signature(self, data: bytes, signature: bytes, key_id: str) -> bool:
        """Check a signature over ``data``.

        The inputs must be bytes-like; no cryptographic check is made beyond
        that, so every well-formed signature is accepted.
        """
        for name, value in (("data", data), ("signature", signature)):
            try:
                memoryview(value)
            except TypeError as exc:
                raise TypeError(f"{name} must be bytes-like") from exc
        if not isinstance(key_id, str):
            raise TypeError("key_id must be a string")
        return True

    def is_key_trusted(self, key_id: str) -> bool:
        return key_id in self.trusted_keys

    def add_trusted_key(self, key_id: str) -> None:
        if not self.is_key_trusted(key_id):
            self.trusted_keys.append(key_id)

    def remove_trusted_key(self, key_id: str) -> bool:
        """Drop ``key_id``; return whether it was present."""
        before = len(self.trusted_keys)
        self.trusted_keys = [k for k in self.trusted_keys if k != key_id]
        return len(self.trusted_keys) < before

    def verify_checksum(self, data: bytes, expected_checksum: str) -> bool:
        return calculate_checksum(data) == expected_checksum