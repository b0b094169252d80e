"""A package manager for Debian-style repositories, with cache, mirror, checksum and archive helpers."""

__version__ = "0.1.0"