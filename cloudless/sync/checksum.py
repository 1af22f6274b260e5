"""Per-record content hashes of synchronised assets, keyed by record key."""

from __future__ import annotations

import threading
from typing import Any


def _supported(key: Any) -> bool:
    return isinstance(key, (int, str)) and not isinstance(key, bool)


class Checksum:
    """Maps record keys (int or str) to content hashes."""

    def __init__(self) -> None:
        self._hashes: dict[int | str, complex] = {}

    def get(self, key: Any) -> complex | None:
        """Return the hash stored for ``key``, or None when there is none."""
        if not _supported(key):
            return None
        return self._hashes.get(key)

    def put(self, key: Any, value: complex) -> None:
        """Store ``value`` for ``key``; raise TypeError for unsupported key types."""
        if not _supported(key):
            raise TypeError(f"unsupported key: {type(key).__name__}")
        self._hashes[key] = value

    def size(self) -> int:
        """Return the number of stored hashes."""
        return len(self._hashes)

    def __len__(self) -> int:
        return self.size()


class Checksums:
    """Thread-safe registry of checksums by asset URL."""

    def __init__(self) -> None:
        self._assets: dict[str, Checksum] = {}
        self._lock = threading.Lock()

    def get(self, url: str) -> Checksum | None:
        """Return the checksum stored for ``url``, or None."""
        with self._lock:
            return self._assets.get(url)

    def put(self, url: str, checksum: Checksum) -> None:
        with self._lock:
            self._assets[url] = checksum