"""Line writer that opens its destination lazily on the first write."""

from __future__ import annotations

import gzip
import threading
from typing import Any

from cloudless.ioutil import WriterCloser

GZIP_CODEC = "gzip"


class Writer:
    """Writes records separated by new lines, gzip-compressed for ``.gz`` URLs."""

    def __init__(self, url: str, fs: Any) -> None:
        self.url = url
        self.codec = GZIP_CODEC if url.endswith(".gz") else ""
        self._fs = fs
        self._writer: Any = None
        self._counter = 0
        self._lock = threading.Lock()

    @property
    def counter(self) -> int:
        """Number of records written."""
        return self._counter

    def write(self, data: bytes) -> None:
        """Write one record, opening the destination on the first call."""
        with self._lock:
            if self._counter == 0:
                origin = self._fs.new_writer(self.url)
                if self.codec == GZIP_CODEC:
                    self._writer = WriterCloser(
                        gzip.GzipFile(fileobj=origin, mode="wb"), origin
                    )
                else:
                    self._writer = origin
            else:
                self._writer.write(b"\n")
            self._writer.write(bytes(data))
            self._counter += 1

    def close(self) -> None:
        """Close the destination if anything was written."""
        with self._lock:
            if self._counter == 0:
                return
            self._writer.close()

    def __enter__(self) -> "Writer":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()