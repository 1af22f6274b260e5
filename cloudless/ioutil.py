"""Reader and writer wrappers, including transparent gzip handling."""

from __future__ import annotations

import gzip
import io
from typing import Any, BinaryIO, Iterable, Iterator, Protocol


class Flusher(Protocol):
    """Anything that can flush buffered output."""

    def flush(self) -> None: ...


def _close(stream: Any) -> None:
    close = getattr(stream, "close", None)
    if close is not None:
        close()


class ReadCloser:
    """Reads from a wrapping reader and closes both it and its origin."""

    def __init__(self, reader: BinaryIO, origin: BinaryIO) -> None:
        self.reader = reader
        self.origin = origin

    def read(self, size: int = -1) -> bytes:
        return self.reader.read(size)

    def readline(self, size: int = -1) -> bytes:
        return self.reader.readline(size)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.reader)

    def close(self) -> None:
        """Close the origin first, then the wrapping reader."""
        _close(self.origin)
        _close(self.reader)

    def __enter__(self) -> "ReadCloser":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class WriterCloser:
    """Writes through a wrapping writer; closing flushes and closes both."""

    def __init__(self, writer: BinaryIO, origin: BinaryIO) -> None:
        self.writer = writer
        self.origin = origin

    def write(self, data: bytes) -> int:
        return self.writer.write(data)

    def close(self) -> None:
        flush = getattr(self.writer, "flush", None)
        if flush is not None:
            flush()
        _close(self.writer)
        _close(self.origin)

    def __enter__(self) -> "WriterCloser":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class BytesSliceReader(io.RawIOBase):
    """Reads a sequence of byte chunks as one stream."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        super().__init__()
        self._chunks = [bytes(chunk) for chunk in chunks]
        self._chunk = 0
        self._offset = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        """Return up to ``size`` bytes, never crossing a chunk boundary."""
        if size is None or size < 0:
            rest = b"".join(
                [self._chunks[self._chunk][self._offset:]] + self._chunks[self._chunk + 1:]
            ) if self._chunk < len(self._chunks) else b""
            self._chunk, self._offset = len(self._chunks), 0
            return rest
        if size == 0:
            return b""
        while self._chunk < len(self._chunks):
            fragment = self._chunks[self._chunk]
            if self._offset < len(fragment):
                part = fragment[self._offset:self._offset + size]
                self._offset += len(part)
                return part
            self._chunk += 1
            self._offset = 0
        return b""

    def readinto(self, buffer: Any) -> int:
        data = self.read(len(buffer))
        buffer[:len(data)] = data
        return len(data)


def data_reader(reader: BinaryIO, url: str) -> Any:
    """Return ``reader``, decompressing it when ``url`` ends with ``.gz``."""
    if not url.endswith(".gz"):
        return reader
    gz = gzip.GzipFile(fileobj=reader, mode="rb")
    gz.peek(1)
    return ReadCloser(gz, reader)


def open_url(fs: Any, url: str) -> Any:
    """Open ``url`` on ``fs`` and return an uncompressed data reader."""
    try:
        reader = fs.open_url(url)
    except Exception as err:
        raise OSError(f"failed to open: {url}, due to {err}") from err
    return data_reader(reader, url)