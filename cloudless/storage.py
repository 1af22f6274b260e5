"""Storage access for in-memory (``mem://``) and local file URLs."""

from __future__ import annotations

import io
import shutil
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Iterator

MEMORY_SCHEME = "mem"
FILE_SCHEME = "file"


def _parts(url: str) -> tuple[str, str, str]:
    """Split a URL into scheme, host and path (path keeps its leading slash)."""
    if "://" not in url:
        return "", "", url
    scheme, rest = url.split("://", 1)
    host, sep, path = rest.partition("/")
    return scheme, host, ("/" + path) if sep else ""


def url_scheme(url: str, default: str) -> str:
    """Return the scheme of ``url`` or ``default`` when it has none."""
    scheme, _, _ = _parts(url)
    return scheme or default


def url_path(url: str) -> str:
    """Return the path part of ``url``."""
    scheme, _, path = _parts(url)
    return path if scheme else url


def url_base(url: str, default_scheme: str) -> tuple[str, str]:
    """Return ``(scheme://host, path)`` for ``url``."""
    scheme, host, path = _parts(url)
    if scheme:
        return f"{scheme}://{host}", path
    return f"{default_scheme}://localhost", url


def url_join(base: str, *args: str) -> str:
    """Join URL segments with single slashes."""
    result = base.rstrip("/") if base.rstrip("/") else base
    for arg in args:
        segment = arg.strip("/")
        if not segment:
            continue
        result = f"{result}/{segment}" if result else segment
    return result


def url_split(url: str, default_scheme: str) -> tuple[str, str]:
    """Return the parent URL and the last path segment of ``url``."""
    base, path = url_base(url.rstrip("/"), default_scheme)
    path = path.rstrip("/")
    if not path:
        return base, ""
    parent, _, name = path.rpartition("/")
    return base + parent, name


def _name(url: str) -> str:
    return url.rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class StorageObject:
    """A file or directory found in storage."""

    url: str
    name: str
    is_dir: bool
    mod_time: datetime
    size: int = 0


class _MemoryStore:
    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.files: dict[str, tuple[bytes, datetime]] = {}
        self.last_write: datetime | None = None

    def stamp(self) -> datetime:
        now = datetime.now(timezone.utc)
        if self.last_write is not None and now <= self.last_write:
            now = self.last_write + timedelta(microseconds=1)
        self.last_write = now
        return now


_SHARED_MEMORY = _MemoryStore()


class _MemoryBackend:
    def __init__(self, store: _MemoryStore) -> None:
        self._store = store

    @staticmethod
    def _key(url: str) -> str:
        return url.rstrip("/")

    def stat(self, url: str) -> StorageObject | None:
        key = self._key(url)
        prefix = key + "/"
        with self._store.lock:
            if key in self._store.files:
                data, stamp = self._store.files[key]
                return StorageObject(key, _name(key), False, stamp, len(data))
            times = [t for k, (_, t) in self._store.files.items() if k.startswith(prefix)]
        if not times:
            return None
        return StorageObject(key, _name(key), True, max(times), 0)

    def children(self, url: str) -> list[StorageObject]:
        key = self._key(url)
        prefix = key + "/"
        with self._store.lock:
            items = sorted(self._store.files.items())
        files: list[StorageObject] = []
        dirs: set[str] = set()
        for name, (data, stamp) in items:
            if not name.startswith(prefix):
                continue
            head, sep, _ = name[len(prefix):].partition("/")
            if sep:
                dirs.add(head)
            else:
                files.append(StorageObject(name, head, False, stamp, len(data)))
        result = files + [obj for d in sorted(dirs) if (obj := self.stat(prefix + d))]
        return sorted(result, key=lambda o: o.url)

    def read(self, url: str) -> bytes:
        key = self._key(url)
        with self._store.lock:
            entry = self._store.files.get(key)
        if entry is None:
            raise FileNotFoundError(f"not found: {url}")
        return entry[0]

    def write(self, url: str, data: bytes) -> None:
        with self._store.lock:
            self._store.files[self._key(url)] = (bytes(data), self._store.stamp())

    def remove(self, url: str) -> None:
        key = self._key(url)
        prefix = key + "/"
        with self._store.lock:
            doomed = [k for k in self._store.files if k == key or k.startswith(prefix)]
            if not doomed:
                raise FileNotFoundError(f"not found: {url}")
            for name in doomed:
                del self._store.files[name]


class _LocalBackend:
    @staticmethod
    def _path(url: str) -> Path:
        scheme, _, path = _parts(url)
        return Path(path or "/") if scheme else Path(url)

    def stat(self, url: str) -> StorageObject | None:
        path = self._path(url)
        if not path.exists():
            return None
        info = path.stat()
        is_dir = path.is_dir()
        return StorageObject(
            url.rstrip("/") or url,
            path.name,
            is_dir,
            datetime.fromtimestamp(info.st_mtime, timezone.utc),
            0 if is_dir else info.st_size,
        )

    def children(self, url: str) -> list[StorageObject]:
        base = url.rstrip("/")
        result = []
        for child in sorted(self._path(url).iterdir()):
            obj = self.stat(f"{base}/{child.name}")
            if obj is not None:
                result.append(obj)
        return result

    def read(self, url: str) -> bytes:
        return self._path(url).read_bytes()

    def write(self, url: str, data: bytes) -> None:
        path = self._path(url)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(bytes(data))

    def remove(self, url: str) -> None:
        path = self._path(url)
        if path.is_dir():
            shutil.rmtree(path)
        elif path.exists():
            path.unlink()
        else:
            raise FileNotFoundError(f"not found: {url}")


class _CommitWriter(io.BytesIO):
    """Buffers written bytes and stores them when closed."""

    def __init__(self, commit: Callable[[bytes], None]) -> None:
        super().__init__()
        self._commit = commit

    def close(self) -> None:
        if not self.closed:
            self._commit(self.getvalue())
        super().close()


class FileSystem:
    """Storage service for ``mem://``, ``file://`` and plain local paths."""

    def __init__(self, isolated: bool = False) -> None:
        self._memory = _MemoryBackend(_MemoryStore() if isolated else _SHARED_MEMORY)
        self._local = _LocalBackend()

    def _backend(self, url: str) -> _MemoryBackend | _LocalBackend:
        scheme = url_scheme(url, "")
        if scheme == MEMORY_SCHEME:
            return self._memory
        if scheme in ("", FILE_SCHEME):
            return self._local
        raise ValueError(f"unsupported storage scheme: {scheme}")

    def open_url(self, url: str) -> io.BytesIO:
        """Open ``url`` for reading."""
        return io.BytesIO(self._backend(url).read(url))

    def exists(self, url: str) -> bool:
        return self._backend(url).stat(url) is not None

    def object(self, url: str) -> StorageObject:
        """Return the object at ``url``; raise FileNotFoundError if missing."""
        obj = self._backend(url).stat(url)
        if obj is None:
            raise FileNotFoundError(f"not found: {url}")
        return obj

    def _walk(self, url: str, recursive: bool) -> Iterator[StorageObject]:
        for child in self._backend(url).children(url):
            yield child
            if recursive and child.is_dir:
                yield from self._walk(child.url, recursive)

    def list(self, url: str, recursive: bool = False) -> list[StorageObject]:
        """List ``url``: the object itself first, then its contents."""
        root = self.object(url)
        if not root.is_dir:
            return [root]
        return [root, *self._walk(url, recursive)]

    def upload(self, url: str, data: bytes) -> None:
        self._backend(url).write(url, data)

    def download(self, url: str) -> bytes:
        return self._backend(url).read(url)

    def delete(self, url: str) -> None:
        self._backend(url).remove(url)

    def copy(self, source: str, dest: str) -> None:
        """Copy a file or a whole directory."""
        root = self.object(source)
        if not root.is_dir:
            self.upload(dest, self.download(source))
            return
        for child in self.list(source, recursive=True):
            if child.is_dir:
                continue
            relative = child.url[len(root.url):]
            self.upload(dest.rstrip("/") + relative, self.download(child.url))

    def move(self, source: str, dest: str) -> None:
        self.copy(source, dest)
        self.delete(source)

    def new_writer(self, url: str) -> io.BytesIO:
        """Return a binary writer whose content is stored at ``url`` on close."""
        backend = self._backend(url)
        return _CommitWriter(lambda data: backend.write(url, data))