"""Processor configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from cloudless.processor.urls import expand_url

ON_DONE_DELETE = "delete"
ON_DONE_MOVE = "move"
DEFAULT_SCANNER_LIMIT = 64 * 1024
_MAX_INT32 = 2**31 - 1


@dataclass
class Rotation:
    """Destination rotation settings."""

    url: str = ""
    codec: str = ""
    every_ms: int = 0
    max_entries: int = 0
    emit: Any = None


@dataclass
class Stream:
    """Destination stream settings."""

    url: str = ""
    codec: str = ""
    rotation: Rotation | None = None
    stream_upload: bool = False


@dataclass
class Config:
    """Settings of a data processing service."""

    deadline_reduction_ms: int = 0
    loader_deadline_lag_ms: int = 0
    max_retries: int = 0
    concurrency: int = 0
    destination_url: str = ""
    destination_codec: str = ""
    destination: Stream | None = None
    retry_url: str = ""
    failed_url: str = ""
    corruption_url: str = ""
    max_exec_time_ms: int = 0
    on_done: str = ""
    on_done_url: str = ""
    reader_buffer_size: int = 0
    batch_size: int = 0
    sort: Any = None
    scanner_buffer_mb: int = 0
    metric_port: int = 0
    row_type_name: str = ""
    on_mirror_url: str = ""
    quorum_ext: str = ""

    def expand_destination_url(self, start_time: datetime) -> str:
        if self.destination is not None and self.destination.url:
            return expand_url(self.destination.url, start_time)
        return expand_url(self.destination_url, start_time)

    def expand_destination_rotation_url(self, start_time: datetime) -> str:
        dest = self.destination
        if dest is not None and dest.rotation is not None and dest.rotation.url:
            return expand_url(dest.rotation.url, start_time)
        return ""

    def expand_destination(self, start_time: datetime) -> Stream | None:
        """Return the destination stream with its URL templates expanded."""
        if self.destination is None and not self.destination_url:
            return None
        result = Stream(url=self.expand_destination_url(start_time))
        if self.destination_codec:
            result.codec = self.destination_codec
        dest = self.destination
        if dest is not None and dest.rotation is not None:
            source = dest.rotation
            rotation = Rotation(
                url=self.expand_destination_rotation_url(start_time),
                codec=source.codec,
                every_ms=source.every_ms,
                max_entries=source.max_entries,
                emit=source.emit,
            )
            result.rotation = rotation
            if not dest.url and source.url:
                result.url = rotation.url
        return result

    def deadline(self, context_deadline: datetime | None = None) -> datetime:
        """Return the latest time at which processing must finish."""
        deadline = context_deadline
        if deadline is None:
            now = datetime.now(timezone.utc)
            deadline = now + timedelta(milliseconds=self.max_exec_time_ms)
            timeout = os.environ.get("FUNCTION_TIMEOUT_SEC", "")
            if timeout:
                try:
                    seconds = int(timeout)
                except ValueError:
                    seconds = 0
                if seconds > 1:
                    deadline = now + timedelta(seconds=seconds - 1)
        return deadline - timedelta(milliseconds=self.deadline_reduction_ms)

    def loader_deadline(self, context_deadline: datetime | None = None) -> datetime:
        """Return the deadline for loading, earlier than the worker deadline."""
        return self.deadline(context_deadline) - timedelta(
            milliseconds=self.loader_deadline_lag_ms
        )

    def validate(self) -> None:
        """Raise ValueError when a required setting is missing or out of range."""
        if not self.retry_url:
            raise ValueError("retryURL was empty")
        if not self.failed_url:
            raise ValueError("failedURL was empty")
        if not self.corruption_url:
            raise ValueError("corruptionURL was empty")
        if self.max_exec_time_ms > _MAX_INT32:
            raise ValueError("maxExecTimeMs too large")

    def init_with_no_limit(self) -> None:
        """Set in-memory destinations and an unlimited execution time."""
        self.retry_url = "mem://localhost/retry"
        self.failed_url = "mem://localhost/failed"
        self.corruption_url = "mem://localhost/corruption"
        self.max_exec_time_ms = _MAX_INT32

    def init(self) -> None:
        """Fill in default values."""
        if self.max_exec_time_ms == 0:
            self.max_exec_time_ms = 9 * 60000
        if self.deadline_reduction_ms == 0:
            self.deadline_reduction_ms = int(self.max_exec_time_ms * 0.01)
        if self.loader_deadline_lag_ms == 0:
            self.loader_deadline_lag_ms = int(self.max_exec_time_ms * 0.01)
        if self.destination_codec == "gzip" and not self.destination_url.endswith(".gz"):
            self.destination_url += ".gz"
        if not self.destination_codec and self.destination_url.endswith(".gz"):
            self.destination_codec = "gzip"
        if self.max_retries == 0:
            self.max_retries = 10
        if self.concurrency == 0:
            self.concurrency = 20

    def scanner_limit(self) -> int:
        """Return the longest line, in bytes, that a line scanner accepts."""
        if self.scanner_buffer_mb > 0:
            return self.scanner_buffer_mb * 1024 * 1024
        return DEFAULT_SCANNER_LIMIT