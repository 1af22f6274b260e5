"""Processing request; the processor package runs serverless concurrent processing."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, BinaryIO

from cloudless.processor.urls import RETRY_FRAGMENT
from cloudless.storage import FILE_SCHEME, url_base, url_join

PARQUET = "parquet"
JSON = "json"
CSV = "csv"


@dataclass
class Request:
    """Data to process together with where it came from."""

    reader: BinaryIO | None = None
    source_type: str = ""
    reader_at: Any = None
    row_type: Any = None
    attrs: dict[str, Any] | None = None
    start_time: datetime | None = None
    source_url: str = ""

    def retry(self) -> int:
        """Return the retry number: the two digits after the last ``-retry``."""
        index = self.source_url.rfind(RETRY_FRAGMENT)
        if index == -1:
            return 0
        start = index + len(RETRY_FRAGMENT)
        try:
            return int(self.source_url[start:start + 2])
        except ValueError:
            return 0

    def transform_source_url(self, base_url: str) -> str:
        """Return ``base_url`` joined with the path of the source URL."""
        _, path = url_base(self.source_url, FILE_SCHEME)
        return url_join(base_url, path)


def new_request(
    reader: BinaryIO | bytes | str, attrs: dict[str, Any] | None, source_url: str
) -> Request:
    """Create a CSV request; bytes or text are wrapped in a binary reader."""
    if isinstance(reader, str):
        reader = io.BytesIO(reader.encode())
    elif isinstance(reader, (bytes, bytearray)):
        reader = io.BytesIO(bytes(reader))
    return Request(
        reader=reader,
        attrs=attrs,
        start_time=datetime.now(timezone.utc),
        source_url=source_url,
        source_type=CSV,
    )