"""Processing requests built from cloud storage and messaging events."""

from __future__ import annotations

import base64
import binascii
import io
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from cloudless.ioutil import data_reader, open_url
from cloudless.processor.config import Config
from cloudless.processor.registry import row_type
from cloudless.processor.request import CSV, JSON, PARQUET, Request


def _source_type(url: str) -> str:
    if url.endswith(".parquet"):
        return PARQUET
    if url.endswith(".json") or url.endswith(".json.gz"):
        return JSON
    return CSV


def _storage_request(fs: Any, cfg: Config, url: str, buffer_whole: bool) -> Request:
    request = Request(source_type=_source_type(url))
    if request.source_type in (CSV, JSON):
        if cfg.reader_buffer_size > 0:
            fs.object(url)
        reader = open_url(fs, url)
        request.reader = reader
        if request.source_type == JSON:
            request.row_type = row_type(cfg.row_type_name)
        if buffer_whole and cfg.reader_buffer_size == 0:
            try:
                data = reader.read()
            finally:
                reader.close()
            request.reader = io.BytesIO(data)
    else:
        request.row_type = row_type(cfg.row_type_name)
        if request.row_type is None:
            raise ValueError(f" parquet type name '{cfg.row_type_name}' not registered")
        request.reader_at = fs.download(url)
    request.source_url = url
    request.start_time = datetime.now(timezone.utc)
    return request


def _decode_base64(data: bytes) -> bytes:
    """Return ``data`` base64-decoded, or unchanged when it is not base64."""
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        return data


def _message_request(body: str, attributes: dict[str, str] | None, attr_key: str, message: Any) -> Request:
    source_url = (attributes or {}).get("Source", "")
    data = _decode_base64(body.encode())
    reader = data_reader(io.BytesIO(data), source_url)
    return Request(
        reader=reader,
        attrs={attr_key: message},
        source_url=source_url,
        start_time=datetime.now(timezone.utc),
    )


@dataclass
class S3Event:
    """An S3 notification; records use the notification's JSON layout."""

    records: list[dict[str, Any]] = field(default_factory=list)

    def _first(self) -> dict[str, Any]:
        if not self.records:
            raise ValueError("event has no records")
        return self.records[0]

    def new_request(self, fs: Any, cfg: Config) -> Request:
        """Create a processing request for the object named by the first record."""
        s3 = self._first()["s3"]
        url = f"s3://{s3['bucket']['name']}/{s3['object']['key']}"
        return _storage_request(fs, cfg, url, buffer_whole=True)


@dataclass
class SQSEvent:
    """An SQS event; each record holds ``body`` and ``attributes``."""

    records: list[dict[str, Any]] = field(default_factory=list)

    def new_request(self) -> Request:
        """Create a processing request from the first message body."""
        if not self.records:
            raise ValueError("event has no records")
        record = self.records[0]
        return _message_request(
            record.get("body", ""), record.get("attributes"), "SQSMessage", record
        )


@dataclass
class GSEvent:
    """A Cloud Storage object event."""

    bucket: str = ""
    name: str = ""
    content_type: str = ""
    crc32c: str = ""
    etag: str = ""
    generation: str = ""
    id: str = ""
    kind: str = ""
    md5_hash: str = ""
    media_link: str = ""
    metageneration: str = ""
    self_link: str = ""
    size: str = ""
    storage_class: str = ""
    time_created: str = ""
    time_storage_class_updated: str = ""
    updated: str = ""

    def url(self) -> str:
        return f"gs://{self.bucket}/{self.name}"

    def new_request(self, fs: Any, cfg: Config) -> Request:
        """Create a processing request for the event's object."""
        return _storage_request(fs, cfg, self.url(), buffer_whole=False)


@dataclass
class PubSubMessage:
    """A Pub/Sub message whose data may be base64-encoded."""

    data: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    message_id: str = ""
    publish_time: datetime | None = None
    ordering_key: str = ""

    def new_request(self) -> Request:
        """Create a processing request from the message data."""
        return _message_request(self.data, self.attributes, "PubSubMessage", self)