"""Ordering of line-delimited CSV or JSON data by configured fields."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, BinaryIO

from cloudless.ioutil import BytesSliceReader

_INTEGER = re.compile(r"[+-]?\d+")
_DEFAULT_LIMIT = 64 * 1024


def _atoi(text: str) -> int:
    """Parse a whole decimal integer; anything else gives 0."""
    return int(text) if _INTEGER.fullmatch(text) else 0


def _raw_text(value: Any) -> str:
    """Return the JSON text of a decoded value, without surrounding quotes."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return json.dumps(value, separators=(",", ":")).strip('"')


def _split(data: bytes, delimiter: str) -> list[bytes]:
    if not delimiter:
        return [data[i:i + 1] for i in range(len(data))]
    return data.split(delimiter.encode())


@dataclass
class Spec:
    """Data format (``csv`` or JSON) and CSV delimiter."""

    format: str = ""
    delimiter: str = ""

    @property
    def is_csv(self) -> bool:
        return self.format.lower() == "csv"


@dataclass
class Field:
    """A sort field: a CSV column index or a JSON key name."""

    name: str = ""
    index: int = 0
    is_numeric: bool = False

    def _json_value(self, document: dict[str, Any]) -> Any:
        if self.name not in document:
            return None
        text = _raw_text(document[self.name]).strip('"')
        return _atoi(text) if self.is_numeric else text

    def value(self, data: bytes, spec: Spec) -> Any:
        """Return this field's value in one record.

        CSV records give the raw column bytes (empty when the column is
        missing); JSON records give an int for numeric fields, text otherwise,
        or None when the key is absent.
        """
        if spec.is_csv:
            record = _split(data, spec.delimiter)
            if self.index >= len(record):
                return b""
            return record[self.index]
        return self._json_value(_decode_object(data))


def _decode_object(data: bytes) -> dict[str, Any]:
    try:
        document = json.loads(data)
    except (ValueError, UnicodeDecodeError):
        return {}
    return document if isinstance(document, dict) else {}


def _as_float(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(_atoi(value))
    return 0.0


def _as_text(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    return ""


@dataclass
class Sort:
    """Sort definition: format spec, fields, and whether to batch by the first field."""

    spec: Spec = field(default_factory=Spec)
    by: list[Field] = field(default_factory=list)
    batch: bool = False

    def _csv_key(self, item: bytes) -> tuple[Any, ...]:
        record = _split(item, self.spec.delimiter or ",")
        key: list[Any] = []
        for sort_field in self.by:
            column = (
                record[sort_field.index].decode(errors="replace")
                if sort_field.index < len(record)
                else ""
            )
            key.append(_atoi(column) if sort_field.is_numeric else column)
        return tuple(key)

    def _json_key(self, item: bytes) -> tuple[Any, ...]:
        document = _decode_object(item)
        values = {
            f.name: f._json_value(document) for f in self.by if f.name in document
        }
        if not values:
            return (0,)
        key: list[Any] = [1]
        for sort_field in self.by:
            value = values.get(sort_field.name)
            key.append(_as_float(value) if sort_field.is_numeric else _as_text(value))
        return tuple(key)

    def order(self, reader: BinaryIO, config: Any = None) -> BytesSliceReader:
        """Read all non-empty lines of ``reader`` and return them sorted."""
        limit = config.scanner_limit() if config is not None else _DEFAULT_LIMIT
        data = reader.read()
        if isinstance(data, str):
            data = data.encode()
        items: list[bytes] = []
        for line in data.split(b"\n"):
            if line.endswith(b"\r"):
                line = line[:-1]
            if len(line) > limit:
                break
            if line:
                items.append(line + b"\n")
        key = self._csv_key if self.spec.is_csv else self._json_key
        items.sort(key=key)
        if items:
            items[-1] = items[-1].strip(b"\n")
        return BytesSliceReader(items)