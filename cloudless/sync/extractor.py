"""Key extraction from raw JSON lines without full decoding."""

from __future__ import annotations

import re
from typing import Any, Callable

Keyer = Callable[[bytes], Any]

_INTEGER = re.compile(r"[+-]?\d+")
_VALUE_END = re.compile(rb"[,}]")


def _match(key: str) -> bytes:
    return f'"{key}":'.encode()


def _value_after(data: bytes, start: int) -> str:
    """Return the trimmed text from ``start`` up to the next ``,`` or ``}``."""
    end = _VALUE_END.search(data, start)
    limit = end.start() if end else len(data)
    return data[start:limit].decode(errors="replace").strip()


def _extract(data: bytes, key: str) -> str:
    match = _match(key)
    offset = data.find(match)
    if offset == -1:
        raise ValueError(f"failed to locate: {key}")
    return _value_after(data, offset + len(match))


def int_key_json_extractor(key: str) -> Keyer:
    """Return a function reading the integer value of ``key`` from a JSON line."""

    def extract(data: bytes) -> int:
        value = _extract(data, key)
        if not _INTEGER.fullmatch(value):
            raise ValueError(f"invalid integer for {key}: {value!r}")
        return int(value)

    return extract


def string_key_json_extractor(key: str) -> Keyer:
    """Return a function reading the string value of ``key`` from a JSON line."""

    def extract(data: bytes) -> str:
        return _extract(data, key).strip('"')

    return extract


def composite_key(*args: str) -> Keyer:
    """Return a function joining the values of keys, in order, with ``/``."""
    keys = args

    def extract(data: bytes) -> str:
        values: list[str] = []
        position = 0
        for key in keys:
            match = _match(key)
            offset = data.find(match, position)
            if offset == -1:
                raise ValueError(f"failed to locate: {key}")
            value = _value_after(data, offset + len(match)).strip('"')
            values.append(value)
            position += offset + len(match) + len(value)
        return "/".join(values)

    return extract