"""Subscriber metric keys and collected metric values."""

from __future__ import annotations

from typing import Any

ERROR_KEY = "error"
DATA_CORRUPTION = "data_corruption"
PENDING = "pending"
RETRY = "retry"
TIMEOUT = "timeout"
ACKNOWLEDGED = "ack"
NEGATIVE_ACKNOWLEDGED = "nack"
SUBSCRIBER_METRIC_NAME = "subscriber"

_KEYS = (
    ERROR_KEY,
    DATA_CORRUPTION,
    PENDING,
    TIMEOUT,
    RETRY,
    ACKNOWLEDGED,
    NEGATIVE_ACKNOWLEDGED,
)


class Values:
    """Values collected while handling one message."""

    def __init__(self) -> None:
        self._items: list[Any] = []

    def append(self, item: Any) -> None:
        self._items.append(item)

    def values(self) -> list[Any]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class Subscriber:
    """Maps subscriber metric values to counter positions."""

    def keys(self) -> list[str]:
        return list(_KEYS)

    def map(self, value: Any) -> int:
        """Return the counter index for ``value``; errors count as ``error``."""
        if value is None:
            return -1
        if isinstance(value, BaseException):
            return 0
        if isinstance(value, str) and value in _KEYS:
            return _KEYS.index(value)
        return -1