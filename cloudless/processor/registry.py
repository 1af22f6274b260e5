"""Registry of row types by name."""

from __future__ import annotations

from typing import Any

_TYPES: dict[str, Any] = {}


def register(name: str, row_type: Any) -> None:
    _TYPES[name] = row_type


def row_type(name: str) -> Any:
    """Return the registered row type, or None if unknown."""
    return _TYPES.get(name)