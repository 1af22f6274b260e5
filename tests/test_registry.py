from dataclasses import dataclass

from cloudless.processor.registry import register, row_type


@dataclass
class _Row:
    id: int = 0


def test_register_and_lookup():
    register("test_row", _Row)
    assert row_type("test_row") is _Row


def test_unknown_name_returns_none():
    assert row_type("no_such_row_type") is None


def test_register_overrides():
    register("test_override", int)
    register("test_override", _Row)
    assert row_type("test_override") is _Row