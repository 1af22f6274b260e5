import pytest

from cloudless.processor import stat
from cloudless.processor.stat import Subscriber, Values


def test_values_keep_appended_items_in_order():
    values = Values()
    err = ValueError("boom")
    values.append(stat.ACKNOWLEDGED)
    values.append(err)
    assert values.values() == [stat.ACKNOWLEDGED, err]
    assert len(values) == 2


def test_new_values_are_empty():
    assert Values().values() == []


def test_keys_fixed_order():
    assert Subscriber().keys() == [
        "error",
        "data_corruption",
        "pending",
        "timeout",
        "retry",
        "ack",
        "nack",
    ]


def test_every_key_maps_to_its_position():
    subscriber = Subscriber()
    keys = subscriber.keys()
    assert [subscriber.map(key) for key in keys] == list(range(len(keys)))


def test_errors_map_to_error_counter():
    subscriber = Subscriber()
    assert subscriber.map(RuntimeError("x")) == subscriber.keys().index(stat.ERROR_KEY)


@pytest.mark.parametrize("value", [None, "unknown", 42])
def test_unknown_values_map_to_minus_one(value):
    assert Subscriber().map(value) == -1