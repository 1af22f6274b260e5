import pytest

from cloudless.sync.extractor import (
    composite_key,
    int_key_json_extractor,
    string_key_json_extractor,
)


def test_int_key_extractor():
    extract = int_key_json_extractor("id")
    assert extract(b'{"id":4, "active":true, "status":2}') == 4
    assert extract(b'{"name":"x","id":12}') == 12


def test_int_key_extractor_trims_spaces():
    extract = int_key_json_extractor("id")
    assert extract(b'{"id": 7 }') == 7


def test_int_key_extractor_missing_key():
    extract = int_key_json_extractor("id")
    with pytest.raises(ValueError, match="failed to locate: id"):
        extract(b'{"name":"x"}')


def test_int_key_extractor_non_integer():
    extract = int_key_json_extractor("id")
    with pytest.raises(ValueError):
        extract(b'{"id":"abc"}')


def test_string_key_extractor_removes_quotes():
    extract = string_key_json_extractor("name")
    assert extract(b'{"id":1, "name":"foo"}') == "foo"


def test_string_key_extractor_missing_key():
    extract = string_key_json_extractor("name")
    with pytest.raises(ValueError, match="failed to locate: name"):
        extract(b'{"id":1}')


def test_composite_key():
    extract = composite_key("a", "b")
    assert extract(b'{"a":1,"b":"x"}') == "1/x"


def test_composite_key_single():
    extract = composite_key("name")
    assert extract(b'{"name":"foo","id":2}') == "foo"


def test_composite_key_missing_key():
    extract = composite_key("a", "c")
    with pytest.raises(ValueError, match="failed to locate: c"):
        extract(b'{"a":1,"b":"x"}')