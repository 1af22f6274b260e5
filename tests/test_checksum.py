import pytest

from cloudless.sync.checksum import Checksum, Checksums


def test_put_and_get_int_keys():
    checksum = Checksum()
    checksum.put(3, complex(1, 2))
    checksum.put(1, complex(3, 4))
    assert checksum.get(3) == complex(1, 2)
    assert checksum.get(1) == complex(3, 4)
    assert checksum.size() == 2


def test_put_and_get_string_keys():
    checksum = Checksum()
    checksum.put("b", complex(5, 6))
    checksum.put("a", complex(7, 8))
    assert checksum.get("a") == complex(7, 8)
    assert checksum.get("b") == complex(5, 6)


def test_missing_key_returns_none():
    checksum = Checksum()
    checksum.put(1, complex(1, 1))
    assert checksum.get(2) is None
    assert checksum.get("1") is None


def test_unsupported_key_get_returns_none():
    checksum = Checksum()
    assert checksum.get(1.5) is None


@pytest.mark.parametrize("key", [1.5, None, (1, 2), True])
def test_unsupported_key_put_raises(key):
    checksum = Checksum()
    with pytest.raises(TypeError):
        checksum.put(key, complex(0, 1))
    assert checksum.size() == 0


def test_empty_size():
    assert Checksum().size() == 0
    assert len(Checksum()) == 0


def test_checksums_registry():
    registry = Checksums()
    assert registry.get("mem://localhost/a") is None
    checksum = Checksum()
    checksum.put("k", complex(1, 0))
    registry.put("mem://localhost/a", checksum)
    assert registry.get("mem://localhost/a") is checksum
    assert registry.get("mem://localhost/b") is None