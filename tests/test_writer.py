import gzip

import pytest

from cloudless.processor.writer import Writer
from cloudless.storage import FileSystem


@pytest.fixture
def fs():
    return FileSystem(isolated=True)


def test_records_are_joined_with_new_lines(fs):
    url = "mem://localhost/out/data.txt"
    writer = Writer(url, fs)
    writer.write(b"a")
    writer.write(b"b")
    writer.close()
    assert fs.download(url) == b"a\nb"
    assert writer.counter == 2


def test_gzip_destination_round_trip(fs):
    url = "mem://localhost/out/data.txt.gz"
    records = [b"first", b"second", b"third"]
    with Writer(url, fs) as writer:
        for record in records:
            writer.write(record)
    assert writer.codec == "gzip"
    assert gzip.decompress(fs.download(url)).split(b"\n") == records


def test_plain_destination_has_no_codec(fs):
    assert Writer("mem://localhost/out/data.txt", fs).codec == ""


def test_close_without_writes_creates_nothing(fs):
    url = "mem://localhost/out/empty.txt"
    writer = Writer(url, fs)
    writer.close()
    assert fs.exists(url) is False


def test_unsupported_scheme_raises(fs):
    writer = Writer("unknown://bucket/data.txt", fs)
    with pytest.raises(ValueError):
        writer.write(b"a")
    assert writer.counter == 0