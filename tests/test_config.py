import re
from datetime import datetime, timedelta, timezone

import pytest

from cloudless.processor.config import DEFAULT_SCANNER_LIMIT, Config, Rotation, Stream

DEST_PATTERN = r"mem://localhost/dest/sum-[a-z0-9.-]+"
LOCAL_PATTERN = r"mem://localhost/local/sum-[a-z0-9.-]+"


def test_expand_destination_without_rotation():
    cfg = Config(
        concurrency=5,
        destination_url="mem://localhost/dest/sum-$UUID.txt",
        destination_codec="gzip",
        max_exec_time_ms=2000,
    )
    dest = cfg.expand_destination(datetime.now())
    assert dest.codec == "gzip"
    assert dest.stream_upload is False
    assert re.fullmatch(DEST_PATTERN, dest.url)
    assert dest.rotation is None


def test_expand_destination_with_rotation_and_codec():
    cfg = Config(
        concurrency=5,
        max_exec_time_ms=2000,
        destination_codec="gzip",
        destination=Stream(
            url="mem://localhost/local/sum-$UUID.txt",
            rotation=Rotation(
                every_ms=100000000,
                url="mem://localhost/dest/sum-$UUID.txt",
                codec="gzip",
            ),
        ),
    )
    dest = cfg.expand_destination(datetime.now())
    assert dest.codec == "gzip"
    assert dest.stream_upload is False
    assert re.fullmatch(LOCAL_PATTERN, dest.url)
    assert dest.rotation.codec == "gzip"
    assert dest.rotation.every_ms == 100000000
    assert re.fullmatch(DEST_PATTERN, dest.rotation.url)


def test_expand_destination_mixed_attributes():
    cfg = Config(
        concurrency=5,
        max_exec_time_ms=2000,
        destination_codec="gzip",
        destination_url="mem://localhost/dest/sum-$UUID.txt",
        destination=Stream(
            rotation=Rotation(
                every_ms=100000000,
                url="mem://localhost/dest/sum-$UUID.txt",
                codec="gzip",
            ),
        ),
    )
    dest = cfg.expand_destination(datetime.now())
    assert dest.codec == "gzip"
    assert re.fullmatch(DEST_PATTERN, dest.url)
    assert dest.rotation.every_ms == 100000000
    assert re.fullmatch(DEST_PATTERN, dest.rotation.url)
    assert dest.url == dest.rotation.url


def test_expand_destination_rotation_only():
    cfg = Config(
        concurrency=5,
        max_exec_time_ms=2000,
        destination=Stream(
            rotation=Rotation(
                every_ms=100000000,
                url="mem://localhost/dest/sum-$UUID.txt",
                codec="gzip",
            ),
        ),
    )
    dest = cfg.expand_destination(datetime.now())
    assert dest.codec == ""
    assert dest.stream_upload is False
    assert dest.rotation.codec == "gzip"
    assert re.fullmatch(DEST_PATTERN, dest.url)
    assert dest.url == dest.rotation.url


def test_expand_destination_none_when_unset():
    assert Config().expand_destination(datetime.now()) is None
    assert Config().expand_destination_rotation_url(datetime.now()) == ""


def test_init_defaults():
    cfg = Config()
    cfg.init()
    assert cfg.max_exec_time_ms == 9 * 60000
    assert cfg.deadline_reduction_ms == int(cfg.max_exec_time_ms * 0.01)
    assert cfg.loader_deadline_lag_ms == cfg.deadline_reduction_ms
    assert cfg.max_retries == 10
    assert cfg.concurrency == 20


def test_init_codec_and_suffix():
    cfg = Config(destination_codec="gzip", destination_url="mem://localhost/out.txt")
    cfg.init()
    assert cfg.destination_url == "mem://localhost/out.txt.gz"

    other = Config(destination_url="mem://localhost/out.txt.gz")
    other.init()
    assert other.destination_codec == "gzip"


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({}, "retryURL was empty"),
        ({"retry_url": "mem://localhost/r"}, "failedURL was empty"),
        ({"retry_url": "mem://localhost/r", "failed_url": "mem://localhost/f"}, "corruptionURL was empty"),
    ],
)
def test_validate_errors(kwargs, message):
    with pytest.raises(ValueError, match=message):
        Config(**kwargs).validate()


def test_validate_too_large_exec_time():
    cfg = Config()
    cfg.init_with_no_limit()
    cfg.validate()
    cfg.max_exec_time_ms += 1
    with pytest.raises(ValueError, match="maxExecTimeMs too large"):
        cfg.validate()


def test_init_with_no_limit():
    cfg = Config()
    cfg.init_with_no_limit()
    assert cfg.retry_url == "mem://localhost/retry"
    assert cfg.failed_url == "mem://localhost/failed"
    assert cfg.corruption_url == "mem://localhost/corruption"


def test_deadline_with_context_deadline():
    cfg = Config(deadline_reduction_ms=500, loader_deadline_lag_ms=200)
    ctx_deadline = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert cfg.deadline(ctx_deadline) == ctx_deadline - timedelta(milliseconds=500)
    assert cfg.loader_deadline(ctx_deadline) == ctx_deadline - timedelta(milliseconds=700)


def test_deadline_without_context(monkeypatch):
    monkeypatch.delenv("FUNCTION_TIMEOUT_SEC", raising=False)
    cfg = Config(max_exec_time_ms=2000)
    before = datetime.now(timezone.utc)
    deadline = cfg.deadline()
    after = datetime.now(timezone.utc)
    assert before + timedelta(milliseconds=2000) <= deadline <= after + timedelta(milliseconds=2000)


def test_deadline_from_function_timeout(monkeypatch):
    monkeypatch.setenv("FUNCTION_TIMEOUT_SEC", "60")
    cfg = Config(max_exec_time_ms=2000)
    before = datetime.now(timezone.utc)
    deadline = cfg.deadline()
    assert deadline >= before + timedelta(seconds=59)


def test_scanner_limit():
    assert Config().scanner_limit() == DEFAULT_SCANNER_LIMIT
    assert Config(scanner_buffer_mb=2).scanner_limit() == 2 * 1024 * 1024