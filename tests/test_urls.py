import uuid
from datetime import datetime

from cloudless.processor.urls import RETRY_FRAGMENT, expand_retry_url, expand_url


def test_expand_url_uuid():
    url = expand_url("mem://localhost/dest/sum-$UUID.txt", datetime.now())
    assert "$" not in url
    token = url[len("mem://localhost/dest/sum-"):-len(".txt")]
    assert str(uuid.UUID(token)) == token


def test_expand_url_same_uuid_for_all_occurrences():
    url = expand_url("$UUID/$UUID", datetime.now())
    first, second = url.split("/")
    assert first == second


def test_expand_url_time_path():
    url = expand_url("mem://localhost/$TimePath/x", datetime(2021, 3, 4, 15))
    assert url == "mem://localhost/2021/03/04/03/x"


def test_expand_url_without_variables():
    url = "mem://localhost/plain.txt"
    assert expand_url(url, datetime.now()) == url


def test_expand_retry_url_first_retry():
    url = expand_retry_url("mem://localhost/retry/response/numbers.txt", datetime.now(), 0)
    assert url == "mem://localhost/retry/response/numbers-retry01.txt"


def test_expand_retry_url_keeps_single_fragment():
    url = expand_retry_url("mem://localhost/tmp/retry/sum-retry05.txt", datetime.now(), 5)
    assert url.count(RETRY_FRAGMENT) == 1
    assert url.endswith("-retry06.txt")