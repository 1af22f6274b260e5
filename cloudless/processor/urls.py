"""Expansion of destination and retry URL templates."""

from __future__ import annotations

import uuid
from datetime import datetime

UUID_VAR = "$UUID"
TIME_PATH_VAR = "$TimePath"
RETRY_FRAGMENT = "-retry"
PATH_TIME_LAYOUT = "%Y/%m/%d/%I"
METRIC_URI = "/v1/api/metric/"


def expand_url(url: str, when: datetime) -> str:
    """Replace ``$UUID`` with a fresh UUID and ``$TimePath`` with a time path."""
    if UUID_VAR in url:
        url = url.replace(UUID_VAR, str(uuid.uuid4()))
    if TIME_PATH_VAR in url:
        url = url.replace(TIME_PATH_VAR, when.strftime(PATH_TIME_LAYOUT))
    return url


def expand_retry_url(url: str, when: datetime, retry: int) -> str:
    """Expand ``url`` and mark it with the next retry number before its extension."""
    url = expand_url(url, when)
    dot = url.find(".")
    ext = url[dot:] if dot > -1 else ""
    index = url.rfind(RETRY_FRAGMENT)
    if index > -1:
        url = url[:index]
    else:
        url = url[: len(url) - len(ext)]
    return f"{url}{RETRY_FRAGMENT}{retry + 1:02d}{ext}"