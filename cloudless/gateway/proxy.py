"""Conversion between plain HTTP messages and API gateway proxy events."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, urlsplit

from cloudless.gateway.router import Route


def is_ascii(data: bytes | str) -> bool:
    """Return True when every character of ``data`` is 7-bit ASCII."""
    return data.isascii()


def _canonical_key(key: str) -> str:
    """Return the canonical MIME form of a header name, e.g. Content-Type."""
    if not key or any(ch in " \t\r\n:" for ch in key):
        return key
    return "-".join(part[:1].upper() + part[1:].lower() for part in key.split("-"))


def _path_of(uri: str) -> str:
    index = uri.find("?")
    return uri if index == -1 else uri[:index]


def extract_uri_parameters(template: str, uri: str) -> dict[str, str]:
    """Return the values of ``{name}`` segments of ``template`` found in ``uri``.

    An empty dict is returned when the URI does not fit the template.
    """
    template_segments = _path_of(template).strip("/").split("/")
    uri_segments = _path_of(uri).strip("/").split("/")
    if len(template_segments) != len(uri_segments):
        return {}
    params: dict[str, str] = {}
    for expected, actual in zip(template_segments, uri_segments):
        if expected.startswith("{") and expected.endswith("}"):
            params[expected[1:-1]] = actual
        elif expected != actual:
            return {}
    return params


@dataclass
class ProxyRequest:
    """A proxy integration request event."""

    resource: str = ""
    path: str = ""
    http_method: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    multi_value_headers: dict[str, list[str]] = field(default_factory=dict)
    query_string_parameters: dict[str, str] = field(default_factory=dict)
    multi_value_query_string_parameters: dict[str, list[str]] = field(default_factory=dict)
    path_parameters: dict[str, str] = field(default_factory=dict)
    request_context: dict[str, Any] = field(default_factory=dict)
    body: str = ""
    is_base64_encoded: bool = False


@dataclass
class ProxyResponse:
    """A proxy integration response event."""

    status_code: int = 0
    headers: dict[str, str] = field(default_factory=dict)
    multi_value_headers: dict[str, list[str]] = field(default_factory=dict)
    body: str = ""
    is_base64_encoded: bool = False


@dataclass
class HTTPResponse:
    """A plain HTTP response."""

    status_code: int = 0
    headers: dict[str, list[str]] = field(default_factory=dict)
    body: bytes = b""


@dataclass
class HTTPRequest:
    """A plain HTTP request; header names are kept in canonical form."""

    method: str = "GET"
    request_uri: str = "/"
    headers: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        canonical: dict[str, list[str]] = {}
        for key, values in self.headers.items():
            if isinstance(values, str):
                values = [values]
            canonical.setdefault(_canonical_key(key), []).extend(values)
        self.headers = canonical

    def header(self, name: str) -> str:
        """Return the first value of header ``name``, or an empty string."""
        values = self.headers.get(_canonical_key(name))
        return values[0] if values else ""

    def proxy_request(
        self, route: Route, authorizer: dict[str, Any], body: Any = None
    ) -> ProxyRequest:
        """Build the proxy event for this request routed to ``route``."""
        query = urlsplit(self.request_uri).query
        multi_query = parse_qs(query, keep_blank_values=True)
        event = ProxyRequest(
            path=self.request_uri,
            http_method=self.method,
            headers={key: values[0] for key, values in self.headers.items() if values},
            multi_value_headers={key: list(values) for key, values in self.headers.items()},
            query_string_parameters={
                key: values[0] for key, values in multi_query.items() if values
            },
            multi_value_query_string_parameters=multi_query,
            path_parameters=extract_uri_parameters(route.uri, self.request_uri),
            request_context={"authorizer": authorizer},
        )
        if body is not None:
            payload = body.read() if hasattr(body, "read") else body
            if isinstance(payload, str):
                payload = payload.encode()
            payload = bytes(payload)
            if is_ascii(payload):
                event.body = payload.decode("ascii")
            else:
                event.body = base64.b64encode(payload).decode("ascii")
                event.is_base64_encoded = True
        return event

    def authorizer_request(self) -> dict[str, str]:
        """Return the custom authorizer event carrying the Authorization header."""
        return {"type": "", "authorizationToken": self.header("Authorization")}


def new_response(proxy: ProxyResponse) -> HTTPResponse:
    """Convert a proxy response event into an HTTP response."""
    if proxy.is_base64_encoded:
        try:
            body = base64.b64decode(proxy.body, validate=True)
        except binascii.Error as err:
            raise ValueError(f"invalid base64 body: {err}") from err
    else:
        body = proxy.body.encode()
    headers = {_canonical_key(key): [value] for key, value in proxy.headers.items()}
    return HTTPResponse(status_code=proxy.status_code, headers=headers, body=body)