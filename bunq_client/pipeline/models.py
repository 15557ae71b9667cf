"""Request and Response values passed through the pipeline.

Requests are immutable: each pipeline stage returns a new Request, so the
header set a signature was computed over cannot change underneath it.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from bunq_client.clients.models import Client
from bunq_client.codec.payload import encode_payload
from bunq_client.payloads.base import Payload

Header = tuple[str, str]


def find_header(headers: Iterable[Header], name: str) -> str | None:
    """First value for `name`, compared case-insensitively."""
    wanted = name.lower()
    for header_name, value in headers:
        if header_name.lower() == wanted:
            return value
    return None


@dataclass(frozen=True)
class Request:
    method: str
    path: str
    payload: Payload
    headers: tuple[Header, ...] = ()
    options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def body(self) -> bytes:
        return encode_payload(self.payload)

    def header(self, name: str) -> str | None:
        return find_header(self.headers, name)

    def with_headers_appended(self, headers: Iterable[Header]) -> "Request":
        return replace(self, headers=self.headers + tuple(headers))

    def with_header_prepended(self, name: str, value: str) -> "Request":
        return replace(self, headers=((name, value),) + self.headers)


def build_request(
    payload: Payload,
    headers: Iterable[Header] = (),
    options: Mapping[str, Any] | None = None,
) -> Request:
    return Request(
        method=payload.method,
        path=payload.path,
        payload=payload,
        headers=tuple(headers),
        options=dict(options or {}),
    )


@dataclass
class Response:
    status: int
    headers: list[Header]
    body: Any
    client: Client | None = field(default=None, repr=False, compare=False)

    def header(self, name: str) -> str | None:
        return find_header(self.headers, name)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def objects(self) -> list[dict]:
        """Items of the `Response` envelope bunq wraps successful bodies in."""
        if isinstance(self.body, dict):
            return list(self.body.get("Response", []))
        return []

    @property
    def error_descriptions(self) -> list[str]:
        if not isinstance(self.body, dict):
            return []
        return [
            err.get("error_description", "")
            for err in self.body.get("Error", [])
            if isinstance(err, dict)
        ]

    def find_object(self, object_type: str) -> dict | None:
        """First object of the given type in the envelope, e.g. "Token"."""
        for item in self.objects:
            if isinstance(item, dict) and object_type in item:
                return item[object_type]
        return None
