"""Payload codec: deterministic JSON encoding and strict decoding.

Encoding must be byte-identical for equal payloads because the encoded
body is part of the signed string.
"""

import json
from typing import Any

from bunq_client.errors import DecodeError
from bunq_client.payloads.base import Payload


def canonical_json(obj: Any) -> bytes:
    """Sorted keys, minimal separators, UTF-8 bytes."""
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def encode_payload(payload: Payload) -> bytes:
    body = payload.to_body()
    if body is None:
        return b""
    return canonical_json(body)


def decode_body(body: bytes) -> Any:
    """Decode a response body. An empty body decodes to None."""
    if not body.strip():
        return None
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"Response body is not valid JSON: {e}") from e
