"""Request signing.

The signed string is built from the request line, a canonical block of the
signable headers and the encoded body:

    {METHOD} {path}\\n{canonical header block}\\n\\n{body}

The canonical header block keeps only Cache-Control, User-Agent and
X-Bunq-* headers, sorted by name and rendered as "Name: value" lines.
Signatures are RSA PKCS#1 v1.5 over SHA-256, base64 encoded.
"""

import base64
from collections.abc import Iterable

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from bunq_client.clients.models import Client
from bunq_client.errors import UsageError
from bunq_client.payloads.base import PayloadKind
from bunq_client.pipeline.models import Header, Request
from bunq_client.security.headers import (
    CACHE_CONTROL_HEADER,
    CLIENT_SIGNATURE_HEADER,
    USER_AGENT_HEADER,
    is_protocol_header,
)

_ALWAYS_SIGNED = frozenset({CACHE_CONTROL_HEADER.lower(), USER_AGENT_HEADER.lower()})


def is_signed_request_header(name: str) -> bool:
    return name.lower() in _ALWAYS_SIGNED or is_protocol_header(name)


def canonical_header_block(headers: Iterable[Header]) -> str:
    """Sort by name (stable, as stored) and join as "Name: value" lines."""
    ordered = sorted(headers, key=lambda header: header[0])
    return "\n".join(f"{name}: {value}" for name, value in ordered)


def signable_bytes(request: Request) -> bytes:
    headers = [h for h in request.headers if is_signed_request_header(h[0])]
    preamble = f"{request.method.upper()} {request.path}\n{canonical_header_block(headers)}\n\n"
    return preamble.encode("utf-8") + request.body


def sign_bytes(private_key: rsa.RSAPrivateKey, data: bytes) -> str:
    signature = private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
    return base64.b64encode(signature).decode("ascii")


def signature_for(request: Request, client: Client) -> str:
    if request.payload.kind is PayloadKind.INSTALL:
        return ""
    if client.client_private_key is None:
        raise UsageError("A client private key is required to sign requests")
    return sign_bytes(client.client_private_key, signable_bytes(request))


def _require_ascii(headers: Iterable[Header]) -> None:
    # httpx encodes str header values as ASCII
    for name, value in headers:
        if not name.isascii():
            raise UsageError(f"Header name {name!r} must be ASCII")
        if not value.isascii():
            raise UsageError(f"Header {name} must have an ASCII value")


def sign(request: Request, client: Client) -> Request:
    """Prepend X-Bunq-Client-Signature. Must be the last header change before sending.

    Raises UsageError for non-ASCII header names or values.
    """
    _require_ascii(request.headers)
    return request.with_header_prepended(CLIENT_SIGNATURE_HEADER, signature_for(request, client))
