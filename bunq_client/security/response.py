"""Response signature verification.

The server signs:

    {status}\\n{canonical header block}\\n\\n{raw body}

where the header block covers every X-Bunq-* response header except
X-Bunq-Server-Signature itself. Verification runs over the raw body
bytes, before decoding.

Verification is skipped when the client has no server public key, and an
unsigned response passes unless `require_signature` is set.
"""

import base64
import binascii
from collections.abc import Iterable
from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from bunq_client.clients.models import Client
from bunq_client.pipeline.models import Header, find_header
from bunq_client.security.headers import SERVER_SIGNATURE_HEADER, is_protocol_header
from bunq_client.security.keys import load_server_public_key
from bunq_client.security.signing import canonical_header_block

_SERVER_SIGNATURE_LOWER = SERVER_SIGNATURE_HEADER.lower()


@dataclass
class VerificationResult:
    valid: bool
    checked: bool = False  # True when a signature was actually verified
    reason: str = ""


def verifiable_bytes(status: int, headers: Iterable[Header], body: bytes) -> bytes:
    signed = [
        (name, value) for name, value in headers
        if is_protocol_header(name) and name.lower() != _SERVER_SIGNATURE_LOWER
    ]
    preamble = f"{status}\n{canonical_header_block(signed)}\n\n"
    # Header values arrive decoded as latin-1; this restores the bytes the server signed
    return preamble.encode("latin-1") + body


def verify_response(
    status: int,
    headers: list[Header],
    body: bytes,
    client: Client,
    *,
    require_signature: bool = False,
) -> VerificationResult:
    """Check the server signature of a raw response.

    Raises UsageError if the configured server public key cannot be decoded.
    """
    if not client.server_public_key:
        return VerificationResult(valid=True, reason="No server public key configured")

    encoded_signature = find_header(headers, SERVER_SIGNATURE_HEADER)
    if encoded_signature is None:
        if require_signature:
            return VerificationResult(valid=False, reason="Response is not signed by the server")
        return VerificationResult(valid=True, reason="Response carries no signature")

    try:
        signature = base64.b64decode(encoded_signature, validate=True)
    except (binascii.Error, ValueError):
        return VerificationResult(valid=False, reason="Response signature is not valid base64")

    try:
        data = verifiable_bytes(status, headers, body)
    except UnicodeEncodeError:
        return VerificationResult(valid=False, reason="Response headers are not latin-1 encodable")

    public_key = load_server_public_key(client.server_public_key)
    try:
        public_key.verify(
            signature,
            data,
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
    except InvalidSignature:
        return VerificationResult(
            valid=False,
            checked=True,
            reason="Could not verify response signature. "
                   "Check that you have the correct server public key.",
        )

    return VerificationResult(valid=True, checked=True)
