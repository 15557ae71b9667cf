"""Request pipeline.

Pipeline: Build -> Headers -> Authenticate -> Sign -> Send -> Verify -> Decode -> Log
"""

from collections.abc import Iterable, Mapping
from typing import Any

from bunq_client.clients.models import Client
from bunq_client.codec.payload import decode_body
from bunq_client.config.settings import get_settings
from bunq_client.errors import TransportError, VerificationError
from bunq_client.logging.audit import RequestTimer, get_audit_logger, request_id_var
from bunq_client.payloads.base import Payload
from bunq_client.pipeline.models import Header, Request, Response, build_request
from bunq_client.security.auth import authenticate
from bunq_client.security.headers import REQUEST_ID_HEADER, compose
from bunq_client.security.response import verify_response
from bunq_client.security.signing import sign
from bunq_client.transport.base import Transport
from bunq_client.transport.factory import get_transport


def prepare_request(
    payload: Payload,
    client: Client,
    headers: Iterable[Header] = (),
    options: Mapping[str, Any] | None = None,
) -> Request:
    """Build a fully authenticated and signed Request without sending it."""
    request = build_request(payload, headers=headers, options=options)
    request = compose(request, client)
    request = authenticate(request, client)
    # Signing must stay last: the signature covers the headers as they are now
    return sign(request, client)


async def request(
    payload: Payload,
    client: Client,
    *,
    headers: Iterable[Header] = (),
    options: Mapping[str, Any] | None = None,
    transport: Transport | None = None,
) -> Response:
    """Perform `payload` against the API as `client`.

    Raises:
        UsageError: a token or key required for this payload is missing, or a
            header is not ASCII.
        TransportError: the network call failed.
        VerificationError: the response signature did not verify.
        DecodeError: the (verified) response body is not JSON.
    """
    prepared = prepare_request(payload, client, headers=headers, options=options)
    token = request_id_var.set(prepared.header(REQUEST_ID_HEADER) or "")
    try:
        return await _send(prepared, client, transport or get_transport())
    finally:
        request_id_var.reset(token)


async def _send(prepared: Request, client: Client, transport: Transport) -> Response:
    settings = get_settings()
    logger = get_audit_logger()
    kind = prepared.payload.kind.value
    url = f"{settings.api_base_url.rstrip('/')}{prepared.path}"

    try:
        with RequestTimer() as timer:
            result = await transport.execute(
                prepared.method, url, prepared.headers, prepared.body, prepared.options
            )
    except TransportError as e:
        logger.warning(
            "Transport failed",
            extra={"audit_data": {
                "method": prepared.method,
                "path": prepared.path,
                "payload_kind": kind,
                "error": str(e),
            }},
        )
        raise

    verification = verify_response(
        result.status,
        result.headers,
        result.body,
        client,
        require_signature=settings.require_response_signature,
    )
    if not verification.valid:
        logger.warning(
            "Response signature rejected",
            extra={"audit_data": {
                "method": prepared.method,
                "path": prepared.path,
                "status": result.status,
                "reason": verification.reason,
            }},
        )
        raise VerificationError(verification.reason)

    body = decode_body(result.body)

    logger.info(
        "Request completed",
        extra={"audit_data": {
            "method": prepared.method,
            "path": prepared.path,
            "payload_kind": kind,
            "status": result.status,
            "latency_ms": timer.elapsed_ms,
            "signature_checked": verification.checked,
        }},
    )

    return Response(status=result.status, headers=result.headers, body=body, client=client)
