"""Credential selection for outgoing requests.

Picks the token sent in X-Bunq-Client-Authentication from the payload kind:
- install: no token (this is the call that obtains one)
- register-device / create-session: installation token
- everything else: session token
"""

from bunq_client.clients.models import Client
from bunq_client.errors import UsageError
from bunq_client.payloads.base import PayloadKind
from bunq_client.pipeline.models import Request
from bunq_client.security.headers import AUTHENTICATION_HEADER

_INSTALLATION_TOKEN_KINDS = frozenset({PayloadKind.REGISTER_DEVICE, PayloadKind.CREATE_SESSION})


def select_token(kind: PayloadKind, client: Client) -> str | None:
    """Token required for `kind`, or None when the call is unauthenticated.

    Raises UsageError when the required token is missing.
    """
    if kind is PayloadKind.INSTALL:
        return None

    if kind in _INSTALLATION_TOKEN_KINDS:
        token, token_name = client.installation_token, "installation token"
    else:
        token, token_name = client.session_token, "session token"

    if not token:
        raise UsageError(f"A {token_name} is required for '{kind.value}' requests")
    return token


def authenticate(request: Request, client: Client) -> Request:
    token = select_token(request.payload.kind, client)
    if token is None:
        return request
    return request.with_header_prepended(AUTHENTICATION_HEADER, token)
