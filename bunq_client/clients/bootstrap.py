"""Session bootstrap: installation -> device registration -> session.

Each step returns a new Client; the input Client is never modified.
"""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import replace
from typing import Any, TypeVar

from bunq_client.clients.models import Client
from bunq_client.config.settings import get_settings
from bunq_client.errors import DecodeError, UsageError
from bunq_client.payloads.installation import DeviceServerPost, InstallationPost, SessionServerPost
from bunq_client.pipeline.handler import request
from bunq_client.pipeline.models import Response
from bunq_client.security.keys import generate_key_pair, public_key_pem
from bunq_client.transport.base import Transport

T = TypeVar("T")


def _require_field(response: Response, object_type: str, field_name: str) -> Any:
    obj = response.find_object(object_type)
    value = obj.get(field_name) if isinstance(obj, dict) else None
    if not value:
        detail = "; ".join(response.error_descriptions) or f"status {response.status}"
        raise DecodeError(f"{object_type}.{field_name} missing from response ({detail})")
    return value


async def install(client: Client, transport: Transport | None = None) -> Client:
    """Register the client's public key; returns a Client with installation token and server key."""
    if client.client_private_key is None:
        private_key = generate_key_pair()
        client = replace(
            client,
            client_private_key=private_key,
            client_public_key=public_key_pem(private_key),
        )
    elif not client.client_public_key:
        client = replace(client, client_public_key=public_key_pem(client.client_private_key))

    response = await request(InstallationPost(client.client_public_key), client, transport=transport)
    return replace(
        client,
        installation_token=_require_field(response, "Token", "token"),
        server_public_key=_require_field(response, "ServerPublicKey", "server_public_key"),
    )


async def register_device(
    client: Client,
    description: str | None = None,
    permitted_ips: Iterable[str] | None = None,
    transport: Transport | None = None,
) -> Client:
    settings = get_settings()
    if permitted_ips is None:
        permitted_ips = settings.permitted_ips_list
    payload = DeviceServerPost(
        description=description or settings.device_description,
        secret=client.api_key,
        permitted_ips=tuple(permitted_ips),
    )
    response = await request(payload, client, transport=transport)
    _require_field(response, "Id", "id")
    return client


async def start_session(client: Client, transport: Transport | None = None) -> Client:
    """Open a session; returns a Client carrying the session token."""
    response = await request(SessionServerPost(secret=client.api_key), client, transport=transport)
    return replace(client, session_token=_require_field(response, "Token", "token"))


async def get_session_client(
    api_key: str | None = None,
    transport: Transport | None = None,
) -> Client:
    """Run the full bootstrap for `api_key` (defaults to BUNQ_API_KEY)."""
    api_key = api_key or get_settings().bunq_api_key
    if not api_key:
        raise UsageError("An API key is required to start a session")

    client = await install(Client(api_key=api_key), transport=transport)
    client = await register_device(client, transport=transport)
    return await start_session(client, transport=transport)


async def with_session(
    fun: Callable[[Client], Awaitable[T]],
    api_key: str | None = None,
    transport: Transport | None = None,
) -> T:
    """Start a session and await `fun(client)` with it.

    Example:
        response = await with_session(lambda client: request(UserList(), client))
    """
    client = await get_session_client(api_key, transport=transport)
    return await fun(client)
