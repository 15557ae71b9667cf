"""Header composition for outgoing requests.

Merges request headers, client default headers and library defaults into
one ordered header set. Duplicates are kept; later stages tolerate them.
"""

import uuid

from bunq_client.clients.models import Client
from bunq_client.config.settings import Settings, get_settings
from bunq_client.pipeline.models import Header, Request

# Headers starting with this prefix are protocol metadata and get signed
PROTOCOL_HEADER_PREFIX = "X-Bunq-"

USER_AGENT_HEADER = "User-Agent"
CACHE_CONTROL_HEADER = "Cache-Control"
LANGUAGE_HEADER = "X-Bunq-Language"
REGION_HEADER = "X-Bunq-Region"
REQUEST_ID_HEADER = "X-Bunq-Client-Request-Id"
GEOLOCATION_HEADER = "X-Bunq-Geolocation"
AUTHENTICATION_HEADER = "X-Bunq-Client-Authentication"
CLIENT_SIGNATURE_HEADER = "X-Bunq-Client-Signature"
SERVER_SIGNATURE_HEADER = "X-Bunq-Server-Signature"


def is_protocol_header(name: str) -> bool:
    return name.lower().startswith(PROTOCOL_HEADER_PREFIX.lower())


def new_request_id() -> str:
    """Fresh correlation id for X-Bunq-Client-Request-Id."""
    return str(uuid.uuid4())


def default_headers(settings: Settings | None = None) -> list[Header]:
    settings = settings or get_settings()
    return [
        (USER_AGENT_HEADER, settings.user_agent),
        (CACHE_CONTROL_HEADER, "no-cache"),
        (LANGUAGE_HEADER, settings.bunq_language),
        (REGION_HEADER, settings.bunq_region),
        (REQUEST_ID_HEADER, new_request_id()),
        (GEOLOCATION_HEADER, settings.bunq_geolocation),
    ]


def compose(request: Request, client: Client, settings: Settings | None = None) -> Request:
    """Append client defaults, then library defaults, after the request's own headers."""
    return request.with_headers_appended(list(client.headers) + default_headers(settings))
