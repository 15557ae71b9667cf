"""Default transport singleton."""

from bunq_client.transport.base import Transport
from bunq_client.transport.httpx_transport import HttpxTransport

_transport: Transport | None = None


def get_transport() -> Transport:
    """Get or create the default transport."""
    global _transport
    if _transport is None:
        _transport = HttpxTransport()
    return _transport


async def close_transport() -> None:
    """Gracefully close the default transport."""
    global _transport
    if _transport is not None:
        await _transport.close()
        _transport = None
