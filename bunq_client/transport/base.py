"""Abstract base for transports."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass
class TransportResult:
    status: int
    headers: list[tuple[str, str]]  # as received: original case, order and duplicates
    body: bytes                     # raw bytes, not decoded


class Transport(ABC):
    """Base class for transport implementations."""

    @abstractmethod
    async def execute(
        self,
        method: str,
        url: str,
        headers: Sequence[tuple[str, str]],
        body: bytes,
        options: Mapping[str, Any],
    ) -> TransportResult:
        """Perform one HTTP call.

        Args:
            method: HTTP method.
            url: Absolute URL.
            headers: Ordered header pairs, sent as given.
            body: Encoded request body (may be empty).
            options: Per-request transport options (e.g. "timeout").

        Returns:
            TransportResult with headers and body exactly as received.

        Raises:
            TransportError: the call failed before a response arrived.
        """
        ...

    async def close(self) -> None:
        """Cleanup resources. Override if the transport holds connections."""
        pass
