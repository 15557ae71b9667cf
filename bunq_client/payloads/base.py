"""Abstract base for API payloads.

A payload describes one API operation: its HTTP method, its path and its
JSON body. The pipeline treats payloads as opaque apart from `kind`,
which decides the credential and signature applied.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class PayloadKind(str, Enum):
    INSTALL = "install"
    REGISTER_DEVICE = "register-device"
    CREATE_SESSION = "create-session"
    OTHER = "other"


@dataclass(frozen=True)
class Payload(ABC):
    """Base class for payload implementations."""

    kind: ClassVar[PayloadKind] = PayloadKind.OTHER
    method: ClassVar[str] = "GET"

    @property
    @abstractmethod
    def path(self) -> str:
        """Request path, starting with the API version (e.g. /v1/user)."""
        ...

    def to_body(self) -> dict[str, Any] | None:
        """JSON-serializable request body, or None when the call has no body."""
        return None
