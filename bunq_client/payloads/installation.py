"""Bootstrap payloads: installation, device registration, session creation."""

from dataclasses import dataclass, field
from typing import Any, ClassVar

from bunq_client.payloads.base import Payload, PayloadKind


@dataclass(frozen=True)
class InstallationPost(Payload):
    kind: ClassVar[PayloadKind] = PayloadKind.INSTALL
    method: ClassVar[str] = "POST"

    client_public_key: str

    @property
    def path(self) -> str:
        return "/v1/installation"

    def to_body(self) -> dict[str, Any]:
        return {"client_public_key": self.client_public_key}


@dataclass(frozen=True)
class DeviceServerPost(Payload):
    kind: ClassVar[PayloadKind] = PayloadKind.REGISTER_DEVICE
    method: ClassVar[str] = "POST"

    description: str
    secret: str  # the API key
    permitted_ips: tuple[str, ...] = field(default_factory=tuple)

    @property
    def path(self) -> str:
        return "/v1/device-server"

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"description": self.description, "secret": self.secret}
        # Omitted entirely when empty: bunq then locks the device to the calling IP
        if self.permitted_ips:
            body["permitted_ips"] = list(self.permitted_ips)
        return body


@dataclass(frozen=True)
class SessionServerPost(Payload):
    kind: ClassVar[PayloadKind] = PayloadKind.CREATE_SESSION
    method: ClassVar[str] = "POST"

    secret: str

    @property
    def path(self) -> str:
        return "/v1/session-server"

    def to_body(self) -> dict[str, Any]:
        return {"secret": self.secret}
