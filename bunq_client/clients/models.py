"""Client (per-session credentials) model."""

from dataclasses import dataclass, field

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey


@dataclass(frozen=True)
class Client:
    api_key: str = ""
    client_private_key: RSAPrivateKey | None = field(default=None, repr=False)
    client_public_key: str = ""  # PEM, posted at installation
    server_public_key: str | None = None  # PEM key or certificate; None = unverified mode
    installation_token: str = ""
    session_token: str = ""
    headers: tuple[tuple[str, str], ...] = ()  # sent with every request
