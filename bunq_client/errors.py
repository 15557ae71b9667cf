"""Exception taxonomy for the request/response pipeline."""


class BunqClientError(Exception):
    """Base class for every error raised by this library."""


class UsageError(BunqClientError):
    """A precondition the caller controls is not met.

    Raised for a missing token, private key or API key, or for key material
    that cannot be decoded. Never retried.
    """


class VerificationError(BunqClientError):
    """The response signature did not verify against the server public key.

    This is a trust signal (tampering or a key mismatch), not a transient
    network fault.
    """


class TransportError(BunqClientError):
    """The network call failed before a response was received."""


class DecodeError(BunqClientError):
    """A response body could not be decoded."""
