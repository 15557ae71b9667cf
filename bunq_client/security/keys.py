"""RSA key helpers: generation, PEM export and PEM/certificate decoding."""

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from bunq_client.errors import UsageError

CERTIFICATE_MARKER = "-----BEGIN CERTIFICATE-----"


def generate_key_pair(key_size: int = 2048) -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=key_size)


def public_key_pem(private_key: rsa.RSAPrivateKey) -> str:
    """SubjectPublicKeyInfo PEM of the key pair, as posted at installation."""
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


def private_key_pem(private_key: rsa.RSAPrivateKey) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


def load_private_key(pem: str | bytes) -> rsa.RSAPrivateKey:
    data = pem.encode("ascii") if isinstance(pem, str) else pem
    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError) as e:
        raise UsageError(f"Client private key could not be decoded: {e}") from e
    if not isinstance(key, rsa.RSAPrivateKey):
        raise UsageError("Client private key must be an RSA key")
    return key


def load_server_public_key(pem: str | bytes) -> rsa.RSAPublicKey:
    """Decode the server public key from a PEM public key or X.509 certificate."""
    data = pem.encode("ascii") if isinstance(pem, str) else pem
    try:
        if CERTIFICATE_MARKER.encode("ascii") in data:
            key = x509.load_pem_x509_certificate(data).public_key()
        else:
            key = serialization.load_pem_public_key(data)
    except ValueError as e:
        raise UsageError(f"Server public key could not be decoded: {e}") from e
    if not isinstance(key, rsa.RSAPublicKey):
        raise UsageError("Server public key must be an RSA key")
    return key
