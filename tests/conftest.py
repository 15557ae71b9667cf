"""Shared fixtures for the bunq client test suite."""

import json
from dataclasses import replace

import httpx
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from bunq_client.clients.models import Client
from bunq_client.config.settings import get_settings
from bunq_client.security.headers import SERVER_SIGNATURE_HEADER
from bunq_client.security.keys import generate_key_pair, public_key_pem
from bunq_client.security.response import verifiable_bytes
from bunq_client.security.signing import sign_bytes


@pytest.fixture(scope="session")
def client_key() -> rsa.RSAPrivateKey:
    """Client key pair (generated once; RSA generation is slow)."""
    return generate_key_pair()


@pytest.fixture(scope="session")
def server_key() -> rsa.RSAPrivateKey:
    """Key pair the fake server signs responses with."""
    return generate_key_pair()


@pytest.fixture
def session_client(client_key, server_key) -> Client:
    """A fully bootstrapped client with a verified server key."""
    return Client(
        api_key="sandbox-api-key",
        client_private_key=client_key,
        client_public_key=public_key_pem(client_key),
        server_public_key=public_key_pem(server_key),
        installation_token="I",
        session_token="S",
    )


@pytest.fixture
def unverified_client(session_client) -> Client:
    """Same credentials but no server public key (verification skipped)."""
    return replace(session_client, server_public_key=None)


@pytest.fixture
def override_settings(monkeypatch):
    """Factory fixture: set env vars and clear settings cache.

    Usage:
        override_settings(API_BASE_URL="https://api.test", REQUIRE_RESPONSE_SIGNATURE="true")
    """
    def _override(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        get_settings.cache_clear()

    yield _override

    get_settings.cache_clear()


def signed_response_headers(
    server_key: rsa.RSAPrivateKey,
    status: int,
    headers: list[tuple[str, str]],
    body: bytes,
) -> list[tuple[str, str]]:
    """Return `headers` plus an X-Bunq-Server-Signature over status, headers and body."""
    signature = sign_bytes(server_key, verifiable_bytes(status, headers, body))
    return headers + [(SERVER_SIGNATURE_HEADER, signature)]


def envelope(*objects: dict) -> bytes:
    """Encode objects in bunq's {"Response": [...]} envelope."""
    return json.dumps({"Response": list(objects)}).encode("utf-8")


def signed_httpx_response(
    server_key: rsa.RSAPrivateKey,
    status: int,
    body: bytes,
    headers: list[tuple[str, str]] | None = None,
) -> httpx.Response:
    base = headers if headers is not None else [("X-Bunq-Client-Response-Id", "resp-1")]
    return httpx.Response(
        status,
        headers=signed_response_headers(server_key, status, base, body),
        content=body,
    )
