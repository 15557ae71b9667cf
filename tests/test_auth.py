"""Tests for bunq_client/security/auth.py — credential selection."""

import pytest

from bunq_client.clients.models import Client
from bunq_client.errors import UsageError
from bunq_client.payloads.installation import DeviceServerPost, InstallationPost, SessionServerPost
from bunq_client.payloads.user import UserGet, UserList
from bunq_client.pipeline.models import build_request
from bunq_client.security.auth import authenticate
from bunq_client.security.headers import AUTHENTICATION_HEADER

CLIENT = Client(installation_token="I", session_token="S")


def _auth_values(request):
    return [v for n, v in request.headers if n == AUTHENTICATION_HEADER]


class TestAuthenticate:

    def test_install_attaches_nothing(self):
        request = build_request(InstallationPost("pem"))
        assert authenticate(request, CLIENT) is request

    def test_install_needs_no_tokens(self):
        request = build_request(InstallationPost("pem"))
        assert authenticate(request, Client()).headers == ()

    def test_device_registration_uses_installation_token(self):
        request = authenticate(build_request(DeviceServerPost("d", "k")), CLIENT)
        assert _auth_values(request) == ["I"]

    def test_session_creation_uses_installation_token(self):
        request = authenticate(build_request(SessionServerPost("k")), CLIENT)
        assert _auth_values(request) == ["I"]

    @pytest.mark.parametrize("payload", [UserList(), UserGet(1)])
    def test_other_kinds_use_session_token(self, payload):
        request = authenticate(build_request(payload), CLIENT)
        assert _auth_values(request) == ["S"]

    def test_prepended(self):
        request = build_request(UserList(), headers=[("X-Existing", "1")])
        request = authenticate(request, CLIENT)
        assert request.headers[0] == (AUTHENTICATION_HEADER, "S")
        assert request.headers[1] == ("X-Existing", "1")


class TestMissingTokens:

    def test_missing_session_token(self):
        with pytest.raises(UsageError, match="session token"):
            authenticate(build_request(UserList()), Client(installation_token="I"))

    def test_missing_installation_token(self):
        with pytest.raises(UsageError, match="installation token"):
            authenticate(build_request(SessionServerPost("k")), Client(session_token="S"))

    def test_session_token_does_not_substitute(self):
        """A session token is never used for bootstrap calls."""
        with pytest.raises(UsageError):
            authenticate(build_request(DeviceServerPost("d", "k")), Client(session_token="S"))
