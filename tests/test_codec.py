"""Tests for bunq_client/codec/payload.py and the payload catalogue."""

import json

import pytest

from bunq_client.codec.payload import decode_body, encode_payload
from bunq_client.errors import DecodeError
from bunq_client.payloads.base import PayloadKind
from bunq_client.payloads.installation import DeviceServerPost, InstallationPost, SessionServerPost
from bunq_client.payloads.user import (
    MonetaryAccountList,
    PaymentCreate,
    PaymentList,
    UserGet,
    UserList,
)


class TestEncodePayload:

    def test_bodyless_payload_encodes_empty(self):
        assert encode_payload(UserList()) == b""

    def test_sorted_compact_json(self):
        payload = DeviceServerPost(description="laptop", secret="key", permitted_ips=("1.2.3.4",))
        assert encode_payload(payload) == (
            b'{"description":"laptop","permitted_ips":["1.2.3.4"],"secret":"key"}'
        )

    def test_deterministic(self):
        payload = PaymentCreate(
            user_id=1, monetary_account_id=2, amount="12.50", currency="EUR",
            counterparty_iban="NL02BUNQ0123456789", counterparty_name="Sugar Daddy",
            description="coffee",
        )
        assert encode_payload(payload) == encode_payload(payload)

    def test_non_ascii_kept_as_utf8(self):
        encoded = encode_payload(DeviceServerPost(description="café", secret="k"))
        assert "café".encode("utf-8") in encoded

    def test_empty_permitted_ips_omitted(self):
        body = json.loads(encode_payload(DeviceServerPost(description="d", secret="k")))
        assert "permitted_ips" not in body


class TestDecodeBody:

    def test_valid_json(self):
        assert decode_body(b'{"Response": []}') == {"Response": []}

    def test_empty_body_is_none(self):
        assert decode_body(b"") is None

    def test_malformed_raises(self):
        with pytest.raises(DecodeError):
            decode_body(b'{"Response": [')

    def test_invalid_utf8_raises(self):
        with pytest.raises(DecodeError):
            decode_body(b"\xc3\x28")


class TestPayloadCatalogue:

    @pytest.mark.parametrize("payload, kind, method, path", [
        (InstallationPost("pem"), PayloadKind.INSTALL, "POST", "/v1/installation"),
        (DeviceServerPost("d", "k"), PayloadKind.REGISTER_DEVICE, "POST", "/v1/device-server"),
        (SessionServerPost("k"), PayloadKind.CREATE_SESSION, "POST", "/v1/session-server"),
        (UserList(), PayloadKind.OTHER, "GET", "/v1/user"),
        (UserGet(7), PayloadKind.OTHER, "GET", "/v1/user/7"),
        (MonetaryAccountList(7), PayloadKind.OTHER, "GET", "/v1/user/7/monetary-account"),
        (PaymentList(7, 9), PayloadKind.OTHER, "GET", "/v1/user/7/monetary-account/9/payment"),
    ])
    def test_routing(self, payload, kind, method, path):
        assert payload.kind is kind
        assert payload.method == method
        assert payload.path == path

    def test_payment_create_body(self):
        payload = PaymentCreate(
            user_id=1, monetary_account_id=2, amount="0.10", currency="EUR",
            counterparty_iban="NL02BUNQ0123456789", counterparty_name="Jane",
        )
        assert payload.method == "POST"
        body = payload.to_body()
        assert body["amount"] == {"value": "0.10", "currency": "EUR"}
        assert body["counterparty_alias"]["type"] == "IBAN"
