"""User, monetary account and payment payloads."""

from dataclasses import dataclass
from typing import Any, ClassVar

from bunq_client.payloads.base import Payload


@dataclass(frozen=True)
class UserList(Payload):

    @property
    def path(self) -> str:
        return "/v1/user"


@dataclass(frozen=True)
class UserGet(Payload):
    user_id: int

    @property
    def path(self) -> str:
        return f"/v1/user/{self.user_id}"


@dataclass(frozen=True)
class MonetaryAccountList(Payload):
    user_id: int

    @property
    def path(self) -> str:
        return f"/v1/user/{self.user_id}/monetary-account"


@dataclass(frozen=True)
class PaymentList(Payload):
    user_id: int
    monetary_account_id: int

    @property
    def path(self) -> str:
        return f"/v1/user/{self.user_id}/monetary-account/{self.monetary_account_id}/payment"


@dataclass(frozen=True)
class PaymentCreate(Payload):
    method: ClassVar[str] = "POST"

    user_id: int
    monetary_account_id: int
    amount: str  # decimal string, e.g. "12.50"
    currency: str
    counterparty_iban: str
    counterparty_name: str
    description: str = ""

    @property
    def path(self) -> str:
        return f"/v1/user/{self.user_id}/monetary-account/{self.monetary_account_id}/payment"

    def to_body(self) -> dict[str, Any]:
        return {
            "amount": {"value": self.amount, "currency": self.currency},
            "counterparty_alias": {
                "type": "IBAN",
                "value": self.counterparty_iban,
                "name": self.counterparty_name,
            },
            "description": self.description,
        }
