"""
twilly.resources.account
─────────────────────────
Twilio Accounts (2010-04-01 API): fetch, list, create, and update the
account and its subaccounts.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from twilly.core.http import API_BASE, Method
from twilly.pagination import Page, paginate
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client

ACCOUNTS_URL = f"{API_BASE}/2010-04-01/Accounts"


class Status(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    CLOSED = "closed"

    def __str__(self) -> str:
        return self.value


class Account(BaseModel):
    sid: str
    friendly_name: str
    status: Status
    owner_account_sid: str
    type: str
    uri: str
    date_created: str
    date_updated: str


class AccountPage(Page[Account]):
    items_key = "accounts"


class ListOrUpdateAccount(ParamsModel):
    friendly_name: str | None = None
    status: Status | None = None


class CreateAccount(ParamsModel):
    friendly_name: str | None = Field(default=None, max_length=64)


class Accounts:
    def __init__(self, client: Client) -> None:
        self.client = client

    async def get(self, sid: str | None = None) -> Account:
        """
        [Fetch an Account](https://www.twilio.com/docs/iam/api/account#fetch-an-account-resource)

        Defaults to the account the client is authenticated as.
        """
        sid = sid or self.client.account_sid
        return await self.client.send_request(Account, Method.GET, f"{ACCOUNTS_URL}/{sid}.json")

    async def list(
        self,
        friendly_name: str | None = None,
        status: Status | str | None = None,
    ) -> list[Account]:
        """
        [List Accounts](https://www.twilio.com/docs/iam/api/account#read-multiple-account-resources)

        Accounts are eagerly paged until all are retrieved.
        """
        params = validate_input(
            ListOrUpdateAccount, {"friendly_name": friendly_name, "status": status}
        )
        return await paginate(
            self.client, AccountPage, f"{ACCOUNTS_URL}.json", params, page_size=5
        )

    async def create(self, friendly_name: str | None = None) -> Account:
        """[Create a subaccount](https://www.twilio.com/docs/iam/api/account#create-an-account-resource)"""
        params = validate_input(CreateAccount, {"friendly_name": friendly_name})
        return await self.client.send_request(
            Account, Method.POST, f"{ACCOUNTS_URL}.json", params
        )

    async def update(
        self,
        sid: str,
        friendly_name: str | None = None,
        status: Status | str | None = None,
    ) -> Account:
        """
        [Update an Account](https://www.twilio.com/docs/iam/api/account#update-an-account-resource)

        Setting the status to closed is permanent.
        """
        params = validate_input(
            ListOrUpdateAccount, {"friendly_name": friendly_name, "status": status}
        )
        return await self.client.send_request(
            Account, Method.POST, f"{ACCOUNTS_URL}/{sid}.json", params
        )


__all__ = [
    "ACCOUNTS_URL",
    "Status",
    "Account",
    "AccountPage",
    "ListOrUpdateAccount",
    "CreateAccount",
    "Accounts",
]
