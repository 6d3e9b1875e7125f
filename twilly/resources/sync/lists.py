"""
twilly.resources.sync.lists
────────────────────────────
Twilio Sync Lists: ordered collections of JSON items, addressed by index.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from twilly.core.http import SYNC_BASE, Method
from twilly.pagination import Page, paginate
from twilly.resources.sync.list_items import ListItem, ListItems
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client


class Links(BaseModel):
    items: str
    permissions: str


class SyncList(BaseModel):
    sid: str
    unique_name: str | None = None
    account_sid: str
    service_sid: str
    url: str
    date_created: str
    date_updated: str
    date_expires: str | None = None
    created_by: str
    links: Links
    revision: str


class SyncListPage(Page[SyncList]):
    items_key = "lists"


class CreateList(ParamsModel):
    unique_name: str | None = None
    ttl: int | None = None


class UpdateList(ParamsModel):
    ttl: int | None = None


def _lists_url(service_sid: str) -> str:
    return f"{SYNC_BASE}/Services/{service_sid}/Lists"


class Lists:
    def __init__(self, client: Client, service_sid: str) -> None:
        self.client = client
        self.service_sid = service_sid

    async def create(self, unique_name: str | None = None, ttl: int | None = None) -> SyncList:
        """[Create a Sync List](https://www.twilio.com/docs/sync/api/list-resource#create-a-list-resource)"""
        params = validate_input(CreateList, {"unique_name": unique_name, "ttl": ttl})
        return await self.client.send_request(
            SyncList, Method.POST, _lists_url(self.service_sid), params
        )

    async def list(self) -> list[SyncList]:
        """
        [List Sync Lists](https://www.twilio.com/docs/sync/api/list-resource#read-multiple-list-resources)

        Lists are eagerly paged until all are retrieved.
        """
        return await paginate(
            self.client, SyncListPage, _lists_url(self.service_sid), page_size=50
        )


class List:
    def __init__(self, client: Client, service_sid: str, sid: str) -> None:
        self.client = client
        self.service_sid = service_sid
        # SID or unique name
        self.sid = sid

    @property
    def url(self) -> str:
        return f"{_lists_url(self.service_sid)}/{self.sid}"

    async def get(self) -> SyncList:
        """[Fetch a Sync List](https://www.twilio.com/docs/sync/api/list-resource#fetch-a-list-resource)"""
        return await self.client.send_request(SyncList, Method.GET, self.url)

    async def update(self, ttl: int | None = None) -> SyncList:
        """[Update a Sync List](https://www.twilio.com/docs/sync/api/list-resource#update-a-list-resource)"""
        params = validate_input(UpdateList, {"ttl": ttl})
        return await self.client.send_request(SyncList, Method.POST, self.url, params)

    async def delete(self) -> None:
        """
        [Delete a Sync List](https://www.twilio.com/docs/sync/api/list-resource#delete-a-list-resource)

        Deletes every item in the list as well.
        """
        await self.client.send_request_and_ignore_response(Method.DELETE, self.url)

    def items(self) -> ListItems:
        return ListItems(self.client, self.service_sid, self.sid)

    def item(self, index: int) -> ListItem:
        return ListItem(self.client, self.service_sid, self.sid, index)


__all__ = ["SyncList", "SyncListPage", "CreateList", "UpdateList", "Lists", "List"]
