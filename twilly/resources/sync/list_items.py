"""
twilly.resources.sync.list_items
─────────────────────────────────
Items of a Twilio Sync List, addressed by their integer index.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from twilly.core.http import SYNC_BASE, Method
from twilly.pagination import Page, paginate
from twilly.resources.sync.map_items import Bounds, Order
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client


class SyncListItem(BaseModel):
    index: int
    account_sid: str
    service_sid: str
    list_sid: str
    url: str
    data: Any
    date_created: str
    date_updated: str
    date_expires: str | None = None
    created_by: str
    revision: str


class SyncListItemPage(Page[SyncListItem]):
    items_key = "items"


class CreateListItem(ParamsModel):
    data: dict[str, Any] | list[Any]
    ttl: int | None = None
    collection_ttl: int | None = None


class ListListItems(ParamsModel):
    order: Order | None = None
    # index of the first item to read
    from_: int | None = Field(default=None, alias="From")
    bounds: Bounds | None = None


class UpdateListItem(ParamsModel):
    data: Any = None
    ttl: int | None = None
    collection_ttl: int | None = None


def _items_url(service_sid: str, list_sid: str) -> str:
    return f"{SYNC_BASE}/Services/{service_sid}/Lists/{list_sid}/Items"


class ListItems:
    def __init__(self, client: Client, service_sid: str, list_sid: str) -> None:
        self.client = client
        self.service_sid = service_sid
        self.list_sid = list_sid

    async def create(
        self,
        data: Any,
        ttl: int | None = None,
        collection_ttl: int | None = None,
    ) -> SyncListItem:
        """
        [Create a List Item](https://www.twilio.com/docs/sync/api/listitem-resource#create-a-listitem-resource)

        The item is appended; Twilio assigns its index.
        """
        params = validate_input(
            CreateListItem, {"data": data, "ttl": ttl, "collection_ttl": collection_ttl}
        )
        return await self.client.send_request(
            SyncListItem, Method.POST, _items_url(self.service_sid, self.list_sid), params
        )

    async def list(
        self,
        order: Order | str | None = None,
        from_index: int | None = None,
        bounds: Bounds | str | None = None,
    ) -> list[SyncListItem]:
        """
        [List List Items](https://www.twilio.com/docs/sync/api/listitem-resource#read-multiple-listitem-resources)

        Items are eagerly paged until all are retrieved.
        """
        params = validate_input(
            ListListItems, {"order": order, "from_": from_index, "bounds": bounds}
        )
        return await paginate(
            self.client,
            SyncListItemPage,
            _items_url(self.service_sid, self.list_sid),
            params,
            page_size=50,
        )


class ListItem:
    def __init__(self, client: Client, service_sid: str, list_sid: str, index: int) -> None:
        self.client = client
        self.service_sid = service_sid
        self.list_sid = list_sid
        self.index = index

    @property
    def url(self) -> str:
        return f"{_items_url(self.service_sid, self.list_sid)}/{self.index}"

    async def get(self) -> SyncListItem:
        """[Fetch a List Item](https://www.twilio.com/docs/sync/api/listitem-resource#fetch-a-listitem-resource)"""
        return await self.client.send_request(SyncListItem, Method.GET, self.url)

    async def update(
        self,
        data: Any = None,
        ttl: int | None = None,
        collection_ttl: int | None = None,
        if_match: str | None = None,
    ) -> SyncListItem:
        """[Update a List Item](https://www.twilio.com/docs/sync/api/listitem-resource#update-a-listitem-resource)"""
        params = validate_input(
            UpdateListItem, {"data": data, "ttl": ttl, "collection_ttl": collection_ttl}
        )
        headers = {"If-Match": if_match} if if_match else None
        return await self.client.send_request(
            SyncListItem, Method.POST, self.url, params, headers
        )

    async def delete(self) -> None:
        """[Delete a List Item](https://www.twilio.com/docs/sync/api/listitem-resource#delete-a-listitem-resource)"""
        await self.client.send_request_and_ignore_response(Method.DELETE, self.url)


__all__ = [
    "SyncListItem",
    "SyncListItemPage",
    "CreateListItem",
    "ListListItems",
    "UpdateListItem",
    "ListItems",
    "ListItem",
]
