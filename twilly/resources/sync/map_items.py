"""
twilly.resources.sync.map_items
────────────────────────────────
Items of a Twilio Sync Map, addressed by key.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from twilly.core.http import SYNC_BASE, Method
from twilly.pagination import Page, paginate
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client


class Order(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Bounds(str, Enum):
    INCLUSIVE = "inclusive"
    EXCLUSIVE = "exclusive"


class SyncMapItem(BaseModel):
    key: str
    account_sid: str
    service_sid: str
    map_sid: str
    url: str
    data: Any
    date_created: str
    date_updated: str
    date_expires: str | None = None
    created_by: str
    revision: str


class SyncMapItemPage(Page[SyncMapItem]):
    items_key = "items"


class CreateMapItem(ParamsModel):
    key: str
    data: dict[str, Any] | list[Any]
    # seconds; collection_ttl applies to the parent map
    ttl: int | None = None
    collection_ttl: int | None = None


class ListMapItems(ParamsModel):
    order: Order | None = None
    # key of the first item to read
    from_: str | None = Field(default=None, alias="From")
    # whether the `from` item itself is included; Twilio defaults to inclusive
    bounds: Bounds | None = None


class UpdateMapItem(ParamsModel):
    data: Any = None
    ttl: int | None = None
    # only honoured together with data or ttl
    collection_ttl: int | None = None


def _items_url(service_sid: str, map_sid: str) -> str:
    return f"{SYNC_BASE}/Services/{service_sid}/Maps/{map_sid}/Items"


class MapItems:
    def __init__(self, client: Client, service_sid: str, map_sid: str) -> None:
        self.client = client
        self.service_sid = service_sid
        self.map_sid = map_sid

    async def create(
        self,
        key: str,
        data: Any,
        ttl: int | None = None,
        collection_ttl: int | None = None,
    ) -> SyncMapItem:
        """[Create a Map Item](https://www.twilio.com/docs/sync/api/map-item-resource#create-a-mapitem-resource)"""
        params = validate_input(
            CreateMapItem,
            {"key": key, "data": data, "ttl": ttl, "collection_ttl": collection_ttl},
        )
        return await self.client.send_request(
            SyncMapItem, Method.POST, _items_url(self.service_sid, self.map_sid), params
        )

    async def list(
        self,
        order: Order | str | None = None,
        from_key: str | None = None,
        bounds: Bounds | str | None = None,
    ) -> list[SyncMapItem]:
        """
        [List Map Items](https://www.twilio.com/docs/sync/api/map-item-resource#read-multiple-mapitem-resources)

        Items are eagerly paged until all are retrieved.
        """
        params = validate_input(
            ListMapItems, {"order": order, "from_": from_key, "bounds": bounds}
        )
        return await paginate(
            self.client,
            SyncMapItemPage,
            _items_url(self.service_sid, self.map_sid),
            params,
            page_size=50,
        )


class MapItem:
    def __init__(self, client: Client, service_sid: str, map_sid: str, key: str) -> None:
        self.client = client
        self.service_sid = service_sid
        self.map_sid = map_sid
        self.key = key

    @property
    def url(self) -> str:
        return f"{_items_url(self.service_sid, self.map_sid)}/{self.key}"

    async def get(self) -> SyncMapItem:
        """[Fetch a Map Item](https://www.twilio.com/docs/sync/api/map-item-resource#fetch-a-mapitem-resource)"""
        return await self.client.send_request(SyncMapItem, Method.GET, self.url)

    async def update(
        self,
        data: Any = None,
        ttl: int | None = None,
        collection_ttl: int | None = None,
        if_match: str | None = None,
    ) -> SyncMapItem:
        """[Update a Map Item](https://www.twilio.com/docs/sync/api/map-item-resource#update-a-mapitem-resource)"""
        params = validate_input(
            UpdateMapItem, {"data": data, "ttl": ttl, "collection_ttl": collection_ttl}
        )
        headers = {"If-Match": if_match} if if_match else None
        return await self.client.send_request(
            SyncMapItem, Method.POST, self.url, params, headers
        )

    async def delete(self) -> None:
        """[Delete a Map Item](https://www.twilio.com/docs/sync/api/map-item-resource#delete-a-mapitem-resource)"""
        await self.client.send_request_and_ignore_response(Method.DELETE, self.url)


__all__ = [
    "Order",
    "Bounds",
    "SyncMapItem",
    "SyncMapItemPage",
    "CreateMapItem",
    "ListMapItems",
    "UpdateMapItem",
    "MapItems",
    "MapItem",
]
