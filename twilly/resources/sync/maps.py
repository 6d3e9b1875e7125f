"""
twilly.resources.sync.maps
───────────────────────────
Twilio Sync Maps: key-addressed collections of JSON items.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from twilly.core.http import SYNC_BASE, Method
from twilly.pagination import Page, paginate
from twilly.resources.sync.map_items import MapItem, MapItems
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client


class Links(BaseModel):
    items: str
    permissions: str


class SyncMap(BaseModel):
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


class SyncMapPage(Page[SyncMap]):
    items_key = "maps"


class CreateMap(ParamsModel):
    unique_name: str | None = None
    ttl: int | None = None


class UpdateMap(ParamsModel):
    ttl: int | None = None


def _maps_url(service_sid: str) -> str:
    return f"{SYNC_BASE}/Services/{service_sid}/Maps"


class Maps:
    def __init__(self, client: Client, service_sid: str) -> None:
        self.client = client
        self.service_sid = service_sid

    async def create(self, unique_name: str | None = None, ttl: int | None = None) -> SyncMap:
        """[Create a Sync Map](https://www.twilio.com/docs/sync/api/map-resource#create-a-syncmap-resource)"""
        params = validate_input(CreateMap, {"unique_name": unique_name, "ttl": ttl})
        return await self.client.send_request(
            SyncMap, Method.POST, _maps_url(self.service_sid), params
        )

    async def list(self) -> list[SyncMap]:
        """
        [List Sync Maps](https://www.twilio.com/docs/sync/api/map-resource#read-multiple-syncmap-resources)

        Maps are eagerly paged until all are retrieved.
        """
        return await paginate(
            self.client, SyncMapPage, _maps_url(self.service_sid), page_size=20
        )


class Map:
    def __init__(self, client: Client, service_sid: str, sid: str) -> None:
        self.client = client
        self.service_sid = service_sid
        self.sid = sid

    @property
    def url(self) -> str:
        return f"{_maps_url(self.service_sid)}/{self.sid}"

    async def get(self) -> SyncMap:
        """[Fetch a Sync Map](https://www.twilio.com/docs/sync/api/map-resource#fetch-a-syncmap-resource)"""
        return await self.client.send_request(SyncMap, Method.GET, self.url)

    async def update(self, ttl: int | None = None) -> SyncMap:
        """[Update a Sync Map](https://www.twilio.com/docs/sync/api/map-resource#update-a-syncmap-resource)"""
        params = validate_input(UpdateMap, {"ttl": ttl})
        return await self.client.send_request(SyncMap, Method.POST, self.url, params)

    async def delete(self) -> None:
        """
        [Delete a Sync Map](https://www.twilio.com/docs/sync/api/map-resource#delete-a-sync-map-resource)

        Deletes every item in the map as well.
        """
        await self.client.send_request_and_ignore_response(Method.DELETE, self.url)

    def items(self) -> MapItems:
        return MapItems(self.client, self.service_sid, self.sid)

    def item(self, key: str) -> MapItem:
        return MapItem(self.client, self.service_sid, self.sid, key)


__all__ = ["SyncMap", "SyncMapPage", "CreateMap", "UpdateMap", "Maps", "Map"]
