"""
twilly.resources.sync.services
───────────────────────────────
Twilio Sync Services, the containers for documents, lists and maps.

    twilio.sync().services().list()
    twilio.sync().service("IS...").documents().list()
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, field_validator

from twilly.core.http import SYNC_BASE, Method
from twilly.pagination import Page, paginate
from twilly.resources.sync.documents import Document, Documents
from twilly.resources.sync.lists import List, Lists
from twilly.resources.sync.maps import Map, Maps
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client

SERVICES_URL = f"{SYNC_BASE}/Services"

DEBOUNCING_WINDOW_MIN_MS = 1_000
DEBOUNCING_WINDOW_MAX_MS = 30_000


class Links(BaseModel):
    documents: str
    lists: str
    maps: str
    streams: str


class SyncService(BaseModel):
    sid: str
    unique_name: str | None = None
    account_sid: str
    friendly_name: str | None = None
    date_created: str
    date_updated: str
    url: str
    webhook_url: str | None = None
    webhooks_from_rest_enabled: bool
    acl_enabled: bool
    # endpoint_disconnected is delayed by the window below when enabled
    reachability_debouncing_enabled: bool
    reachability_debouncing_window: int
    links: Links


class SyncServicePage(Page[SyncService]):
    items_key = "services"


class ServiceParams(ParamsModel):
    """Parameters for creating or updating a Sync Service."""

    friendly_name: str | None = None
    webhook_url: str | None = None
    reachability_webhooks_enabled: bool | None = None
    acl_enabled: bool | None = None
    reachability_debouncing_enabled: bool | None = None
    reachability_debouncing_window: int | None = None
    webhooks_from_rest_enabled: bool | None = None

    @field_validator("reachability_debouncing_window")
    @classmethod
    def validate_window(cls, v: int | None) -> int | None:
        if v is None:
            return v
        if v < DEBOUNCING_WINDOW_MIN_MS:
            raise ValueError(
                "Reachability debouncing window must be greater than 1000 milliseconds"
            )
        if v > DEBOUNCING_WINDOW_MAX_MS:
            raise ValueError(
                "Reachability debouncing window must be less than 30,000 milliseconds"
            )
        return v


class Sync:
    def __init__(self, client: Client) -> None:
        self.client = client

    def services(self) -> Services:
        """General Sync Service functions."""
        return Services(self.client)

    def service(self, sid: str) -> Service:
        """Functions relating to a known Sync Service (SID or unique name)."""
        return Service(self.client, sid)


class Services:
    def __init__(self, client: Client) -> None:
        self.client = client

    async def create(self, **fields: Any) -> SyncService:
        """
        [Create a Sync Service](https://www.twilio.com/docs/sync/api/service#create-a-service-resource)

        Accepts the ServiceParams fields as keyword arguments. An out of range
        reachability_debouncing_window raises ValidationError without a request.
        """
        params = validate_input(ServiceParams, fields)
        return await self.client.send_request(SyncService, Method.POST, SERVICES_URL, params)

    async def list(self) -> list[SyncService]:
        """
        [List Sync Services](https://www.twilio.com/docs/sync/api/service#read-multiple-service-resources)

        Services are eagerly paged until all are retrieved.
        """
        return await paginate(self.client, SyncServicePage, SERVICES_URL, page_size=20)


class Service:
    def __init__(self, client: Client, sid: str) -> None:
        self.client = client
        self.sid = sid

    @property
    def url(self) -> str:
        return f"{SERVICES_URL}/{self.sid}"

    async def get(self) -> SyncService:
        """[Fetch a Sync Service](https://www.twilio.com/docs/sync/api/service#fetch-a-service-resource)"""
        return await self.client.send_request(SyncService, Method.GET, self.url)

    async def update(self, **fields: Any) -> SyncService:
        """[Update a Sync Service](https://www.twilio.com/docs/sync/api/service#update-a-service-resource)"""
        params = validate_input(ServiceParams, fields)
        return await self.client.send_request(SyncService, Method.POST, self.url, params)

    async def delete(self) -> None:
        """[Delete a Sync Service](https://www.twilio.com/docs/sync/api/service#delete-a-service-resource)"""
        await self.client.send_request_and_ignore_response(Method.DELETE, self.url)

    def documents(self) -> Documents:
        return Documents(self.client, self.sid)

    def document(self, sid: str) -> Document:
        return Document(self.client, self.sid, sid)

    def maps(self) -> Maps:
        return Maps(self.client, self.sid)

    def map(self, sid: str) -> Map:
        return Map(self.client, self.sid, sid)

    def lists(self) -> Lists:
        return Lists(self.client, self.sid)

    def list(self, sid: str) -> List:
        return List(self.client, self.sid, sid)


__all__ = [
    "SERVICES_URL",
    "SyncService",
    "SyncServicePage",
    "ServiceParams",
    "Sync",
    "Services",
    "Service",
]
