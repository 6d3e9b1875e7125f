"""
twilly.resources.serverless.services
─────────────────────────────────────
Twilio Serverless (Functions & Assets) Services.

    twilio.serverless().services().list()
    twilio.serverless().service("ZS...").environments().list()
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from twilly.core.http import SERVERLESS_BASE, Method
from twilly.pagination import Page, paginate
from twilly.resources.serverless.environments import Environment, Environments
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client

SERVICES_URL = f"{SERVERLESS_BASE}/Services"


class Links(BaseModel):
    environments: str
    functions: str
    assets: str
    builds: str


class ServerlessService(BaseModel):
    sid: str
    account_sid: str
    unique_name: str
    friendly_name: str
    include_credentials: bool
    ui_editable: bool
    domain_base: str
    date_created: str
    date_updated: str
    url: str
    links: Links


class ServerlessServicePage(Page[ServerlessService]):
    items_key = "services"


class CreateService(ParamsModel):
    unique_name: str
    friendly_name: str
    include_credentials: bool | None = None
    ui_editable: bool | None = None


class UpdateService(ParamsModel):
    friendly_name: str | None = None
    include_credentials: bool | None = None
    ui_editable: bool | None = None


class Serverless:
    def __init__(self, client: Client) -> None:
        self.client = client

    def services(self) -> Services:
        """General Serverless Service functions."""
        return Services(self.client)

    def service(self, sid: str) -> Service:
        """Functions relating to a known Serverless Service (SID or unique name)."""
        return Service(self.client, sid)


class Services:
    def __init__(self, client: Client) -> None:
        self.client = client

    async def create(self, unique_name: str, friendly_name: str, **fields: Any) -> ServerlessService:
        """[Create a Service](https://www.twilio.com/docs/serverless/api/resource/service#create-a-service-resource)"""
        params = validate_input(
            CreateService,
            {"unique_name": unique_name, "friendly_name": friendly_name, **fields},
        )
        return await self.client.send_request(
            ServerlessService, Method.POST, SERVICES_URL, params
        )

    async def list(self) -> list[ServerlessService]:
        """
        [List Services](https://www.twilio.com/docs/serverless/api/resource/service#read-multiple-service-resources)

        Services are eagerly paged until all are retrieved.
        """
        return await paginate(self.client, ServerlessServicePage, SERVICES_URL, page_size=20)


class Service:
    def __init__(self, client: Client, sid: str) -> None:
        self.client = client
        self.sid = sid

    @property
    def url(self) -> str:
        return f"{SERVICES_URL}/{self.sid}"

    async def get(self) -> ServerlessService:
        """[Fetch a Service](https://www.twilio.com/docs/serverless/api/resource/service#fetch-a-service-resource)"""
        return await self.client.send_request(ServerlessService, Method.GET, self.url)

    async def update(self, **fields: Any) -> ServerlessService:
        """[Update a Service](https://www.twilio.com/docs/serverless/api/resource/service#update-a-service-resource)"""
        params = validate_input(UpdateService, fields)
        return await self.client.send_request(
            ServerlessService, Method.POST, self.url, params
        )

    async def delete(self) -> None:
        """[Delete a Service](https://www.twilio.com/docs/serverless/api/resource/service#delete-a-service-resource)"""
        await self.client.send_request_and_ignore_response(Method.DELETE, self.url)

    def environments(self) -> Environments:
        return Environments(self.client, self.sid)

    def environment(self, sid: str) -> Environment:
        return Environment(self.client, self.sid, sid)


__all__ = [
    "SERVICES_URL",
    "ServerlessService",
    "ServerlessServicePage",
    "CreateService",
    "UpdateService",
    "Serverless",
    "Services",
    "Service",
]
