"""
twilly.resources.serverless.environments
─────────────────────────────────────────
Environments of a Serverless Service (dev, stage, production, ...).
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel

from twilly.core.http import SERVERLESS_BASE, Method
from twilly.pagination import Page, paginate
from twilly.resources.serverless.logs import Log, Logs
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client


class ServerlessEnvironment(BaseModel):
    sid: str
    account_sid: str
    service_sid: str
    build_sid: str | None = None
    unique_name: str
    domain_suffix: str | None = None
    domain_name: str
    url: str
    date_created: str
    date_updated: str


class EnvironmentPage(Page[ServerlessEnvironment]):
    items_key = "environments"


class CreateEnvironment(ParamsModel):
    unique_name: str
    domain_suffix: str | None = None


def _environments_url(service_sid: str) -> str:
    return f"{SERVERLESS_BASE}/Services/{service_sid}/Environments"


class Environments:
    def __init__(self, client: Client, service_sid: str) -> None:
        self.client = client
        self.service_sid = service_sid

    async def create(
        self, unique_name: str, domain_suffix: str | None = None
    ) -> ServerlessEnvironment:
        """[Create an Environment](https://www.twilio.com/docs/serverless/api/resource/environment#create-an-environment-resource)"""
        params = validate_input(
            CreateEnvironment, {"unique_name": unique_name, "domain_suffix": domain_suffix}
        )
        return await self.client.send_request(
            ServerlessEnvironment, Method.POST, _environments_url(self.service_sid), params
        )

    async def list(self) -> list[ServerlessEnvironment]:
        """
        [List Environments](https://www.twilio.com/docs/serverless/api/resource/environment#read-multiple-environment-resources)

        Environments are eagerly paged until all are retrieved.
        """
        return await paginate(
            self.client, EnvironmentPage, _environments_url(self.service_sid), page_size=50
        )


class Environment:
    def __init__(self, client: Client, service_sid: str, sid: str) -> None:
        self.client = client
        self.service_sid = service_sid
        self.sid = sid

    @property
    def url(self) -> str:
        return f"{_environments_url(self.service_sid)}/{self.sid}"

    async def get(self) -> ServerlessEnvironment:
        """[Fetch an Environment](https://www.twilio.com/docs/serverless/api/resource/environment#fetch-an-environment-resource)"""
        return await self.client.send_request(ServerlessEnvironment, Method.GET, self.url)

    async def delete(self) -> None:
        """[Delete an Environment](https://www.twilio.com/docs/serverless/api/resource/environment#delete-an-environment-resource)"""
        await self.client.send_request_and_ignore_response(Method.DELETE, self.url)

    def logs(self) -> Logs:
        return Logs(self.client, self.service_sid, self.sid)

    def log(self, sid: str) -> Log:
        return Log(self.client, self.service_sid, self.sid, sid)


__all__ = [
    "ServerlessEnvironment",
    "EnvironmentPage",
    "CreateEnvironment",
    "Environments",
    "Environment",
]
