"""
twilly.resources.serverless.logs
─────────────────────────────────
Function logs of a Serverless Environment. Twilio keeps them for a limited
window and defaults a listing to the last day when no range is given.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, field_serializer

from twilly.core.http import SERVERLESS_BASE, Method
from twilly.pagination import Page, paginate
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client

LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class Level(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value.title()


class ServerlessLog(BaseModel):
    sid: str
    account_sid: str
    service_sid: str
    environment_sid: str
    build_sid: str
    deployment_sid: str
    function_sid: str
    request_sid: str
    level: Level
    message: str
    date_created: str
    url: str


class LogsPage(Page[ServerlessLog]):
    items_key = "logs"


class ListLogs(ParamsModel):
    function_sid: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    @field_serializer("start_date", "end_date")
    def format_date(self, value: datetime | None) -> str | None:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime(LOG_DATE_FORMAT)


def _logs_url(service_sid: str, environment_sid: str) -> str:
    return f"{SERVERLESS_BASE}/Services/{service_sid}/Environments/{environment_sid}/Logs"


class Logs:
    def __init__(self, client: Client, service_sid: str, environment_sid: str) -> None:
        self.client = client
        self.service_sid = service_sid
        self.environment_sid = environment_sid

    async def list(
        self,
        function_sid: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> list[ServerlessLog]:
        """
        [List Logs](https://www.twilio.com/docs/serverless/api/resource/logs#read-multiple-log-resources)

        Dates are sent in UTC. Without *start_date* Twilio returns the last
        day; without *end_date* it reads up to now. Logs are eagerly paged
        until all are retrieved.
        """
        params = validate_input(
            ListLogs,
            {"function_sid": function_sid, "start_date": start_date, "end_date": end_date},
        )
        return await paginate(
            self.client,
            LogsPage,
            _logs_url(self.service_sid, self.environment_sid),
            params,
            page_size=500,
        )


class Log:
    def __init__(
        self, client: Client, service_sid: str, environment_sid: str, sid: str
    ) -> None:
        self.client = client
        self.service_sid = service_sid
        self.environment_sid = environment_sid
        self.sid = sid

    @property
    def url(self) -> str:
        return f"{_logs_url(self.service_sid, self.environment_sid)}/{self.sid}"

    async def get(self) -> ServerlessLog:
        """[Fetch a Log](https://www.twilio.com/docs/serverless/api/resource/logs#fetch-a-log-resource)"""
        return await self.client.send_request(ServerlessLog, Method.GET, self.url)


__all__ = [
    "LOG_DATE_FORMAT",
    "Level",
    "ServerlessLog",
    "LogsPage",
    "ListLogs",
    "Logs",
    "Log",
]
