"""
twilly.resources.conversation
──────────────────────────────
Twilio Conversations: fetch, list, update and delete conversations.
"""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from twilly.core.http import CONVERSATIONS_BASE, Method
from twilly.pagination import Page, paginate
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client

CONVERSATIONS_URL = f"{CONVERSATIONS_BASE}/Conversations"


class State(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    CLOSED = "closed"

    def __str__(self) -> str:
        return self.value


class Timers(BaseModel):
    date_inactive: str | None = None
    date_closed: str | None = None


class Links(BaseModel):
    participants: str
    messages: str
    webhooks: str


class Conversation(BaseModel):
    sid: str
    account_sid: str
    chat_service_sid: str
    messaging_service_sid: str | None = None
    unique_name: str | None = None
    friendly_name: str | None = None
    date_created: str
    date_updated: str
    state: State
    url: str
    attributes: str
    timers: Timers = Field(default_factory=Timers)
    links: Links


class ConversationPage(Page[Conversation]):
    items_key = "conversations"


class ListConversations(ParamsModel):
    start_date: date | None = None
    end_date: date | None = None
    state: State | None = None


class UpdateConversation(ParamsModel):
    unique_name: str | None = None
    friendly_name: str | None = None
    state: State | None = None
    attributes: str | None = None
    # ISO 8601 durations, e.g. PT10M
    timers_inactive: str | None = Field(default=None, alias="Timers.Inactive")
    timers_closed: str | None = Field(default=None, alias="Timers.Closed")


class Conversations:
    def __init__(self, client: Client) -> None:
        self.client = client

    async def get(self, sid: str) -> Conversation:
        """
        [Fetch a Conversation](https://www.twilio.com/docs/conversations/api/conversation-resource#fetch-a-conversation-resource)

        *sid* may also be the conversation's unique name.
        """
        return await self.client.send_request(
            Conversation, Method.GET, f"{CONVERSATIONS_URL}/{sid}"
        )

    async def list(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        state: State | str | None = None,
    ) -> list[Conversation]:
        """
        [List Conversations](https://www.twilio.com/docs/conversations/api/conversation-resource#read-multiple-conversation-resources)

        Conversations are eagerly paged until all are retrieved.
        """
        params = validate_input(
            ListConversations,
            {"start_date": start_date, "end_date": end_date, "state": state},
        )
        return await paginate(self.client, ConversationPage, CONVERSATIONS_URL, params)

    async def update(self, sid: str, **fields: str | State | None) -> Conversation:
        """
        [Update a Conversation](https://www.twilio.com/docs/conversations/api/conversation-resource#update-conversation)

        Accepts the UpdateConversation fields as keyword arguments.
        """
        params = validate_input(UpdateConversation, fields)
        return await self.client.send_request(
            Conversation, Method.POST, f"{CONVERSATIONS_URL}/{sid}", params
        )

    async def close(self, sid: str) -> Conversation:
        return await self.update(sid, state=State.CLOSED)

    async def delete(self, sid: str) -> None:
        """[Delete a Conversation](https://www.twilio.com/docs/conversations/api/conversation-resource#delete-a-conversation-resource)"""
        await self.client.send_request_and_ignore_response(
            Method.DELETE, f"{CONVERSATIONS_URL}/{sid}"
        )


__all__ = [
    "CONVERSATIONS_URL",
    "State",
    "Timers",
    "Links",
    "Conversation",
    "ConversationPage",
    "ListConversations",
    "UpdateConversation",
    "Conversations",
]
