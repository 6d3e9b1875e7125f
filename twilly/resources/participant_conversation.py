"""
twilly.resources.participant_conversation
──────────────────────────────────────────
Conversations a participant belongs to, looked up by chat identity or by
messaging address (e.g. a phone number).
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from twilly.core.http import CONVERSATIONS_BASE
from twilly.pagination import Page, paginate
from twilly.resources.conversation import State, Timers
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client

PARTICIPANT_CONVERSATIONS_URL = f"{CONVERSATIONS_BASE}/ParticipantConversations"


class ParticipantMessagingBinding(BaseModel):
    address: str
    proxy_address: str
    type: str
    level: str | None = None
    name: str | None = None
    projected_address: str | None = None


class Links(BaseModel):
    participant: str
    conversation: str


class ParticipantConversation(BaseModel):
    account_sid: str
    chat_service_sid: str
    participant_sid: str
    participant_user_sid: str | None = None
    participant_identity: str | None = None
    participant_messaging_binding: ParticipantMessagingBinding | None = None
    conversation_sid: str
    conversation_unique_name: str | None = None
    conversation_friendly_name: str | None = None
    conversation_attributes: str
    conversation_date_created: str
    conversation_date_updated: str
    conversation_created_by: str
    conversation_state: State
    conversation_timers: Timers = Field(default_factory=Timers)
    links: Links


class ParticipantConversationPage(Page[ParticipantConversation]):
    items_key = "conversations"


class ListParticipantConversations(ParamsModel):
    identity: str | None = None
    address: str | None = None


class ParticipantConversations:
    def __init__(self, client: Client) -> None:
        self.client = client

    async def list(
        self,
        identity: str | None = None,
        address: str | None = None,
    ) -> list[ParticipantConversation]:
        """
        [List Participant Conversations](https://www.twilio.com/docs/conversations/api/participant-conversation-resource)

        Filter by *identity* (chat participants) or *address* (SMS, WhatsApp).
        Results are eagerly paged until all are retrieved.
        """
        params = validate_input(
            ListParticipantConversations, {"identity": identity, "address": address}
        )
        return await paginate(
            self.client, ParticipantConversationPage, PARTICIPANT_CONVERSATIONS_URL, params
        )


__all__ = [
    "PARTICIPANT_CONVERSATIONS_URL",
    "ParticipantMessagingBinding",
    "ParticipantConversation",
    "ParticipantConversationPage",
    "ListParticipantConversations",
    "ParticipantConversations",
]
