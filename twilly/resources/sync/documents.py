"""
twilly.resources.sync.documents
────────────────────────────────
Twilio Sync Documents: a single JSON object per document, with optional
expiry and optimistic concurrency via revision / If-Match.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from twilly.core.http import SYNC_BASE, Method
from twilly.pagination import Page, paginate
from twilly.runtime.serialize import ParamsModel
from twilly.runtime.validate import validate_input

if TYPE_CHECKING:
    from twilly.client import Client


class Links(BaseModel):
    permissions: str


class SyncDocument(BaseModel):
    sid: str
    unique_name: str | None = None
    account_sid: str
    service_sid: str
    url: str
    data: Any
    date_created: str
    date_updated: str
    date_expires: str | None = None
    # client identity, or "system" when created over REST
    created_by: str
    links: Links
    revision: str


class DocumentPage(Page[SyncDocument]):
    items_key = "documents"


class CreateDocument(ParamsModel):
    unique_name: str | None = None
    data: Any = None
    ttl: int | None = None


class UpdateDocument(ParamsModel):
    data: Any = None
    ttl: int | None = None


def _documents_url(service_sid: str) -> str:
    return f"{SYNC_BASE}/Services/{service_sid}/Documents"


class Documents:
    def __init__(self, client: Client, service_sid: str) -> None:
        self.client = client
        self.service_sid = service_sid

    async def create(
        self,
        data: Any = None,
        unique_name: str | None = None,
        ttl: int | None = None,
    ) -> SyncDocument:
        """
        [Create a Document](https://www.twilio.com/docs/sync/api/document-resource#create-a-document-resource)

        *ttl* is the lifetime in seconds; omitted means the document never expires.
        """
        params = validate_input(
            CreateDocument, {"unique_name": unique_name, "data": data, "ttl": ttl}
        )
        return await self.client.send_request(
            SyncDocument, Method.POST, _documents_url(self.service_sid), params
        )

    async def list(self) -> list[SyncDocument]:
        """
        [List Documents](https://www.twilio.com/docs/sync/api/document-resource#read-multiple-document-resources)

        Documents are eagerly paged until all are retrieved.
        """
        return await paginate(
            self.client, DocumentPage, _documents_url(self.service_sid), page_size=50
        )


class Document:
    def __init__(self, client: Client, service_sid: str, sid: str) -> None:
        self.client = client
        self.service_sid = service_sid
        # SID or unique name
        self.sid = sid

    @property
    def url(self) -> str:
        return f"{_documents_url(self.service_sid)}/{self.sid}"

    async def get(self) -> SyncDocument:
        """[Fetch a Document](https://www.twilio.com/docs/sync/api/document-resource#fetch-a-document-resource)"""
        return await self.client.send_request(SyncDocument, Method.GET, self.url)

    async def update(
        self,
        data: Any = None,
        ttl: int | None = None,
        if_match: str | None = None,
    ) -> SyncDocument:
        """
        [Update a Document](https://www.twilio.com/docs/sync/api/document-resource#update-a-document-resource)

        With *if_match* set to a revision, Twilio rejects the update (412)
        unless the document is still at that revision.
        """
        params = validate_input(UpdateDocument, {"data": data, "ttl": ttl})
        headers = {"If-Match": if_match} if if_match else None
        return await self.client.send_request(
            SyncDocument, Method.POST, self.url, params, headers
        )

    async def delete(self) -> None:
        """[Delete a Document](https://www.twilio.com/docs/sync/api/document-resource#delete-a-document-resource)"""
        await self.client.send_request_and_ignore_response(Method.DELETE, self.url)


__all__ = [
    "SyncDocument",
    "DocumentPage",
    "CreateDocument",
    "UpdateDocument",
    "Documents",
    "Document",
]
