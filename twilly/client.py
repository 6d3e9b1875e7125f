"""
twilly.client
──────────────
The Twilio client. Every call made by every resource module goes through
one of two coroutines here:

    send_request(model, method, url, params, headers)      → model instance
    send_request_and_ignore_response(method, url, ...)     → None

Both send exactly one authenticated request and classify the outcome:
transport failure → NetworkError, 2xx → parsed body (or ParseError),
anything else → ApiError carrying Twilio's error body (or ParseError when
that body is unreadable). Nothing is retried.

Backed by: httpx.AsyncClient (basic auth, timeout from TWILLY_TIMEOUT).
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Type, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError

from twilly.core.config import get_config
from twilly.core.credentials import Credentials
from twilly.core.errors import (
    ApiError,
    NetworkError,
    ParseError,
    TwilioApiError,
    ValidationError,
)
from twilly.core.http import Method, is_success
from twilly.core.logging import get_logger
from twilly.resources.account import Accounts
from twilly.resources.conversation import Conversations
from twilly.resources.participant_conversation import ParticipantConversations
from twilly.resources.serverless.services import Serverless
from twilly.resources.sync.services import Sync
from twilly.runtime.serialize import Params, deserialize, encode_params

T = TypeVar("T")

log = get_logger(__name__)


class Client:
    """
    Async client for the Twilio REST APIs.

    Usage::

        async with Client(Credentials.build(sid, token)) as twilio:
            account = await twilio.accounts().get()
            conversations = await twilio.conversations().list()
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.credentials = credentials
        self._http = httpx.AsyncClient(
            auth=credentials.basic_auth(),
            timeout=timeout if timeout is not None else get_config().timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @property
    def account_sid(self) -> str:
        return self.credentials.account_sid

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"Client(account_sid={self.account_sid!r})"

    # ── Dispatch ──────────────────────────────────────────────────────────────

    async def send_request(
        self,
        model: Type[T],
        method: Method | str,
        url: str,
        params: Params | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> T:
        """
        Send one request and parse a 2xx body into *model*.

        Raises NetworkError, ApiError or ParseError; see module docstring.
        """
        response = await self._send_http_request(method, url, params, headers)
        self._raise_for_status(response)
        try:
            return deserialize(response.content, model)
        except PydanticValidationError as exc:
            raise ParseError(exc, status=response.status_code) from exc

    async def send_request_and_ignore_response(
        self,
        method: Method | str,
        url: str,
        params: Params | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Like send_request, for calls whose success body is irrelevant (deletes)."""
        response = await self._send_http_request(method, url, params, headers)
        self._raise_for_status(response)

    async def _send_http_request(
        self,
        method: Method | str,
        url: str,
        params: Params | None,
        headers: Mapping[str, str] | None,
    ) -> httpx.Response:
        try:
            method = Method(method)
        except ValueError as exc:
            raise ValidationError(f"unsupported HTTP method {method!r}") from exc
        pairs = encode_params(params)
        kwargs: dict[str, Any] = {}
        if pairs:
            if method.uses_query:
                kwargs["params"] = pairs
            else:
                # repeated names stay repeated in the form body
                form: dict[str, list[str]] = {}
                for name, value in pairs:
                    form.setdefault(name, []).append(value)
                kwargs["data"] = form
        if headers:
            kwargs["headers"] = dict(headers)

        log.debug(
            "twilio.request",
            method=method.value,
            url=url,
            params=[name for name, _ in pairs],
        )
        try:
            response = await self._http.request(method.value, url, **kwargs)
        except httpx.RequestError as exc:
            log.debug("twilio.network_error", method=method.value, url=url, error=str(exc))
            raise NetworkError(exc) from exc

        log.debug("twilio.response", method=method.value, url=url, status=response.status_code)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if is_success(response.status_code):
            return
        try:
            body = deserialize(response.content, TwilioApiError)
        except PydanticValidationError as exc:
            raise ParseError(exc, status=response.status_code) from exc
        raise ApiError(body)

    # ── Resources ─────────────────────────────────────────────────────────────

    def accounts(self) -> Accounts:
        """Account related functions."""
        return Accounts(self)

    def conversations(self) -> Conversations:
        """Conversation related functions."""
        return Conversations(self)

    def participant_conversations(self) -> ParticipantConversations:
        """Conversations a given identity or address participates in."""
        return ParticipantConversations(self)

    def sync(self) -> Sync:
        """Sync related functions."""
        return Sync(self)

    def serverless(self) -> Serverless:
        """Serverless related functions."""
        return Serverless(self)


__all__ = ["Client"]
