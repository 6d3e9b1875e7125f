"""Tests for twilly.resources: URLs, parameters and typed results per resource."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from twilly.core.errors import ApiError, ValidationError
from twilly.resources.account import Status
from twilly.resources.conversation import State
from twilly.resources.serverless.logs import Level
from twilly.resources.sync.map_items import Order

from conftest import ACCOUNT_SID

SYNC_SERVICE = "IS" + "1" * 32
SERVERLESS_SERVICE = "ZS" + "1" * 32
ENVIRONMENT = "ZE" + "1" * 32
CONVERSATION = "CH" + "1" * 32
SUBACCOUNT = "AC" + "2" * 32
STAMP = "2024-02-01T10:00:00Z"


def v1_page(key: str, items: list[dict]) -> dict:
    return {
        key: items,
        "meta": {"page": 0, "page_size": 50, "next_page_url": None, "key": key},
    }


def account(sid: str = ACCOUNT_SID, **overrides) -> dict:
    body = {
        "sid": sid,
        "friendly_name": "Main",
        "status": "active",
        "owner_account_sid": ACCOUNT_SID,
        "type": "Full",
        "uri": f"/2010-04-01/Accounts/{sid}.json",
        "date_created": STAMP,
        "date_updated": STAMP,
    }
    body.update(overrides)
    return body


def conversation(sid: str = CONVERSATION, state: str = "active") -> dict:
    url = f"https://conversations.twilio.com/v1/Conversations/{sid}"
    return {
        "sid": sid,
        "account_sid": ACCOUNT_SID,
        "chat_service_sid": "IS" + "9" * 32,
        "unique_name": None,
        "friendly_name": "Support",
        "date_created": STAMP,
        "date_updated": STAMP,
        "state": state,
        "url": url,
        "attributes": "{}",
        "timers": {},
        "links": {
            "participants": f"{url}/Participants",
            "messages": f"{url}/Messages",
            "webhooks": f"{url}/Webhooks",
        },
    }


def participant_conversation(state: str = "active") -> dict:
    return {
        "account_sid": ACCOUNT_SID,
        "chat_service_sid": "IS" + "9" * 32,
        "participant_sid": "MB" + "1" * 32,
        "participant_identity": "alice",
        "conversation_sid": CONVERSATION,
        "conversation_attributes": "{}",
        "conversation_date_created": STAMP,
        "conversation_date_updated": STAMP,
        "conversation_created_by": "system",
        "conversation_state": state,
        "links": {"participant": "https://p", "conversation": "https://c"},
    }


def sync_service(sid: str = SYNC_SERVICE, window: int = 5000) -> dict:
    return {
        "sid": sid,
        "account_sid": ACCOUNT_SID,
        "friendly_name": "Game state",
        "date_created": STAMP,
        "date_updated": STAMP,
        "url": f"https://sync.twilio.com/v1/Services/{sid}",
        "webhooks_from_rest_enabled": False,
        "acl_enabled": False,
        "reachability_debouncing_enabled": False,
        "reachability_debouncing_window": window,
        "links": {"documents": "d", "lists": "l", "maps": "m", "streams": "s"},
    }


def sync_document(sid: str = "ET" + "1" * 32, revision: str = "0") -> dict:
    return {
        "sid": sid,
        "unique_name": "settings",
        "account_sid": ACCOUNT_SID,
        "service_sid": SYNC_SERVICE,
        "url": "https://sync.twilio.com/v1/doc",
        "data": {"volume": 7},
        "date_created": STAMP,
        "date_updated": STAMP,
        "created_by": "system",
        "links": {"permissions": "p"},
        "revision": revision,
    }


def sync_item(**identity) -> dict:
    body = {
        "account_sid": ACCOUNT_SID,
        "service_sid": SYNC_SERVICE,
        "url": "https://sync.twilio.com/v1/item",
        "data": {"score": 1},
        "date_created": STAMP,
        "date_updated": STAMP,
        "created_by": "system",
        "revision": "0",
    }
    body.update(identity)
    return body


def serverless_log(sid: str, level: str = "INFO") -> dict:
    return {
        "sid": sid,
        "account_sid": ACCOUNT_SID,
        "service_sid": SERVERLESS_SERVICE,
        "environment_sid": ENVIRONMENT,
        "build_sid": "ZB" + "1" * 32,
        "deployment_sid": "ZD" + "1" * 32,
        "function_sid": "ZH" + "1" * 32,
        "request_sid": "RQ" + "1" * 32,
        "level": level,
        "message": "hello",
        "date_created": STAMP,
        "url": "https://serverless.twilio.com/v1/log",
    }


# ── accounts ───────────────────────────────────────────────────────────────

class TestAccounts:
    @pytest.mark.asyncio
    async def test_get_defaults_to_own_account(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=account())
        result = await twilio.accounts().get()
        assert result.status is Status.ACTIVE
        assert str(fake_twilio.last.url) == (
            f"https://api.twilio.com/2010-04-01/Accounts/{ACCOUNT_SID}.json"
        )

    @pytest.mark.asyncio
    async def test_get_not_found(self, twilio, fake_twilio):
        fake_twilio.queue(
            status=404,
            json_body={"code": 20404, "message": "Not found", "more_info": "x", "status": 404},
        )
        with pytest.raises(ApiError) as exc_info:
            await twilio.accounts().get(SUBACCOUNT)
        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_list_uses_legacy_paging(self, twilio, fake_twilio):
        fake_twilio.queue(
            json_body={
                "accounts": [account(), account(SUBACCOUNT, friendly_name="Sub")],
                "page": 0,
                "page_size": 5,
                "next_page_uri": "/2010-04-01/Accounts.json?PageSize=5&Page=1&PageToken=PA1",
            }
        )
        fake_twilio.queue(
            json_body={"accounts": [account("AC" + "3" * 32)], "page": 1, "page_size": 5}
        )
        accounts = await twilio.accounts().list(status=Status.SUSPENDED)
        assert len(accounts) == 3
        first, second = fake_twilio.requests
        assert first.url.params["PageSize"] == "5"
        assert first.url.params["Status"] == "suspended"
        assert str(second.url) == (
            "https://api.twilio.com/2010-04-01/Accounts.json?PageSize=5&Page=1&PageToken=PA1"
        )

    @pytest.mark.asyncio
    async def test_create_posts_friendly_name(self, twilio, fake_twilio):
        fake_twilio.queue(status=201, json_body=account(SUBACCOUNT, friendly_name="Sub"))
        created = await twilio.accounts().create("Sub")
        assert created.sid == SUBACCOUNT
        assert fake_twilio.last.method == "POST"
        assert fake_twilio.form() == {"FriendlyName": "Sub"}

    @pytest.mark.asyncio
    async def test_create_rejects_long_name(self, twilio, fake_twilio):
        with pytest.raises(ValidationError):
            await twilio.accounts().create("x" * 65)
        assert fake_twilio.requests == []

    @pytest.mark.asyncio
    async def test_update_status(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=account(SUBACCOUNT, status="closed"))
        updated = await twilio.accounts().update(SUBACCOUNT, status=Status.CLOSED)
        assert updated.status is Status.CLOSED
        assert str(fake_twilio.last.url).endswith(f"/Accounts/{SUBACCOUNT}.json")
        assert fake_twilio.form() == {"Status": "closed"}


# ── conversations ──────────────────────────────────────────────────────────

class TestConversations:
    @pytest.mark.asyncio
    async def test_list_with_filters(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=v1_page("conversations", [conversation()]))
        result = await twilio.conversations().list(
            start_date=date(2024, 1, 1), end_date=date(2024, 1, 31), state=State.INACTIVE
        )
        assert [c.sid for c in result] == [CONVERSATION]
        params = fake_twilio.last.url.params
        assert params["StartDate"] == "2024-01-01"
        assert params["EndDate"] == "2024-01-31"
        assert params["State"] == "inactive"
        assert "PageSize" not in params

    @pytest.mark.asyncio
    async def test_close(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=conversation(state="closed"))
        closed = await twilio.conversations().close(CONVERSATION)
        assert closed.state is State.CLOSED
        assert fake_twilio.last.method == "POST"
        assert fake_twilio.form() == {"State": "closed"}

    @pytest.mark.asyncio
    async def test_update_timers(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=conversation())
        await twilio.conversations().update(CONVERSATION, timers_inactive="PT5M")
        assert fake_twilio.form() == {"Timers.Inactive": "PT5M"}

    @pytest.mark.asyncio
    async def test_update_unknown_field(self, twilio, fake_twilio):
        with pytest.raises(ValidationError):
            await twilio.conversations().update(CONVERSATION, colour="red")
        assert fake_twilio.requests == []

    @pytest.mark.asyncio
    async def test_delete(self, twilio, fake_twilio):
        fake_twilio.queue(status=204)
        await twilio.conversations().delete(CONVERSATION)
        assert fake_twilio.last.method == "DELETE"
        assert str(fake_twilio.last.url) == (
            f"https://conversations.twilio.com/v1/Conversations/{CONVERSATION}"
        )

    @pytest.mark.asyncio
    async def test_participant_conversations_by_identity(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=v1_page("conversations", [participant_conversation()]))
        result = await twilio.participant_conversations().list(identity="alice")
        assert result[0].conversation_state is State.ACTIVE
        assert fake_twilio.last.url.params["Identity"] == "alice"
        assert "Address" not in fake_twilio.last.url.params


# ── sync ───────────────────────────────────────────────────────────────────

class TestSync:
    @pytest.mark.asyncio
    async def test_list_services(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=v1_page("services", [sync_service()]))
        services = await twilio.sync().services().list()
        assert services[0].sid == SYNC_SERVICE
        assert fake_twilio.last.url.params["PageSize"] == "20"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "window, message",
        [
            (999, "must be greater than 1000 milliseconds"),
            (30001, "must be less than 30,000 milliseconds"),
        ],
    )
    async def test_debouncing_window_checked_before_sending(
        self, twilio, fake_twilio, window, message
    ):
        with pytest.raises(ValidationError, match=message):
            await twilio.sync().service(SYNC_SERVICE).update(
                reachability_debouncing_window=window
            )
        assert fake_twilio.requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("window", [1000, 30000])
    async def test_debouncing_window_bounds_accepted(self, twilio, fake_twilio, window):
        fake_twilio.queue(json_body=sync_service(window=window))
        await twilio.sync().services().create(
            reachability_debouncing_enabled=True, reachability_debouncing_window=window
        )
        assert fake_twilio.form() == {
            "ReachabilityDebouncingEnabled": "true",
            "ReachabilityDebouncingWindow": str(window),
        }

    @pytest.mark.asyncio
    async def test_document_update_with_if_match(self, twilio, fake_twilio):
        sid = "ET" + "1" * 32
        fake_twilio.queue(json_body=sync_document(sid, revision="1"))
        document = twilio.sync().service(SYNC_SERVICE).document(sid)
        updated = await document.update(data={"volume": 8}, if_match="0")
        assert updated.revision == "1"
        request = fake_twilio.last
        assert request.headers["if-match"] == "0"
        assert str(request.url) == (
            f"https://sync.twilio.com/v1/Services/{SYNC_SERVICE}/Documents/{sid}"
        )
        assert fake_twilio.form() == {"Data": '{"volume":8}'}

    @pytest.mark.asyncio
    async def test_document_revision_conflict(self, twilio, fake_twilio):
        fake_twilio.queue(
            status=412,
            json_body={
                "code": 54103,
                "message": "The revision of the Document does not match the expected revision",
                "more_info": "https://www.twilio.com/docs/errors/54103",
                "status": 412,
            },
        )
        document = twilio.sync().service(SYNC_SERVICE).document("settings")
        with pytest.raises(ApiError) as exc_info:
            await document.update(data={}, if_match="0")
        assert exc_info.value.status == 412

    @pytest.mark.asyncio
    async def test_map_items_list_params(self, twilio, fake_twilio):
        map_sid = "MP" + "1" * 32
        fake_twilio.queue(json_body=v1_page("items", [sync_item(key="k1", map_sid=map_sid)]))
        items = await twilio.sync().service(SYNC_SERVICE).map(map_sid).items().list(
            order=Order.DESC, from_key="k9"
        )
        assert items[0].key == "k1"
        request = fake_twilio.last
        assert request.url.path == f"/v1/Services/{SYNC_SERVICE}/Maps/{map_sid}/Items"
        assert request.url.params["Order"] == "desc"
        assert request.url.params["From"] == "k9"
        assert request.url.params["PageSize"] == "50"

    @pytest.mark.asyncio
    async def test_list_items_use_list_url(self, twilio, fake_twilio):
        list_sid = "ES" + "1" * 32
        fake_twilio.queue(json_body=v1_page("items", [sync_item(index=0, list_sid=list_sid)]))
        items = await twilio.sync().service(SYNC_SERVICE).list(list_sid).items().list(
            from_index=3
        )
        assert items[0].index == 0
        request = fake_twilio.last
        assert request.url.path == f"/v1/Services/{SYNC_SERVICE}/Lists/{list_sid}/Items"
        assert request.url.params["From"] == "3"

    @pytest.mark.asyncio
    async def test_list_item_delete(self, twilio, fake_twilio):
        list_sid = "ES" + "1" * 32
        fake_twilio.queue(status=204)
        await twilio.sync().service(SYNC_SERVICE).list(list_sid).item(4).delete()
        assert fake_twilio.last.method == "DELETE"
        assert fake_twilio.last.url.path.endswith(f"/Lists/{list_sid}/Items/4")

    @pytest.mark.asyncio
    async def test_item_create_requires_data(self, twilio, fake_twilio):
        service = twilio.sync().service(SYNC_SERVICE)
        with pytest.raises(ValidationError):
            await service.list("ES" + "1" * 32).items().create(None)
        with pytest.raises(ValidationError):
            await service.map("MP" + "1" * 32).items().create("k1", None)
        assert fake_twilio.requests == []


# ── serverless ─────────────────────────────────────────────────────────────

class TestServerless:
    @pytest.mark.asyncio
    async def test_create_service_requires_names(self, twilio, fake_twilio):
        fake_twilio.queue(
            status=201,
            json_body={
                "sid": SERVERLESS_SERVICE,
                "account_sid": ACCOUNT_SID,
                "unique_name": "hooks",
                "friendly_name": "Hooks",
                "include_credentials": True,
                "ui_editable": False,
                "domain_base": "hooks-1234",
                "date_created": STAMP,
                "date_updated": STAMP,
                "url": "https://serverless.twilio.com/v1/Services/x",
                "links": {"environments": "e", "functions": "f", "assets": "a", "builds": "b"},
            },
        )
        service = await twilio.serverless().services().create(
            "hooks", "Hooks", include_credentials=True
        )
        assert service.domain_base == "hooks-1234"
        assert fake_twilio.form() == {
            "UniqueName": "hooks",
            "FriendlyName": "Hooks",
            "IncludeCredentials": "true",
        }

    @pytest.mark.asyncio
    async def test_logs_dates_sent_in_utc(self, twilio, fake_twilio):
        fake_twilio.queue(
            json_body=v1_page("logs", [serverless_log("NO" + "1" * 32, "ERROR")])
        )
        plus_two = timezone(timedelta(hours=2))
        logs = await (
            twilio.serverless()
            .service(SERVERLESS_SERVICE)
            .environment(ENVIRONMENT)
            .logs()
            .list(
                start_date=datetime(2024, 2, 1, 12, 0, 0, tzinfo=plus_two),
                end_date=datetime(2024, 2, 1, 13, 30, 0, tzinfo=timezone.utc),
            )
        )
        assert logs[0].level is Level.ERROR
        params = fake_twilio.last.url.params
        assert params["StartDate"] == "2024-02-01T10:00:00Z"
        assert params["EndDate"] == "2024-02-01T13:30:00Z"
        assert params["PageSize"] == "500"
        assert "FunctionSid" not in params
        assert fake_twilio.last.url.path == (
            f"/v1/Services/{SERVERLESS_SERVICE}/Environments/{ENVIRONMENT}/Logs"
        )

    @pytest.mark.asyncio
    async def test_get_log(self, twilio, fake_twilio):
        sid = "NO" + "2" * 32
        fake_twilio.queue(json_body=serverless_log(sid))
        log = await (
            twilio.serverless().service(SERVERLESS_SERVICE).environment(ENVIRONMENT).log(sid).get()
        )
        assert log.sid == sid
        assert fake_twilio.last.url.path.endswith(f"/Logs/{sid}")

    def test_level_display(self):
        assert str(Level.WARN) == "Warn"
