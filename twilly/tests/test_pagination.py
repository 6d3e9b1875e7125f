"""Tests for twilly.pagination: page shapes and the eager page walker."""
from __future__ import annotations

import pytest
from pydantic import BaseModel

from twilly.core.errors import ApiError, NetworkError, ParseError
from twilly.pagination import Page, collect_pages, iter_pages, paginate

URL = "https://sync.twilio.com/v1/Services"


class Thing(BaseModel):
    sid: str


class ThingPage(Page[Thing]):
    items_key = "things"


def v1_page(sids: list[str], page: int, next_url: str | None) -> dict:
    return {
        "things": [{"sid": sid} for sid in sids],
        "meta": {
            "page": page,
            "page_size": 2,
            "first_page_url": f"{URL}?PageSize=2&Page=0",
            "previous_page_url": None,
            "next_page_url": next_url,
            "key": "things",
        },
    }


def next_url(page: int) -> str:
    return f"{URL}?PageSize=2&Page={page}&PageToken=PT{page}"


def queue_pages(fake_twilio, pages: list[list[str]]) -> None:
    for number, sids in enumerate(pages):
        more = number + 1 < len(pages)
        fake_twilio.queue(json_body=v1_page(sids, number, next_url(number + 1) if more else None))


# ── page shapes ────────────────────────────────────────────────────────────

class TestPageShapes:
    def test_v1_page(self):
        page = ThingPage.model_validate(v1_page(["A", "B"], 0, next_url(1)))
        assert [t.sid for t in page.items] == ["A", "B"]
        assert page.has_next
        assert page.meta.next_page_url == next_url(1)

    def test_last_page(self):
        page = ThingPage.model_validate(v1_page(["A"], 3, None))
        assert not page.has_next

    def test_legacy_flat_page(self):
        page = ThingPage.model_validate(
            {
                "things": [{"sid": "AC1"}],
                "page": 0,
                "page_size": 5,
                "first_page_uri": "/2010-04-01/Accounts.json?PageSize=5&Page=0",
                "next_page_uri": "/2010-04-01/Accounts.json?PageSize=5&Page=1&PageToken=PA1",
                "previous_page_uri": None,
            }
        )
        assert [t.sid for t in page.items] == ["AC1"]
        assert page.meta.next_page_url == (
            "https://api.twilio.com/2010-04-01/Accounts.json?PageSize=5&Page=1&PageToken=PA1"
        )
        assert page.meta.previous_page_url is None

    def test_legacy_last_page_has_no_next(self):
        page = ThingPage.model_validate(
            {"things": [], "page": 2, "page_size": 5, "next_page_uri": None}
        )
        assert page.items == []
        assert not page.has_next

    def test_empty_next_url_means_last(self):
        page = ThingPage.model_validate(v1_page(["A"], 0, ""))
        assert not page.has_next

    def test_flat_page_with_absolute_links(self):
        page = ThingPage.model_validate(
            {
                "things": [{"sid": "A"}],
                "first_page_url": f"{URL}?Page=0",
                "next_page_url": f"{URL}?Page=1",
            }
        )
        assert page.meta.first_page_url == f"{URL}?Page=0"
        assert page.meta.next_page_url == f"{URL}?Page=1"
        assert page.has_next


# ── walking ────────────────────────────────────────────────────────────────

class TestPaginate:
    @pytest.mark.asyncio
    async def test_single_page(self, twilio, fake_twilio):
        queue_pages(fake_twilio, [["A", "B"]])
        things = await paginate(twilio, ThingPage, URL)
        assert [t.sid for t in things] == ["A", "B"]
        assert len(fake_twilio.requests) == 1

    @pytest.mark.asyncio
    async def test_all_pages_in_order(self, twilio, fake_twilio):
        queue_pages(fake_twilio, [["A", "B"], ["C", "D"], ["E"]])
        things = await paginate(twilio, ThingPage, URL, page_size=2)
        assert [t.sid for t in things] == ["A", "B", "C", "D", "E"]
        # exactly one request per page
        assert len(fake_twilio.requests) == 3

    @pytest.mark.asyncio
    async def test_page_size_only_on_first_request(self, twilio, fake_twilio):
        queue_pages(fake_twilio, [["A"], ["B"]])
        await paginate(twilio, ThingPage, URL, {"State": "active"}, page_size=2)
        first, second = fake_twilio.requests
        assert first.url.params["PageSize"] == "2"
        assert first.url.params["State"] == "active"
        # next pages are requested exactly as Twilio returned them
        assert str(second.url) == next_url(1)

    @pytest.mark.asyncio
    async def test_empty_first_page(self, twilio, fake_twilio):
        queue_pages(fake_twilio, [[]])
        assert await paginate(twilio, ThingPage, URL) == []

    @pytest.mark.asyncio
    async def test_failure_on_later_page_discards_results(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=v1_page(["A", "B"], 0, next_url(1)))
        fake_twilio.queue(
            status=500,
            json_body={
                "code": 20500,
                "message": "Internal Server Error",
                "more_info": "https://www.twilio.com/docs/errors/20500",
                "status": 500,
            },
        )
        with pytest.raises(ApiError):
            await paginate(twilio, ThingPage, URL)
        # nothing after the failing page is requested
        assert len(fake_twilio.requests) == 2

    @pytest.mark.asyncio
    async def test_network_failure_on_later_page(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=v1_page(["A"], 0, next_url(1)))
        fake_twilio.fail()
        with pytest.raises(NetworkError):
            await paginate(twilio, ThingPage, URL)

    @pytest.mark.asyncio
    async def test_flat_pages_are_chained(self, twilio, fake_twilio):
        fake_twilio.queue(json_body={"things": [{"sid": "A"}], "next_page_url": f"{URL}?Page=1"})
        fake_twilio.queue(json_body={"things": [{"sid": "B"}], "next_page_url": None})
        things = await paginate(twilio, ThingPage, URL)
        assert [t.sid for t in things] == ["A", "B"]
        assert str(fake_twilio.requests[1].url) == f"{URL}?Page=1"

    @pytest.mark.asyncio
    async def test_failure_on_first_page(self, twilio, fake_twilio):
        fake_twilio.queue(
            status=404,
            json_body={
                "code": 20404,
                "message": "The requested resource was not found",
                "more_info": "https://www.twilio.com/docs/errors/20404",
                "status": 404,
            },
        )
        with pytest.raises(ApiError) as exc_info:
            await paginate(twilio, ThingPage, URL)
        assert exc_info.value.status == 404
        assert len(fake_twilio.requests) == 1

    @pytest.mark.asyncio
    async def test_unreadable_later_page(self, twilio, fake_twilio):
        fake_twilio.queue(json_body=v1_page(["A"], 0, next_url(1)))
        # 2xx page without its items
        fake_twilio.queue(json_body={"meta": {"page": 1, "next_page_url": next_url(2)}})
        with pytest.raises(ParseError):
            await paginate(twilio, ThingPage, URL)
        assert len(fake_twilio.requests) == 2


class TestIterPages:
    @pytest.mark.asyncio
    async def test_lazy_pages(self, twilio, fake_twilio):
        queue_pages(fake_twilio, [["B"], ["C"]])
        first = ThingPage.model_validate(v1_page(["A"], 0, next_url(1)))
        # first page is given, so only the following pages are requested
        pages = [page async for page in iter_pages(twilio, first)]
        assert [[t.sid for t in p.items] for p in pages] == [["A"], ["B"], ["C"]]
        assert len(fake_twilio.requests) == 2

    @pytest.mark.asyncio
    async def test_collect_pages_from_last_page(self, twilio, fake_twilio):
        first = ThingPage.model_validate(v1_page(["A"], 0, None))
        assert [t.sid for t in await collect_pages(twilio, first)] == ["A"]
        assert fake_twilio.requests == []
