"""
twilly.pagination
──────────────────
Pages of Twilio list resources and the eager page walker.

Twilio list responses come in two shapes:

    v1 APIs      {"<key>": [...], "meta": {"page", "page_size",
                  "first_page_url", "previous_page_url", "next_page_url", "key"}}
    2010 API     {"<key>": [...], "page", "page_size",
                  "first_page_uri", "next_page_uri", "previous_page_uri", ...}
    flat         as above, with absolute "*_page_url" links instead of "*_uri"

Both are read into one generic Page[T] (items + PageMeta). Legacy relative
URIs are made absolute against https://api.twilio.com.
"""
from __future__ import annotations

from collections.abc import AsyncIterator, Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Type, TypeVar

from pydantic import BaseModel, model_validator

from twilly.core.http import API_BASE, Method
from twilly.core.logging import get_logger
from twilly.runtime.serialize import Params, encode_params

if TYPE_CHECKING:
    from twilly.client import Client

T = TypeVar("T")

log = get_logger(__name__)


class PageMeta(BaseModel):
    page: int = 0
    page_size: int = 0
    first_page_url: str | None = None
    previous_page_url: str | None = None
    next_page_url: str | None = None
    key: str | None = None


def _absolute(uri: str | None) -> str | None:
    if not uri:
        return None
    if uri.startswith("http"):
        return uri
    return f"{API_BASE}{uri}"


class Page(BaseModel, Generic[T]):
    """
    One page of a list resource.

    Subclasses name the body field that holds the items via *items_key*;
    otherwise the page's own meta.key is used, then "items".
    """

    items_key: ClassVar[str | None] = None

    items: list[T]
    meta: PageMeta

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        raw_meta = data.get("meta")
        if isinstance(raw_meta, Mapping):
            meta = dict(raw_meta)
        else:
            # flat bodies carry either absolute *_url or relative *_uri links
            meta = {
                "page": data.get("page", 0),
                "page_size": data.get("page_size", 0),
                "key": cls.items_key,
            }
            for link in ("first", "previous", "next"):
                meta[f"{link}_page_url"] = data.get(f"{link}_page_url") or _absolute(
                    data.get(f"{link}_page_uri")
                )

        key = cls.items_key or meta.get("key") or "items"
        items = data.get(key) if key in data else data.get("items")
        return {"items": items, "meta": meta}

    @property
    def has_next(self) -> bool:
        return bool(self.meta.next_page_url)


# ── Walkers ───────────────────────────────────────────────────────────────────

async def iter_pages(
    client: Client,
    first_page: Page[T],
    page_model: Type[Page[T]] | None = None,
) -> AsyncIterator[Page[T]]:
    """
    Yield *first_page*, then every following page by requesting each
    next_page_url verbatim (no extra params). Strictly sequential.
    """
    model = page_model or type(first_page)
    page = first_page
    number = 1
    log.debug("twilio.page", number=number, count=len(page.items), has_next=page.has_next)
    yield page
    while page.meta.next_page_url:
        page = await client.send_request(model, Method.GET, page.meta.next_page_url)
        number += 1
        log.debug("twilio.page", number=number, count=len(page.items), has_next=page.has_next)
        yield page


async def collect_pages(
    client: Client,
    first_page: Page[T],
    page_model: Type[Page[T]] | None = None,
) -> list[T]:
    """
    Eagerly walk every page after *first_page* and return all items in
    response order. Any failure propagates unchanged; items gathered so far
    are discarded.
    """
    results: list[T] = []
    async for page in iter_pages(client, first_page, page_model):
        results.extend(page.items)
    return results


async def paginate(
    client: Client,
    page_model: Type[Page[T]],
    url: str,
    params: Params | None = None,
    *,
    page_size: int | None = None,
) -> list[T]:
    """
    Fetch the first page of *url* (filters and page size go on this request
    only) and every page after it.

    Usage:
        accounts = await paginate(client, AccountPage, ACCOUNTS_URL, page_size=5)
    """
    first_params = encode_params(params)
    if page_size is not None:
        first_params.insert(0, ("PageSize", str(page_size)))
    first_page = await client.send_request(page_model, Method.GET, url, first_params)
    return await collect_pages(client, first_page, page_model)


__all__ = ["PageMeta", "Page", "iter_pages", "collect_pages", "paginate"]
