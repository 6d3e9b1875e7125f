"""
twilly_cli.sync
────────────────
Sync menu: pick a Sync Service, then browse and delete its documents,
maps and lists along with the items inside them.
"""
from __future__ import annotations

import json
from enum import Enum

from twilly import Client, TwilioError
from twilly.resources.sync.documents import SyncDocument
from twilly.resources.sync.list_items import SyncListItem
from twilly.resources.sync.lists import SyncList
from twilly.resources.sync.map_items import SyncMapItem
from twilly.resources.sync.maps import SyncMap
from twilly.resources.sync.services import Service, SyncService
from twilly_cli import display, prompts
from twilly_cli.errors import or_exit, report
from twilly_cli.menus import browse, manage


class Resource(str, Enum):
    DOCUMENTS = "Documents"
    MAPS = "Maps"
    LISTS = "Lists"

    def __str__(self) -> str:
        return self.value


class DocumentAction(str, Enum):
    GET_DOCUMENT = "Get Document"
    LIST_DOCUMENTS = "List Documents"

    def __str__(self) -> str:
        return self.value


def _named(sid: str, unique_name: str | None) -> str:
    return f"({sid}) {unique_name}" if unique_name else sid


def _service_label(service: SyncService) -> str:
    return _named(service.sid, service.friendly_name or service.unique_name)


def _item_data(data: object) -> str:
    text = json.dumps(data)
    return text if len(text) <= 60 else f"{text[:57]}..."


async def choose_sync_action(twilio: Client) -> None:
    print("Fetching Sync Services...")
    services = await or_exit(twilio.sync().services().list())
    display.found(len(services), "Sync Services")
    if not services:
        return

    while True:
        selected = prompts.pick("Choose a Sync Service:", services, label=_service_label)
        if selected is None:
            return
        await _choose_resource(twilio.sync().service(selected.sid))


async def _choose_resource(service: Service) -> None:
    while True:
        resource = prompts.pick("Select a resource:", list(Resource))
        if resource is None:
            return
        if resource is Resource.DOCUMENTS:
            await _documents(service)
        elif resource is Resource.MAPS:
            await _maps(service)
        elif resource is Resource.LISTS:
            await _lists(service)


# ── Documents ─────────────────────────────────────────────────────────────────

async def _documents(service: Service) -> None:
    while True:
        action = prompts.pick("Select an action:", list(DocumentAction))
        if action is None:
            return
        if action is DocumentAction.GET_DOCUMENT:
            await _get_document(service)
        elif action is DocumentAction.LIST_DOCUMENTS:
            print("Fetching Documents...")
            documents = await or_exit(service.documents().list())
            display.found(len(documents), "Documents")
            await browse(
                "Choose a Document:",
                documents,
                lambda document: _named(document.sid, document.unique_name),
                lambda document: _manage_document(service, document),
            )


async def _get_document(service: Service) -> None:
    sid = prompts.ask(
        "Please provide a Document SID, or unique name:",
        placeholder="ET...",
        validators=[prompts.not_empty],
    )
    if sid is None:
        return
    try:
        document = await service.document(sid).get()
    except TwilioError as exc:
        report(exc, f"A Document with SID '{sid}' was not found.")
        return
    await _manage_document(service, document)


async def _manage_document(service: Service, document: SyncDocument) -> bool:
    return await manage("Document", document, delete=service.document(document.sid).delete)


# ── Maps ──────────────────────────────────────────────────────────────────────

async def _maps(service: Service) -> None:
    print("Fetching Sync Maps...")
    maps = await or_exit(service.maps().list())
    display.found(len(maps), "Sync Maps")
    await browse(
        "Choose a Sync Map:",
        maps,
        lambda sync_map: _named(sync_map.sid, sync_map.unique_name),
        lambda sync_map: _manage_map(service, sync_map),
    )


async def _manage_map(service: Service, sync_map: SyncMap) -> bool:
    resource = service.map(sync_map.sid)

    async def map_items() -> None:
        print("Fetching Sync Map items...")
        items = await or_exit(resource.items().list())
        display.found(len(items), "Sync Map items")
        await browse(
            "Choose a Sync Map item:",
            items,
            lambda item: f"{item.key} - {_item_data(item.data)}",
            lambda item: _manage_map_item(service, sync_map, item),
        )

    return await manage(
        "Sync Map", sync_map, delete=resource.delete, children={"Map Items": map_items}
    )


async def _manage_map_item(service: Service, sync_map: SyncMap, item: SyncMapItem) -> bool:
    return await manage(
        "Sync Map item", item, delete=service.map(sync_map.sid).item(item.key).delete
    )


# ── Lists ─────────────────────────────────────────────────────────────────────

async def _lists(service: Service) -> None:
    print("Fetching Sync Lists...")
    lists = await or_exit(service.lists().list())
    display.found(len(lists), "Sync Lists")
    await browse(
        "Choose a Sync List:",
        lists,
        lambda sync_list: _named(sync_list.sid, sync_list.unique_name),
        lambda sync_list: _manage_list(service, sync_list),
    )


async def _manage_list(service: Service, sync_list: SyncList) -> bool:
    resource = service.list(sync_list.sid)

    async def list_items() -> None:
        print("Fetching Sync List items...")
        items = await or_exit(resource.items().list())
        display.found(len(items), "Sync List items")
        await browse(
            "Choose a Sync List item:",
            items,
            lambda item: f"{item.index} - {_item_data(item.data)}",
            lambda item: _manage_list_item(service, sync_list, item),
        )

    return await manage(
        "Sync List", sync_list, delete=resource.delete, children={"List Items": list_items}
    )


async def _manage_list_item(service: Service, sync_list: SyncList, item: SyncListItem) -> bool:
    return await manage(
        "Sync List item", item, delete=service.list(sync_list.sid).item(item.index).delete
    )


__all__ = ["choose_sync_action"]
