"""
twilly_cli.menus
─────────────────
Shared shape of the nested resource menus: pick an item from a fetched
list, then list its details, delete it, or step into its children.
"""
from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import TypeVar

from pydantic import BaseModel

from twilly_cli import display, prompts
from twilly_cli.errors import or_exit

T = TypeVar("T", bound=BaseModel)

LIST_DETAILS = "List Details"
DELETE = "Delete"

SubMenu = Callable[[], Awaitable[None]]


async def manage(
    noun: str,
    resource: BaseModel,
    delete: Callable[[], Awaitable[None]] | None = None,
    children: Mapping[str, SubMenu] | None = None,
) -> bool:
    """
    Act on one resource until the user steps back.

    Returns False once the resource has been deleted so the caller can drop
    it from its list.
    """
    children = children or {}
    options = [*children, LIST_DETAILS]
    if delete is not None:
        options.append(DELETE)

    while True:
        choice = prompts.pick("Select an action:", options)
        if choice is None:
            return True
        if choice == LIST_DETAILS:
            display.details(resource)
        elif choice == DELETE and delete is not None:
            if not prompts.confirm(f"Are you sure you wish to delete the {noun}?"):
                continue
            print(f"Deleting {noun}...")
            await or_exit(delete())
            print(f"{noun} deleted.")
            print()
            return False
        else:
            await children[choice]()


async def browse(
    question: str,
    items: list[T],
    label: Callable[[T], str],
    act: Callable[[T], Awaitable[bool]],
) -> None:
    """Offer *items* until the user steps back; deleted items leave the list."""
    while items:
        selected = prompts.pick(question, items, label=label)
        if selected is None:
            return
        if not await act(selected):
            items.remove(selected)


__all__ = ["LIST_DETAILS", "DELETE", "manage", "browse"]
