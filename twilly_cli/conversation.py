"""
twilly_cli.conversation
────────────────────────
Conversations menu: look up, list and filter conversations, change their
state, and bulk close or delete them.
"""
from __future__ import annotations

from datetime import date, timedelta
from enum import Enum

from twilly import Client, TwilioError
from twilly.resources.conversation import Conversation, State
from twilly_cli import display, prompts
from twilly_cli.errors import or_exit, report
from twilly_cli.pacing import Pacer


class Action(str, Enum):
    GET_CONVERSATION = "Get conversation"
    LIST_CONVERSATIONS = "List Conversations"
    LIST_BY_IDENTIFIER = "List Conversations by identifier"
    CLOSE_CONVERSATION = "Close Conversation"
    CLOSE_ALL_CONVERSATIONS = "Close all Conversations"
    DELETE_CONVERSATION = "Delete Conversation"
    DELETE_ALL_CONVERSATIONS = "Delete all Conversations"

    def __str__(self) -> str:
        return self.value


_conversation_sid = prompts.sid_validator("CH", "Conversation")


def _label(conversation: Conversation) -> str:
    if conversation.unique_name:
        return f"({conversation.sid}) {conversation.unique_name} - {conversation.state}"
    return f"{conversation.sid} - {conversation.state}"


def _not_found(sid: str) -> str:
    return f"A Conversation with SID '{sid}' was not found."


def _ask_sid() -> str | None:
    return prompts.ask(
        "Please provide a conversation SID, or unique name:",
        placeholder="CH...",
        validators=[_conversation_sid],
    )


async def choose_conversation_action(twilio: Client, pacer: Pacer | None = None) -> None:
    pacer = pacer or Pacer()
    while True:
        action = prompts.pick("Select an action:", list(Action))
        if action is None:
            return

        if action is Action.GET_CONVERSATION:
            await _get_conversation(twilio)
        elif action is Action.LIST_CONVERSATIONS:
            await _list_conversations(twilio)
        elif action is Action.LIST_BY_IDENTIFIER:
            await _list_by_identifier(twilio)
        elif action is Action.CLOSE_CONVERSATION:
            sid = _ask_sid()
            if sid is None:
                print("Operation canceled. No changes were made.")
                continue
            await _update_state(twilio, sid, State.CLOSED)
        elif action is Action.CLOSE_ALL_CONVERSATIONS:
            await close_all(twilio, pacer)
        elif action is Action.DELETE_CONVERSATION:
            sid = _ask_sid()
            if sid is None:
                print("Operation canceled. No changes were made.")
                continue
            await delete_conversation(twilio, sid)
        elif action is Action.DELETE_ALL_CONVERSATIONS:
            await delete_all(twilio, pacer)


async def _get_conversation(twilio: Client) -> None:
    sid = _ask_sid()
    if sid is None:
        return
    try:
        conversation = await twilio.conversations().get(sid)
    except TwilioError as exc:
        report(exc, _not_found(sid))
        return
    print("Conversation found.")
    print()
    await _manage_conversation(twilio, conversation)


async def _list_conversations(twilio: Client) -> None:
    start_date: date | None = None
    end_date: date | None = None

    filter_dates = prompts.confirm("Would you like to filter between specified dates?")
    if filter_dates is None:
        return
    if filter_dates:
        today = date.today()
        start_date = prompts.ask_date(
            "Choose a start date:", minimum=today - timedelta(days=365), maximum=today
        )
        if start_date is None:
            return
        end_date = prompts.ask_date("Choose an end date:", minimum=start_date, maximum=today)
        if end_date is None:
            return

    state = prompts.choose_filter("Filter by state?", list(State))
    if state is None:
        return

    print("Fetching conversations...")
    conversations = await or_exit(
        twilio.conversations().list(
            start_date=start_date,
            end_date=end_date,
            state=None if state == prompts.ANY else state,
        )
    )
    display.found(len(conversations), "conversations")
    if not conversations:
        return

    while True:
        selected = prompts.pick("Conversations:", conversations, label=_label)
        if selected is None:
            return
        if not await _manage_conversation(twilio, selected):
            conversations.remove(selected)
            if not conversations:
                return


async def _manage_conversation(twilio: Client, conversation: Conversation) -> bool:
    """Act on one conversation. Returns False once it has been deleted."""
    while True:
        options = ["List details"]
        if conversation.state is State.INACTIVE:
            options.append("Re-activate")
        elif conversation.state is State.ACTIVE:
            options.append("De-activate")
        options.append("Delete")

        choice = prompts.pick("Select an action:", options)
        if choice is None:
            return True

        if choice == "List details":
            display.details(conversation)
        elif choice == "Re-activate":
            updated = await _update_state(twilio, conversation.sid, State.ACTIVE)
            if updated:
                conversation.state = updated.state
        elif choice == "De-activate":
            updated = await _update_state(twilio, conversation.sid, State.INACTIVE)
            if updated:
                conversation.state = updated.state
        elif choice == "Delete":
            if await delete_conversation(twilio, conversation.sid):
                return False


async def _list_by_identifier(twilio: Client) -> None:
    identifier = prompts.select(
        "Select an identifier (Identity for chat-based users otherwise Address):",
        ["Identity", "Address"],
    )
    if identifier is None:
        return
    value = prompts.ask(
        f"Please provide the {identifier.lower()} to search for:",
        validators=[prompts.not_empty],
    )
    if value is None:
        return
    state = prompts.choose_filter("Filter by state?", list(State))
    if state is None:
        return

    print("Fetching conversations...")
    participant_conversations = await or_exit(
        twilio.participant_conversations().list(
            identity=value if identifier == "Identity" else None,
            address=value if identifier == "Address" else None,
        )
    )
    if state != prompts.ANY:
        participant_conversations = [
            pc for pc in participant_conversations if pc.conversation_state == state
        ]

    if not participant_conversations:
        print("No conversations found with the provided identifier.")
        print()
        return
    print(f"Found {len(participant_conversations)} conversations.")
    print()
    for pc in participant_conversations:
        print(f"{pc.conversation_sid} - {pc.conversation_state}")
    print()


async def _update_state(twilio: Client, sid: str, state: State) -> Conversation | None:
    try:
        updated = await twilio.conversations().update(sid, state=state)
    except TwilioError as exc:
        report(exc, _not_found(sid))
        return None
    print("Conversation updated.")
    print()
    return updated


async def delete_conversation(twilio: Client, sid: str) -> bool:
    """Confirm, then delete. Returns True when the conversation was deleted."""
    if not prompts.confirm("Are you sure you wish to delete the Conversation?"):
        return False
    try:
        await twilio.conversations().delete(sid)
    except TwilioError as exc:
        report(exc, _not_found(sid))
        return False
    print("Conversation deleted.")
    print()
    return True


async def close_all(twilio: Client, pacer: Pacer) -> None:
    if not prompts.confirm("Are you sure to wish to close **all** conversations?"):
        return
    conversations = await or_exit(twilio.conversations().list(state=State.ACTIVE))
    print(f"We've found {len(conversations)} active conversations to close.")
    if not prompts.confirm("Continue?"):
        return

    print("Proceeding with closing. Please wait...")
    async for conversation in pacer.each(conversations):
        await or_exit(twilio.conversations().close(conversation.sid))
        print(f"Conversation {conversation.sid} closed.")
    print("All active conversations closed.")
    print()


async def delete_all(twilio: Client, pacer: Pacer) -> None:
    if not (
        prompts.confirm("Are you sure you wish to delete **all** Conversations?")
        and prompts.confirm("Are you double sure? There is no going back.")
    ):
        print("Operation canceled. No changes were made.")
        print()
        return

    print("Proceeding with deletion. Please wait...")
    conversations = await or_exit(twilio.conversations().list())
    async for conversation in pacer.each(conversations):
        await or_exit(twilio.conversations().delete(conversation.sid))
    print("All conversations deleted.")
    print()
