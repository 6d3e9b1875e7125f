"""
twilly_cli.account
───────────────────
Account menu: look up, create, rename, suspend, reactivate and close
(sub)accounts.
"""
from __future__ import annotations

from enum import Enum

from twilly import Client, TwilioError
from twilly.resources.account import Account, Status
from twilly_cli import display, prompts
from twilly_cli.errors import or_exit, report


class Action(str, Enum):
    GET_ACCOUNT = "Get account"
    LIST_ACCOUNTS = "List accounts"
    CREATE_ACCOUNT = "Create account"

    def __str__(self) -> str:
        return self.value


def _label(account: Account) -> str:
    return f"({account.sid}) {account.friendly_name} - {account.status}"


async def choose_account_action(twilio: Client) -> None:
    while True:
        action = prompts.pick("Select an action:", list(Action))
        if action is None:
            return

        if action is Action.GET_ACCOUNT:
            await _get_account(twilio)
        elif action is Action.CREATE_ACCOUNT:
            await _create_account(twilio)
        elif action is Action.LIST_ACCOUNTS:
            await _list_accounts(twilio)


async def _get_account(twilio: Client) -> None:
    sid = prompts.ask(
        "Please provide an account SID:",
        placeholder="AC...",
        validators=[prompts.sid_validator("AC", "Account")],
    )
    if sid is None:
        return
    try:
        account = await twilio.accounts().get(sid)
    except TwilioError as exc:
        report(exc, f"An Account with SID '{sid}' was not found.")
        return
    display.details(account)


async def _create_account(twilio: Client) -> None:
    friendly_name = prompts.ask("Enter a friendly name (empty for default):")
    if friendly_name is None:
        return
    print("Creating account...")
    account = await or_exit(twilio.accounts().create(friendly_name or None))
    print(f"Account created: {account.friendly_name} ({account.sid})")
    print()


async def _list_accounts(twilio: Client) -> None:
    friendly_name = prompts.ask("Search by friendly name? (empty for none):")
    if friendly_name is None:
        return
    status = prompts.choose_filter("Filter by status:", list(Status))
    if status is None:
        return

    print("Retrieving accounts...")
    accounts = await or_exit(
        twilio.accounts().list(
            friendly_name=friendly_name or None,
            status=None if status == prompts.ANY else status,
        )
    )
    # the authenticated account cannot act on itself here
    accounts = [account for account in accounts if account.sid != twilio.account_sid]
    display.found(len(accounts), "accounts")
    if not accounts:
        return

    while True:
        selected = prompts.pick("Accounts:", accounts, label=_label)
        if selected is None:
            return
        await _manage_account(twilio, selected)


async def _manage_account(twilio: Client, account: Account) -> None:
    while True:
        if account.status is Status.CLOSED:
            print(f"{account.sid} is a closed account and can no longer be used.")
            print()
            return

        options = ["List details", "Change name"]
        if account.status is Status.ACTIVE:
            options += ["Suspend", "Close"]
        else:
            options += ["Activate"]

        choice = prompts.pick("Select an action:", options)
        if choice is None:
            return

        if choice == "List details":
            display.details(account)
        elif choice == "Change name":
            friendly_name = prompts.ask("Provide a name:", validators=[prompts.not_empty])
            if friendly_name is None:
                continue
            updated = await or_exit(
                twilio.accounts().update(account.sid, friendly_name=friendly_name)
            )
            account.friendly_name = updated.friendly_name
            print("Account name updated.")
            print()
        elif choice == "Suspend":
            if prompts.confirm("Are you sure you wish to suspend the account?"):
                await or_exit(twilio.accounts().update(account.sid, status=Status.SUSPENDED))
                account.status = Status.SUSPENDED
                print("Account suspended.")
                print()
        elif choice == "Activate":
            await or_exit(twilio.accounts().update(account.sid, status=Status.ACTIVE))
            account.status = Status.ACTIVE
            print("Account activated.")
            print()
        elif choice == "Close":
            if prompts.confirm(
                "Are you sure you wish to close the account? This cannot be undone."
            ):
                await or_exit(twilio.accounts().update(account.sid, status=Status.CLOSED))
                account.status = Status.CLOSED
                print("Account closed.")
                print()
