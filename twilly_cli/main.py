"""
twilly_cli.main
────────────────
Entry point of the interactive terminal client.

    twilly [--profile-dir DIR] [--log-level LEVEL]

Credentials come from the stored profile, then TWILIO_ACCOUNT_SID /
TWILIO_AUTH_TOKEN, then a prompt. New credentials are checked against the
Accounts API before they are remembered.
"""
from __future__ import annotations

import argparse
import asyncio
from enum import Enum
from pathlib import Path

from twilly import Client, ConfigurationError, Credentials, get_config
from twilly.core.logging import bind_context, configure_logging, get_logger
from twilly_cli import prompts
from twilly_cli.account import choose_account_action
from twilly_cli.conversation import choose_conversation_action
from twilly_cli.errors import fatal, or_exit
from twilly_cli.pacing import Pacer
from twilly_cli.profile import ProfileStore
from twilly_cli.serverless import choose_serverless_action
from twilly_cli.sync import choose_sync_action

BANNER = r"""
___________       .__.__  .__
\__    ___/_  _  _|__|  | |  | ___.__.
  |    |  \ \/ \/ /  |  | |  |<   |  |
  |    |   \     /|  |  |_|  |_\___  |
  |____|    \/\_/ |__|____/____/ ____|
                               \/
"""


class SubResource(str, Enum):
    ACCOUNT = "Account"
    CONVERSATIONS = "Conversations"
    SYNC = "Sync"
    SERVERLESS = "Serverless"

    def __str__(self) -> str:
        return self.value


def print_welcome_message() -> None:
    print()
    print(BANNER)
    print("Welcome to Twilly! I'm here to help you interact with Twilio!")
    print()


def request_credentials() -> Credentials:
    account_sid = prompts.ask(
        "Please provide an account SID:",
        placeholder="AC...",
        validators=[prompts.sid_validator("AC", "Account")],
    )
    if account_sid is None:
        prompts.interrupted()
    auth_token = prompts.secret(
        "Provide the auth token (input hidden):",
        validators=[
            lambda value: None
            if len(value) == 32
            else "Your auth token should be 32 characters in length"
        ],
    )
    if auth_token is None:
        prompts.interrupted()
    try:
        return Credentials.build(account_sid, auth_token)
    except ConfigurationError as exc:
        fatal(exc)


def resolve_credentials(store: ProfileStore) -> tuple[Credentials, bool]:
    """
    Return the credentials to use and whether they came from the profile.
    Profile credentials were verified when stored and are not checked again.
    """
    stored = store.load()
    if stored is not None:
        use_profile = prompts.confirm(
            f"Account ({stored.account_sid}) found in memory. Use this profile?",
            default=True,
        )
        if use_profile is None:
            prompts.interrupted()
        if use_profile:
            return stored, True
        return request_credentials(), False

    settings = get_config()
    if settings.has_credentials:
        try:
            return Credentials.build(settings.account_sid, settings.auth_token), False
        except ConfigurationError as exc:
            fatal(exc)
    return request_credentials(), False


async def check_account(twilio: Client) -> None:
    print("Checking account...")
    account = await or_exit(twilio.accounts().get())
    print(
        f"✅ Account details good! {account.friendly_name} ({account.type} - {account.status})"
    )


async def main_menu(twilio: Client) -> None:
    pacer = Pacer()
    while True:
        choice = prompts.select("Select a resource:", [*SubResource, prompts.EXIT])
        if choice is None or choice == prompts.EXIT:
            return
        if choice is SubResource.ACCOUNT:
            await choose_account_action(twilio)
        elif choice is SubResource.CONVERSATIONS:
            await choose_conversation_action(twilio, pacer)
        elif choice is SubResource.SYNC:
            await choose_sync_action(twilio)
        elif choice is SubResource.SERVERLESS:
            await choose_serverless_action(twilio)


async def main(profile_dir: Path | None = None) -> None:
    print_welcome_message()

    path = profile_dir / get_config().app_name / "profile.json" if profile_dir else None
    store = ProfileStore(path)
    credentials, from_profile = resolve_credentials(store)
    bind_context(account_sid=credentials.account_sid)

    async with Client(credentials) as twilio:
        if not from_profile:
            await check_account(twilio)
            store.store(credentials)
        await main_menu(twilio)


def run() -> None:
    parser = argparse.ArgumentParser(
        prog="twilly", description="Interactive terminal client for Twilio"
    )
    parser.add_argument(
        "--profile-dir",
        type=Path,
        default=None,
        help="Directory holding the stored profile (default: TWILLY_PROFILE_DIR)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for diagnostics on stderr (default: TWILLY_LOG_LEVEL)",
    )
    args = parser.parse_args()

    configure_logging(args.log_level)
    get_logger(__name__).debug("twilly.start", profile_dir=str(args.profile_dir or ""))

    try:
        asyncio.run(main(args.profile_dir))
    except KeyboardInterrupt:
        prompts.interrupted()


if __name__ == "__main__":
    run()
