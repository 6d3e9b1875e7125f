"""
twilly_cli.prompts
───────────────────
Terminal prompts for the interactive client, built on input() and getpass.

Every prompt returns None when the user cancels it (Ctrl-D / EOF) so the
caller can step back a menu. Ctrl-C ends the program with exit code 130.
"""
from __future__ import annotations

import getpass
import sys
from collections.abc import Callable, Sequence
from datetime import date
from typing import Any, NoReturn, TypeVar

T = TypeVar("T")

BACK = "Back"
EXIT = "Exit"
ANY = "Any"

Validator = Callable[[str], "str | None"]


# ── Low level ─────────────────────────────────────────────────────────────────

def interrupted() -> NoReturn:
    print(file=sys.stderr)
    print("Operation interrupted. Closing program.", file=sys.stderr)
    raise SystemExit(130)


def exit_program() -> NoReturn:
    raise SystemExit(0)


def _read(prompt: str, *, hidden: bool = False) -> str | None:
    try:
        if hidden:
            return getpass.getpass(prompt)
        return input(prompt)
    except EOFError:
        print()
        return None
    except KeyboardInterrupt:
        interrupted()


def _first_error(value: str, validators: Sequence[Validator]) -> str | None:
    for validator in validators:
        error = validator(value)
        if error:
            return error
    return None


# ── Validators ────────────────────────────────────────────────────────────────

def sid_validator(prefix: str, name: str) -> Validator:
    """Twilio SIDs are a two letter prefix followed by 32 hex characters."""

    def validate(value: str) -> str | None:
        if value.startswith(prefix) and len(value) == 34:
            return None
        return f"{name} SID should be 34 characters in length and start with {prefix}"

    return validate


def not_empty(value: str) -> str | None:
    return None if value else "Enter at least one character"


# ── Prompts ───────────────────────────────────────────────────────────────────

def ask(
    question: str,
    *,
    default: str | None = None,
    placeholder: str | None = None,
    validators: Sequence[Validator] = (),
) -> str | None:
    """Ask for free text. Re-prompts until every validator passes."""
    hint = f" [{placeholder}]" if placeholder else ""
    if default:
        hint += f" (default: {default})"
    while True:
        response = _read(f"{question}{hint} ")
        if response is None:
            return None
        result = response.strip() or (default or "")
        error = _first_error(result, validators)
        if error:
            print(error)
            continue
        return result


def secret(question: str, *, validators: Sequence[Validator] = ()) -> str | None:
    """Ask for hidden input (auth tokens)."""
    while True:
        response = _read(f"{question} ", hidden=True)
        if response is None:
            return None
        result = response.strip()
        error = _first_error(result, validators)
        if error:
            print(error)
            continue
        return result


def confirm(question: str, *, default: bool = False) -> bool | None:
    """Ask a yes/no question."""
    default_text = "Y/n" if default else "y/N"
    response = _read(f"{question} ({default_text}) ")
    if response is None:
        return None
    response = response.strip().lower()
    if not response:
        return default
    return response in ("y", "yes", "true", "1")


def select(
    question: str,
    options: Sequence[T],
    *,
    label: Callable[[T], str] = str,
) -> T | None:
    """
    Choose one option by number or by its exact label.

    Usage:
        state = select("Filter by state?", list(State))
    """
    if not options:
        return None
    labels = [label(option) for option in options]
    while True:
        print(question)
        for number, text in enumerate(labels, start=1):
            print(f"  [{number}] {text}")
        response = _read("Choose an option: ")
        if response is None:
            return None
        response = response.strip()
        if response.isdigit() and 1 <= int(response) <= len(options):
            return options[int(response) - 1]
        if response in labels:
            return options[labels.index(response)]
        print("Invalid choice. Please try again.")


def multi_select(
    question: str,
    options: Sequence[T],
    *,
    label: Callable[[T], str] = str,
) -> list[T] | None:
    """Choose any number of options as comma-separated numbers; empty selects none."""
    labels = [label(option) for option in options]
    while True:
        print(question)
        for number, text in enumerate(labels, start=1):
            print(f"  [{number}] {text}")
        response = _read("Choose options (comma-separated): ")
        if response is None:
            return None
        parts = [part.strip() for part in response.split(",") if part.strip()]
        if all(part.isdigit() and 1 <= int(part) <= len(options) for part in parts):
            return [options[int(part) - 1] for part in parts]
        print("Invalid choice. Please try again.")


def choose_action(
    question: str,
    options: Sequence[T],
    *,
    label: Callable[[T], str] = str,
) -> T | str | None:
    """select() with trailing Back and Exit entries, returned as BACK / EXIT."""
    choices: list[Any] = [*options, BACK, EXIT]
    return select(
        question,
        choices,
        label=lambda option: option if option is BACK or option is EXIT else label(option),
    )


def pick(
    question: str,
    options: Sequence[T],
    *,
    label: Callable[[T], str] = str,
) -> T | None:
    """
    choose_action() folded into one result: the chosen option, or None for
    Back and cancel. Exit ends the program.
    """
    choice = choose_action(question, options, label=label)
    if choice is EXIT:
        exit_program()
    if choice is None or choice is BACK:
        return None
    return choice  # type: ignore[return-value]


def choose_filter(
    question: str,
    options: Sequence[T],
    *,
    label: Callable[[T], str] = str,
) -> T | str | None:
    """select() with a leading Any entry, returned as ANY (no filter)."""
    choices: list[Any] = [ANY, *options]
    return select(
        question,
        choices,
        label=lambda option: option if option is ANY else label(option),
    )


def ask_date(
    question: str,
    *,
    minimum: date | None = None,
    maximum: date | None = None,
) -> date | None:
    """Ask for a YYYY-MM-DD date, optionally within [minimum, maximum]."""

    def validate(value: str) -> str | None:
        try:
            chosen = date.fromisoformat(value)
        except ValueError:
            return "Enter a date as YYYY-MM-DD"
        if minimum and chosen < minimum:
            return f"Date must be on or after {minimum.isoformat()}"
        if maximum and chosen > maximum:
            return f"Date must be on or before {maximum.isoformat()}"
        return None

    response = ask(question, placeholder="YYYY-MM-DD", validators=[validate])
    return date.fromisoformat(response) if response is not None else None


__all__ = [
    "BACK",
    "EXIT",
    "ANY",
    "interrupted",
    "exit_program",
    "sid_validator",
    "not_empty",
    "ask",
    "secret",
    "confirm",
    "select",
    "multi_select",
    "choose_action",
    "pick",
    "choose_filter",
    "ask_date",
]
