"""Rendering of Twilio resources for the terminal."""
from __future__ import annotations

import json

from pydantic import BaseModel

from twilly.runtime.serialize import to_dict


def details(resource: BaseModel) -> None:
    print(json.dumps(to_dict(resource), indent=2))
    print()


def found(count: int, noun: str) -> None:
    if count == 0:
        print(f"No {noun} found.")
        print()
    else:
        print(f"Found {count} {noun}.")


__all__ = ["details", "found"]
