"""
twilly.runtime.serialize
─────────────────────────
Wire encoding for Twilio requests and responses.

Outgoing parameters are flattened into ordered (name, value) string pairs,
which httpx places in the query string (GET) or a form body (everything
else). Incoming bodies are JSON validated into pydantic types.
"""
from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any, Type, TypeVar, get_origin

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_pascal

T = TypeVar("T")

Params = Mapping[str, Any] | Sequence[tuple[str, Any]] | BaseModel


class ParamsModel(BaseModel):
    """
    Base for request parameter models. Fields are snake_case in Python and
    PascalCase on the wire (FriendlyName, PageSize, ...); a field can still
    override its wire name with an explicit alias.
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        extra="forbid",
    )


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def encode_params(params: Params | None) -> list[tuple[str, str]]:
    """
    Flatten request parameters into (name, value) pairs.

    Pydantic models are dumped by alias so field names match Twilio's
    PascalCase parameters; unset (None) values are dropped.

    Usage:
        encode_params({"PageSize": 50, "State": None})   # → [("PageSize", "50")]
        encode_params(UpdateConversation(state=State.CLOSED))
    """
    if params is None:
        return []
    if isinstance(params, BaseModel):
        items = params.model_dump(mode="json", by_alias=True, exclude_none=True).items()
    elif isinstance(params, Mapping):
        items = params.items()
    else:
        items = params
    return [(key, _encode_value(value)) for key, value in items if value is not None]


def deserialize(data: bytes | str, target: Type[T]) -> T:
    """
    Validate a JSON body into *target* (a model, a generic alias, or any
    type pydantic understands). Raises pydantic.ValidationError on failure.

    Usage:
        account = deserialize(response.content, Account)
    """
    if get_origin(target) is None and isinstance(target, type) and issubclass(target, BaseModel):
        return target.model_validate_json(data)
    return TypeAdapter(target).validate_json(data)


def to_dict(obj: BaseModel) -> dict[str, Any]:
    """Convert a model to a plain JSON-ready dict (for printing and saving)."""
    return obj.model_dump(mode="json")


__all__ = ["Params", "ParamsModel", "encode_params", "deserialize", "to_dict"]
