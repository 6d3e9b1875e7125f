"""
twilly.runtime.validate
────────────────────────
Parameter validation via Pydantic v2. Raises twilly ValidationError (not
raw Pydantic errors) so callers only ever handle the four error kinds.
"""
from __future__ import annotations

from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from twilly.core.errors import ValidationError

T = TypeVar("T", bound=BaseModel)


def validate_input(model: Type[T], data: Any) -> T:
    """
    Validate raw data against a parameter model.
    Raises twilly ValidationError (not Pydantic's) on failure, before any
    request is sent.

    Usage:
        params = validate_input(ServiceParams, {"reachability_debouncing_window": 500})
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        fields = {
            ".".join(str(loc) for loc in err["loc"]): err["msg"]
            for err in exc.errors()
        }
        message = "; ".join(_strip_prefix(msg) for msg in fields.values())
        raise ValidationError(message, fields=fields) from exc


def _strip_prefix(msg: str) -> str:
    # pydantic prefixes ValueError messages raised in validators
    return msg.removeprefix("Value error, ")


__all__ = ["validate_input"]
