"""Tests for twilly.runtime modules."""
from __future__ import annotations

from datetime import date

import pytest
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from twilly.core.errors import ValidationError
from twilly.resources.conversation import State, UpdateConversation
from twilly.resources.sync.services import ServiceParams
from twilly.runtime.serialize import ParamsModel, deserialize, encode_params, to_dict
from twilly.runtime.validate import validate_input


class SampleParams(ParamsModel):
    friendly_name: str | None = None
    page_size: int | None = None
    acl_enabled: bool | None = None
    start_date: date | None = None
    data: dict | None = None
    from_: str | None = Field(default=None, alias="From")


class Sample(BaseModel):
    sid: str
    count: int


# ── serialize ──────────────────────────────────────────────────────────────

class TestEncodeParams:
    def test_none_is_empty(self):
        assert encode_params(None) == []

    def test_mapping_drops_none(self):
        assert encode_params({"PageSize": 50, "State": None}) == [("PageSize", "50")]

    def test_pairs_keep_order(self):
        pairs = [("b", 1), ("a", 2)]
        assert encode_params(pairs) == [("b", "1"), ("a", "2")]

    def test_model_uses_pascal_case_aliases(self):
        params = SampleParams(friendly_name="demo", page_size=20)
        assert encode_params(params) == [("FriendlyName", "demo"), ("PageSize", "20")]

    def test_explicit_alias_wins(self):
        assert encode_params(SampleParams(from_="key-1")) == [("From", "key-1")]

    def test_booleans_are_lowercase(self):
        assert encode_params(SampleParams(acl_enabled=False)) == [("AclEnabled", "false")]
        assert encode_params({"AclEnabled": True}) == [("AclEnabled", "true")]

    def test_dates_are_iso(self):
        params = SampleParams(start_date=date(2024, 1, 31))
        assert encode_params(params) == [("StartDate", "2024-01-31")]

    def test_json_values_are_compact(self):
        params = SampleParams(data={"greeting": "hi", "n": 1})
        assert encode_params(params) == [("Data", '{"greeting":"hi","n":1}')]

    def test_enum_values(self):
        params = UpdateConversation(state=State.CLOSED)
        assert encode_params(params) == [("State", "closed")]

    def test_dotted_timer_aliases(self):
        params = UpdateConversation(timers_inactive="PT10M", timers_closed="PT1H")
        assert encode_params(params) == [
            ("Timers.Inactive", "PT10M"),
            ("Timers.Closed", "PT1H"),
        ]

    def test_unknown_field_rejected(self):
        with pytest.raises(PydanticValidationError):
            SampleParams(colour="red")


class TestDeserialize:
    def test_model(self):
        sample = deserialize(b'{"sid": "XX1", "count": 2, "extra": true}', Sample)
        assert sample == Sample(sid="XX1", count=2)

    def test_non_model_target(self):
        assert deserialize("[1, 2, 3]", list[int]) == [1, 2, 3]

    def test_wrong_shape_raises(self):
        with pytest.raises(PydanticValidationError):
            deserialize(b'{"sid": "XX1"}', Sample)

    def test_invalid_json_raises(self):
        with pytest.raises(PydanticValidationError):
            deserialize(b"<html>", Sample)

    def test_to_dict(self):
        assert to_dict(Sample(sid="XX1", count=2)) == {"sid": "XX1", "count": 2}


# ── validate ───────────────────────────────────────────────────────────────

class TestValidateInput:
    def test_valid_dict(self):
        params = validate_input(SampleParams, {"friendly_name": "demo"})
        assert params.friendly_name == "demo"

    def test_instance_passes_through(self):
        params = SampleParams(page_size=5)
        assert validate_input(SampleParams, params) is params

    def test_raises_twilly_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_input(SampleParams, {"page_size": "many"})
        assert "page_size" in exc_info.value.fields

    def test_validator_message_surfaces(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_input(ServiceParams, {"reachability_debouncing_window": 500})
        assert str(exc_info.value) == (
            "Validation error for provided arguments: "
            "Reachability debouncing window must be greater than 1000 milliseconds"
        )
