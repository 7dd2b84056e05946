"""Tests for FilterCondition construction, activation and edit helpers."""

import pytest
from pydantic import ValidationError

from candidate_grid.core.conditions import (
    FilterCondition,
    change_column,
    change_operator,
    change_value,
    new_condition,
)
from candidate_grid.core.errors import UnknownColumnError


class TestConstruction:
    def test_defaults_to_first_column(self) -> None:
        c = new_condition("1")
        assert c.column == "name"
        assert c.operator == "is"
        assert c.value == ""
        assert c.data_type == "text"

    def test_data_type_follows_column(self) -> None:
        c = new_condition("1", "annualSalaryExpectation")
        assert c.data_type == "number"
        assert c.operator == "equals"

    def test_unknown_column(self) -> None:
        with pytest.raises(UnknownColumnError):
            new_condition("1", "salary")

    def test_operator_must_match_type(self) -> None:
        with pytest.raises(ValidationError):
            new_condition("1", "name", "greater_than")

    def test_validator_rejects_unknown_column(self) -> None:
        with pytest.raises(ValidationError):
            FilterCondition(id="1", column="nope", operator="is", data_type="text")

    def test_external_shape(self) -> None:
        raw = {
            "id": "f1",
            "column": "location",
            "operator": "contains",
            "value": "san",
            "dataType": "text",
        }
        c = FilterCondition.model_validate(raw)
        assert c.model_dump(by_alias=True) == raw

    def test_frozen(self) -> None:
        c = new_condition("1")
        with pytest.raises(ValidationError):
            c.value = "x"  # type: ignore[misc]


class TestIsActive:
    def test_value_present(self) -> None:
        assert new_condition("1", "name", "contains", "jo").is_active

    def test_value_missing(self) -> None:
        assert not new_condition("1", "name", "contains").is_active

    @pytest.mark.parametrize("op", ["is_empty", "is_not_empty"])
    def test_valueless_text_operators(self, op: str) -> None:
        assert new_condition("1", "name", op).is_active

    @pytest.mark.parametrize("op", ["is_true", "is_false"])
    def test_valueless_boolean_operators(self, op: str) -> None:
        assert new_condition("1", "starred", op).is_active

    @pytest.mark.parametrize(
        "op", ["last_7_days", "next_30_days", "is_today", "is_yesterday", "is_tomorrow"],
    )
    def test_date_windows_need_a_value(self, op: str) -> None:
        assert not new_condition("1", "submittedAt", op).is_active
        assert new_condition("1", "submittedAt", op, "x").is_active

    def test_needs_value(self) -> None:
        assert new_condition("1", "name", "is").needs_value
        assert not new_condition("1", "name", "is_empty").needs_value


class TestEdits:
    def test_change_column_resets_operator_and_value(self) -> None:
        c = new_condition("1", "name", "contains", "jo")
        changed = change_column(c, "submittedAt")
        assert changed.id == "1"
        assert changed.column == "submittedAt"
        assert changed.data_type == "date"
        assert changed.operator == "is"
        assert changed.value == ""

    def test_change_column_unknown(self) -> None:
        with pytest.raises(UnknownColumnError):
            change_column(new_condition("1"), "nope")

    def test_change_operator(self) -> None:
        c = change_operator(new_condition("1", "name"), "ends_with")
        assert c.operator == "ends_with"

    def test_change_operator_invalid_for_type(self) -> None:
        with pytest.raises(ValidationError):
            change_operator(new_condition("1", "name"), "is_true")

    def test_change_value(self) -> None:
        original = new_condition("1", "name")
        changed = change_value(original, "Jane")
        assert changed.value == "Jane"
        assert original.value == ""
