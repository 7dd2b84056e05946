"""Tests for core schemas: CandidateRecord, ColumnDefinition, SortConfig."""

import pytest
from pydantic import ValidationError

from candidate_grid.core.schemas import CandidateRecord, ColumnDefinition, SortConfig


def _make_record(**overrides: object) -> CandidateRecord:
    defaults: dict[str, object] = {
        "id": "1",
        "name": "John Doe",
        "email": "john@example.com",
        "location": "New York, NY",
        "submittedAt": "2024-07-26",
        "annualSalaryExpectation": 80000,
        "skills": ["React", "TypeScript"],
    }
    defaults.update(overrides)
    return CandidateRecord.model_validate(defaults)


class TestCandidateRecord:
    def test_camel_case_keys(self) -> None:
        r = _make_record()
        assert r.submitted_at == "2024-07-26"
        assert r.annual_salary_expectation == 80000

    def test_field_names_accepted(self) -> None:
        r = CandidateRecord(id="9", work_availability="Part-time")
        assert r.work_availability == "Part-time"

    def test_defaults(self) -> None:
        r = CandidateRecord(id="1")
        assert r.name == ""
        assert r.skills == ()
        assert r.starred is False
        assert r.status == "new"
        assert r.rank is None
        assert r.rating is None

    def test_skills_become_tuple(self) -> None:
        r = _make_record()
        assert r.skills == ("React", "TypeScript")

    def test_salary_keeps_int(self) -> None:
        assert isinstance(_make_record().annual_salary_expectation, int)

    def test_frozen_model(self) -> None:
        r = _make_record()
        with pytest.raises(ValidationError):
            r.name = "New Name"  # type: ignore[misc]

    def test_id_required(self) -> None:
        with pytest.raises(ValidationError):
            CandidateRecord(id="")

    def test_rank_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            _make_record(rank=0)

    def test_rating_bounds(self) -> None:
        assert _make_record(rating=5).rating == 5
        with pytest.raises(ValidationError):
            _make_record(rating=6)
        with pytest.raises(ValidationError):
            _make_record(rating=-1)

    def test_status_closed_set(self) -> None:
        assert _make_record(status="interview").status == "interview"
        with pytest.raises(ValidationError):
            _make_record(status="ghosted")

    def test_dump_by_alias(self) -> None:
        data = _make_record().model_dump(by_alias=True)
        assert "submittedAt" in data
        assert "annualSalaryExpectation" in data


class TestColumnDefinition:
    def test_type_restricted(self) -> None:
        with pytest.raises(ValidationError):
            ColumnDefinition(key="x", label="X", type="money")  # type: ignore[arg-type]

    def test_external_shape(self) -> None:
        c = ColumnDefinition(key="name", label="Name", type="text")
        assert c.model_dump() == {"key": "name", "label": "Name", "type": "text"}


class TestSortConfig:
    def test_default_ascending(self) -> None:
        assert SortConfig(key="name").direction == "ascending"

    def test_invalid_direction(self) -> None:
        with pytest.raises(ValidationError):
            SortConfig(key="name", direction="sideways")  # type: ignore[arg-type]
