"""Tests for rank validation."""

import pytest

from candidate_grid.core.errors import RankConflictError
from candidate_grid.core.schemas import CandidateRecord
from candidate_grid.engine.ranks import RankIndex, check_rank, is_rank_valid


@pytest.fixture
def records() -> list[CandidateRecord]:
    return [
        CandidateRecord(id="a", rank=1),
        CandidateRecord(id="b", rank=2),
        CandidateRecord(id="c", rank=3),
        CandidateRecord(id="d"),
    ]


class TestIsRankValid:
    def test_conflict(self, records: list[CandidateRecord]) -> None:
        assert not is_rank_valid(records, 2, excluding_id="a")

    def test_free_rank(self, records: list[CandidateRecord]) -> None:
        assert is_rank_valid(records, 4, excluding_id="a")
        assert is_rank_valid(records, 4, excluding_id="d")

    def test_non_positive(self, records: list[CandidateRecord]) -> None:
        assert not is_rank_valid(records, 0, excluding_id="d")
        assert not is_rank_valid(records, -1, excluding_id="d")

    def test_own_rank_is_valid(self, records: list[CandidateRecord]) -> None:
        assert is_rank_valid(records, 2, excluding_id="b")

    def test_no_exclusion(self, records: list[CandidateRecord]) -> None:
        assert not is_rank_valid(records, 1)
        assert is_rank_valid(records, 9)

    @pytest.mark.parametrize("rank", [True, 2.5, "4", None])
    def test_non_integers(self, records: list[CandidateRecord], rank: object) -> None:
        assert not is_rank_valid(records, rank, excluding_id="d")

    def test_integral_float(self, records: list[CandidateRecord]) -> None:
        assert is_rank_valid(records, 4.0, excluding_id="d")

    def test_empty_collection(self) -> None:
        assert is_rank_valid([], 1)


class TestRankIndex:
    def test_matches_scan(self, records: list[CandidateRecord]) -> None:
        index = RankIndex(records)
        for rank in (0, 1, 2, 3, 4):
            for excluding in ("a", "b", "d", None):
                assert index.is_valid(rank, excluding) == is_rank_valid(records, rank, excluding)

    def test_holder(self, records: list[CandidateRecord]) -> None:
        index = RankIndex(records)
        assert index.holder(3) == "c"
        assert index.holder(4) is None


class TestCheckRank:
    def test_returns_rank(self, records: list[CandidateRecord]) -> None:
        assert check_rank(records, 5, "d") == 5

    def test_duplicate_raises(self, records: list[CandidateRecord]) -> None:
        with pytest.raises(RankConflictError) as exc:
            check_rank(records, 2, "a")
        assert exc.value.rank == 2
        assert exc.value.holder_id == "b"

    def test_non_positive_raises(self, records: list[CandidateRecord]) -> None:
        with pytest.raises(RankConflictError) as exc:
            check_rank(records, 0, "a")
        assert exc.value.holder_id is None

    def test_is_value_error(self, records: list[CandidateRecord]) -> None:
        with pytest.raises(ValueError, match="already held"):
            check_rank(records, 3, "a")
