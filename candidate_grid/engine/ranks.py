"""Rank validation: ranks are positive integers, unique across the collection.

Validation gates a rank update before it is applied. A rejected update
raises RankConflictError and the collection keeps its prior value.
"""

import logging
from collections.abc import Iterable

from candidate_grid.core.errors import RankConflictError
from candidate_grid.core.schemas import CandidateRecord

logger = logging.getLogger(__name__)


def _as_rank(value: object) -> int | None:
    """Return the value as a positive int rank, or None if it cannot be one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 1:
        return value
    return None


class RankIndex:
    """rank → identity index over one snapshot of the collection.

    Usage::

        index = RankIndex(records)
        if index.is_valid(3, excluding_id="42"):
            ...
    """

    def __init__(self, records: Iterable[CandidateRecord]) -> None:
        self._holders: dict[int, str] = {
            r.rank: r.id for r in records if r.rank is not None
        }

    def holder(self, rank: int) -> str | None:
        """Return the identity holding ``rank``, if any."""
        return self._holders.get(rank)

    def is_valid(self, candidate_rank: object, excluding_id: str | None = None) -> bool:
        rank = _as_rank(candidate_rank)
        if rank is None:
            return False
        holder = self._holders.get(rank)
        return holder is None or holder == excluding_id


def is_rank_valid(
    records: Iterable[CandidateRecord],
    candidate_rank: object,
    excluding_id: str | None = None,
) -> bool:
    """True if ``candidate_rank`` is >= 1 and no other record holds it."""
    rank = _as_rank(candidate_rank)
    if rank is None:
        return False
    return not any(r.rank == rank and r.id != excluding_id for r in records)


def check_rank(
    records: Iterable[CandidateRecord],
    candidate_rank: object,
    excluding_id: str | None = None,
) -> int:
    """Validate a rank update, returning the rank as an int.

    Raises:
        RankConflictError: If the rank is not positive or another record holds it.
    """
    rank = _as_rank(candidate_rank)
    if rank is None:
        logger.info("Rejected rank %r for '%s': not a positive integer", candidate_rank, excluding_id)
        raise RankConflictError(candidate_rank)
    holder = RankIndex(records).holder(rank)
    if holder is not None and holder != excluding_id:
        logger.info("Rejected rank %d for '%s': held by '%s'", rank, excluding_id, holder)
        raise RankConflictError(rank, holder)
    return rank
