"""Filter chain for the grid view.

Filter order:
  1. SearchFilter     — free-text query across every field
  2. ConditionFilter  — one per active condition, AND semantics

Order does not change the result set; putting search first just shrinks
the input the conditions see. Inactive conditions never become filters.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import date

from candidate_grid.core.conditions import FilterCondition
from candidate_grid.core.schemas import CandidateRecord
from candidate_grid.engine.predicates import evaluate
from candidate_grid.engine.search import matches_query

logger = logging.getLogger(__name__)

# A filter is a callable that takes records and returns a subset, in order.
RecordFilter = Callable[[list[CandidateRecord]], list[CandidateRecord]]


class SearchFilter:
    """Keep records where the query appears in any field (case-insensitive).

    An empty query is a no-op.
    """

    def __init__(self, query: str) -> None:
        self._query = query

    def __call__(self, records: list[CandidateRecord]) -> list[CandidateRecord]:
        if not self._query:
            return records
        result = [r for r in records if matches_query(r, self._query)]
        excluded = len(records) - len(result)
        if excluded:
            logger.debug("SearchFilter(%r): removed %d records", self._query, excluded)
        return result


class ConditionFilter:
    """Keep records that pass a single filter condition."""

    def __init__(self, condition: FilterCondition, today: date | None = None) -> None:
        self._condition = condition
        self._today = today

    def __call__(self, records: list[CandidateRecord]) -> list[CandidateRecord]:
        result = [r for r in records if evaluate(r, self._condition, self._today)]
        excluded = len(records) - len(result)
        if excluded:
            c = self._condition
            logger.debug(
                "ConditionFilter(%s %s %r): removed %d records",
                c.column, c.operator, c.value, excluded,
            )
        return result


def build_filters(
    query: str,
    conditions: Iterable[FilterCondition],
    today: date | None = None,
) -> list[RecordFilter]:
    """Build the chain: search first, then one filter per active condition."""
    filters: list[RecordFilter] = [SearchFilter(query)]
    for condition in conditions:
        if not condition.is_active:
            logger.debug("Skipping inactive condition '%s'", condition.id)
            continue
        filters.append(ConditionFilter(condition, today))
    return filters


def run_filter_chain(
    records: Sequence[CandidateRecord],
    filters: list[RecordFilter],
) -> list[CandidateRecord]:
    """Apply filters in order, returning the surviving records."""
    result = list(records)
    for f in filters:
        if not result:
            break
        result = f(result)
    return result


def apply_query(records: Sequence[CandidateRecord], query: str) -> list[CandidateRecord]:
    return run_filter_chain(records, [SearchFilter(query)])


def apply_conditions(
    records: Sequence[CandidateRecord],
    conditions: Iterable[FilterCondition],
    today: date | None = None,
) -> list[CandidateRecord]:
    return run_filter_chain(records, build_filters("", conditions, today))


def filter_records(
    records: Sequence[CandidateRecord],
    query: str,
    conditions: Iterable[FilterCondition],
    today: date | None = None,
) -> list[CandidateRecord]:
    """Return the records matching the query and every active condition."""
    result = run_filter_chain(records, build_filters(query, conditions, today))
    logger.debug("Filtered %d → %d records", len(records), len(result))
    return result
