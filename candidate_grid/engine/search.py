"""Free-text search across every field of a record."""

from candidate_grid.core.schemas import CandidateRecord
from candidate_grid.engine.predicates import stringify


def matches_query(record: CandidateRecord, query: str) -> bool:
    """Return True if the query is a case-insensitive substring of any field.

    Every field counts, including the identity. An empty query matches all.
    """
    if not query:
        return True
    needle = query.casefold()
    return any(needle in stringify(value).casefold() for value in record.model_dump().values())
