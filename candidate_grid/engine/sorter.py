"""Single-key stable sort for the grid view."""

import logging
from collections.abc import Sequence
from typing import Any

from candidate_grid.core.registry import get_column, record_value
from candidate_grid.core.schemas import CandidateRecord, SortConfig
from candidate_grid.engine.predicates import stringify

logger = logging.getLogger(__name__)


def sort_key(record: CandidateRecord, key: str) -> tuple[int, Any]:
    """Sort key for one record: present values first, in native order.

    String-sets order by their joined text.
    """
    field = record_value(record, key)
    if field.kind == "empty":
        return (1, "")
    if field.kind == "string_set":
        return (0, stringify(field.value))
    return (0, field.value)


def sort_records(
    records: Sequence[CandidateRecord],
    config: SortConfig | None,
) -> list[CandidateRecord]:
    """Return records ordered by the configured key.

    Python's sort is stable in both directions, so records with equal keys
    keep their input order. No config returns the input order unchanged.
    """
    if config is None:
        return list(records)
    result = sorted(
        records,
        key=lambda r: sort_key(r, config.key),
        reverse=config.direction == "descending",
    )
    logger.debug("Sorted %d records by %s %s", len(result), config.key, config.direction)
    return result


def request_sort(current: SortConfig | None, key: str) -> SortConfig:
    """Next sort config after the user asks to sort by ``key``.

    Asking again for the key currently sorted ascending flips it to
    descending; any other request sorts ascending on ``key``.
    """
    get_column(key)
    if current is not None and current.key == key and current.direction == "ascending":
        return SortConfig(key=key, direction="descending")
    return SortConfig(key=key, direction="ascending")
