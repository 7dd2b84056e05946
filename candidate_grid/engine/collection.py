"""Copy-on-write commands over the record collection.

The collection is a tuple of frozen records. Every command returns a new
tuple in which only the affected records differ; the input is untouched.
Identities come from an injectable IdGenerator so runs are deterministic.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import Any

from candidate_grid.core.config import IdConfig
from candidate_grid.core.errors import GridError, RecordNotFoundError
from candidate_grid.core.registry import field_name
from candidate_grid.core.schemas import CandidateRecord, CandidateStatus
from candidate_grid.engine.ranks import check_rank
from candidate_grid.engine.selection import Selection, bulk_apply, prune_selection

logger = logging.getLogger(__name__)

Records = tuple[CandidateRecord, ...]


# ---------------------------------------------------------------------------
# Identity generation
# ---------------------------------------------------------------------------


class IdGenerator(ABC):
    """Source of fresh record and condition identities."""

    @abstractmethod
    def next_id(self) -> str:
        """Return an identity not handed out before."""


class CounterIdGenerator(IdGenerator):
    """Monotonic string counter that skips identities already in use."""

    def __init__(self, start: int = 1, taken: Iterable[str] = ()) -> None:
        self._next = start
        self._taken = set(taken)

    def next_id(self) -> str:
        while str(self._next) in self._taken:
            self._next += 1
        issued = str(self._next)
        self._taken.add(issued)
        self._next += 1
        return issued


class UuidIdGenerator(IdGenerator):
    def next_id(self) -> str:
        return str(uuid.uuid4())


def make_id_generator(config: IdConfig, taken: Iterable[str] = ()) -> IdGenerator:
    if config.strategy == "uuid":
        return UuidIdGenerator()
    return CounterIdGenerator(start=config.start, taken=taken)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def find_record(records: Sequence[CandidateRecord], record_id: str) -> CandidateRecord:
    for r in records:
        if r.id == record_id:
            return r
    raise RecordNotFoundError(record_id)


def add_record(
    records: Sequence[CandidateRecord],
    id_gen: IdGenerator,
    *,
    enforce_rank: bool = True,
    **fields: Any,
) -> Records:
    """Append a new record with a fresh identity.

    ``fields`` may use column keys or Python field names.
    """
    new_id = id_gen.next_id()
    if any(r.id == new_id for r in records):
        msg = f"identity '{new_id}' is already in use"
        raise GridError(msg)
    data = {field_name(k): v for k, v in fields.items() if k != "id"}
    if enforce_rank and data.get("rank") is not None:
        data["rank"] = check_rank(records, data["rank"], new_id)
    record = CandidateRecord.model_validate({**data, "id": new_id})
    logger.debug("Added record '%s'", new_id)
    return (*records, record)


def duplicate_record(
    records: Sequence[CandidateRecord],
    record_id: str,
    id_gen: IdGenerator,
) -> Records:
    """Append a copy of a record under a fresh identity.

    The copy does not inherit the rank, which would otherwise be duplicated.
    """
    source = find_record(records, record_id)
    new_id = id_gen.next_id()
    copy = source.model_copy(update={"id": new_id, "rank": None})
    logger.debug("Duplicated record '%s' as '%s'", record_id, new_id)
    return (*records, copy)


def update_field(
    records: Sequence[CandidateRecord],
    record_id: str,
    key: str,
    value: Any,
    *,
    enforce_rank: bool = True,
) -> Records:
    """Replace one field of one record.

    Raises:
        RecordNotFoundError: If no record has ``record_id``.
        UnknownColumnError: If ``key`` is not a record field.
        RankConflictError: If a rank update is rejected; nothing changes.
        pydantic.ValidationError: If ``value`` is invalid for the field.
    """
    name = field_name(key)
    if name == "id":
        msg = "record identity cannot be changed"
        raise GridError(msg)
    current = find_record(records, record_id)
    if name == "rank" and enforce_rank and value is not None:
        value = check_rank(records, value, record_id)
    updated = CandidateRecord.model_validate({**current.model_dump(), name: value})
    logger.debug("Updated '%s'.%s", record_id, name)
    return tuple(updated if r.id == record_id else r for r in records)


def remove_record(
    records: Sequence[CandidateRecord],
    selection: Selection,
    record_id: str,
) -> tuple[Records, Selection]:
    """Remove one record and drop it from the selection."""
    find_record(records, record_id)
    return remove_records(records, selection, [record_id])


def remove_records(
    records: Sequence[CandidateRecord],
    selection: Selection,
    record_ids: Iterable[str],
) -> tuple[Records, Selection]:
    """Remove every record in ``record_ids``; unknown ids are ignored."""
    doomed = set(record_ids)
    remaining = tuple(r for r in records if r.id not in doomed)
    pruned = prune_selection(selection, (r.id for r in remaining))
    logger.debug("Removed %d records", len(records) - len(remaining))
    return remaining, pruned


def set_status(
    records: Sequence[CandidateRecord],
    record_ids: Iterable[str],
    status: CandidateStatus,
) -> Records:
    """Bulk status change for the given identities."""
    return bulk_apply(
        records,
        frozenset(record_ids),
        lambda r: CandidateRecord.model_validate({**r.model_dump(), "status": status}),
    )
