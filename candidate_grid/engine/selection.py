"""Selection set bookkeeping.

Selections are frozensets of record identities; every operation returns a
new set. Narrowing the visible rows never prunes the selection; only
removing records does, through prune_selection.
"""

from collections.abc import Callable, Iterable, Sequence

from candidate_grid.core.schemas import CandidateRecord

Selection = frozenset[str]


def toggle_selection(selection: Selection, record_id: str) -> Selection:
    if record_id in selection:
        return selection - {record_id}
    return selection | {record_id}


def toggle_all_selection(selection: Selection, visible_ids: Iterable[str]) -> Selection:
    """Select every visible row, or clear when exactly those rows are selected.

    This is a reset to full-or-empty, not a per-row toggle.
    """
    visible = frozenset(visible_ids)
    if selection == visible:
        return frozenset()
    return visible


def clear_selection() -> Selection:
    return frozenset()


def prune_selection(selection: Selection, surviving_ids: Iterable[str]) -> Selection:
    """Drop identities that no longer exist in the collection."""
    return selection & frozenset(surviving_ids)


def bulk_apply(
    records: Sequence[CandidateRecord],
    selection: Selection,
    fn: Callable[[CandidateRecord], CandidateRecord],
) -> tuple[CandidateRecord, ...]:
    """Return a new collection with ``fn`` applied to every selected record."""
    return tuple(fn(r) if r.id in selection else r for r in records)
