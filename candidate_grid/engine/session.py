"""Table session: wires the collection, filters, sort, selection and export.

Data flow:
  1. Filter pipeline (search, then active conditions) → filtered view
  2. Sort engine → visible view
  3. Selection overlay, read by the caller
  4. Exporters read the visible view

Derived views are recomputed on every call; nothing is cached.
"""

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from candidate_grid.core.conditions import (
    FilterCondition,
    change_column,
    change_operator,
    change_value,
    new_condition,
)
from candidate_grid.core.config import Settings
from candidate_grid.core.errors import GridError
from candidate_grid.core.registry import columns_of, get_column
from candidate_grid.core.schemas import CandidateRecord, CandidateStatus, ColumnDefinition, SortConfig
from candidate_grid.engine import collection, selection
from candidate_grid.engine.exporter import to_csv, to_json
from candidate_grid.engine.pipeline import filter_records
from candidate_grid.engine.ranks import is_rank_valid
from candidate_grid.engine.sorter import request_sort, sort_records

logger = logging.getLogger(__name__)


class TableSession:
    """Holds one grid's state and answers view queries over it.

    Usage::

        session = TableSession(settings.records, settings)
        session.set_query("san")
        cond = session.add_filter("annualSalaryExpectation", "greater_than", "70000")
        session.request_sort("name")
        rows = session.visible()
        csv_text = session.export_csv()
    """

    def __init__(
        self,
        records: Iterable[CandidateRecord] = (),
        settings: Settings | None = None,
        id_gen: collection.IdGenerator | None = None,
        today: date | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self.records: collection.Records = tuple(records)
        self.query = ""
        self.conditions: list[FilterCondition] = []
        self.sort_config: SortConfig | None = None
        self.selection: selection.Selection = frozenset()
        self._today = today
        self._id_gen = id_gen or collection.make_id_generator(
            self._settings.ids, taken=(r.id for r in self.records),
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "TableSession":
        return cls(settings.records, settings, **kwargs)

    @property
    def enforce_rank(self) -> bool:
        return self._settings.ranks.enforce_unique

    # --- derived views -------------------------------------------------

    def filtered(self) -> list[CandidateRecord]:
        return filter_records(self.records, self.query, self.conditions, self._today)

    def visible(self) -> list[CandidateRecord]:
        return sort_records(self.filtered(), self.sort_config)

    def visible_ids(self) -> list[str]:
        return [r.id for r in self.visible()]

    def is_selected(self, record_id: str) -> bool:
        return record_id in self.selection

    # --- search and filters --------------------------------------------

    def set_query(self, query: str) -> None:
        self.query = query

    def add_filter(
        self,
        column: str | None = None,
        operator: str | None = None,
        value: str = "",
    ) -> FilterCondition:
        condition = new_condition(self._id_gen.next_id(), column, operator, value)
        self.conditions.append(condition)
        logger.debug("Added filter %s %s %r", condition.column, condition.operator, condition.value)
        return condition

    def update_filter(self, condition: FilterCondition) -> None:
        """Replace the condition that has the same id."""
        self.conditions = [condition if c.id == condition.id else c for c in self.conditions]

    def change_filter_column(self, condition_id: str, column: str) -> FilterCondition:
        updated = change_column(self._condition(condition_id), column)
        self.update_filter(updated)
        return updated

    def change_filter_operator(self, condition_id: str, operator: str) -> FilterCondition:
        updated = change_operator(self._condition(condition_id), operator)
        self.update_filter(updated)
        return updated

    def change_filter_value(self, condition_id: str, value: str) -> FilterCondition:
        updated = change_value(self._condition(condition_id), value)
        self.update_filter(updated)
        return updated

    def remove_filter(self, condition_id: str) -> None:
        self.conditions = [c for c in self.conditions if c.id != condition_id]

    def reset_filters(self) -> None:
        """Clear the search query and every condition."""
        self.query = ""
        self.conditions = []

    def _condition(self, condition_id: str) -> FilterCondition:
        for c in self.conditions:
            if c.id == condition_id:
                return c
        msg = f"Filter '{condition_id}' not found"
        raise GridError(msg)

    # --- sort ----------------------------------------------------------

    def request_sort(self, key: str) -> SortConfig:
        self.sort_config = request_sort(self.sort_config, key)
        return self.sort_config

    def clear_sort(self) -> None:
        self.sort_config = None

    # --- selection -----------------------------------------------------

    def toggle_row(self, record_id: str) -> None:
        self.selection = selection.toggle_selection(self.selection, record_id)

    def toggle_all(self) -> None:
        self.selection = selection.toggle_all_selection(self.selection, self.visible_ids())

    def clear_selection(self) -> None:
        self.selection = selection.clear_selection()

    # --- row commands --------------------------------------------------

    def add_row(self, **fields: Any) -> CandidateRecord:
        self.records = collection.add_record(
            self.records, self._id_gen, enforce_rank=self.enforce_rank, **fields,
        )
        return self.records[-1]

    def duplicate_row(self, record_id: str) -> CandidateRecord:
        self.records = collection.duplicate_record(self.records, record_id, self._id_gen)
        return self.records[-1]

    def delete_row(self, record_id: str) -> None:
        self.records, self.selection = collection.remove_record(
            self.records, self.selection, record_id,
        )

    def delete_selected(self) -> int:
        """Delete every selected record and clear the selection."""
        before = len(self.records)
        self.records, _ = collection.remove_records(self.records, self.selection, self.selection)
        self.selection = selection.clear_selection()
        removed = before - len(self.records)
        logger.info("Deleted %d selected records", removed)
        return removed

    def update_field(self, record_id: str, key: str, value: Any) -> CandidateRecord:
        """Update one field; a rejected rank leaves the collection unchanged."""
        self.records = collection.update_field(
            self.records, record_id, key, value, enforce_rank=self.enforce_rank,
        )
        return collection.find_record(self.records, record_id)

    def set_status_for_selected(self, status: CandidateStatus) -> None:
        self.records = collection.set_status(self.records, self.selection, status)

    def is_rank_valid(self, candidate_rank: object, excluding_id: str | None = None) -> bool:
        return is_rank_valid(self.records, candidate_rank, excluding_id)

    # --- export --------------------------------------------------------

    def export_columns(self) -> list[ColumnDefinition]:
        keys = self._settings.export.columns
        if not keys:
            return list(columns_of())
        return [get_column(k) for k in keys]

    def export_csv(self) -> str:
        return to_csv(
            self.visible(), self.export_columns(), self._settings.export.line_terminator,
        )

    def export_json(self) -> str:
        return to_json(self.visible(), self.export_columns())

    def export(self, fmt: str | None = None) -> str:
        fmt = fmt or self._settings.export.format
        if fmt == "json":
            return self.export_json()
        return self.export_csv()
