"""Serialize an ordered view to CSV or JSON.

CSV rows quote every value but do not escape embedded double quotes; a
value containing ``"`` produces a row other CSV readers may misparse.
"""

import json
from collections.abc import Sequence

from candidate_grid.core.registry import record_value
from candidate_grid.core.schemas import CandidateRecord, ColumnDefinition
from candidate_grid.engine.predicates import stringify


def to_csv(
    records: Sequence[CandidateRecord],
    columns: Sequence[ColumnDefinition],
    line_terminator: str = "\n",
) -> str:
    """Export records as delimited text.

    The header row holds the column labels, comma-joined and unquoted.
    Each data row wraps every value in double quotes.
    """
    header = ",".join(c.label for c in columns)
    rows = [
        ",".join(f'"{stringify(record_value(r, c.key).value)}"' for c in columns)
        for r in records
    ]
    return line_terminator.join([header, *rows])


def to_json(
    records: Sequence[CandidateRecord],
    columns: Sequence[ColumnDefinition],
) -> str:
    """Export records as a JSON array of objects keyed by column key."""
    data = [
        {c.key: record_value(r, c.key).value for c in columns}
        for r in records
    ]
    return json.dumps(data, indent=2)
