"""Predicate evaluator: applies one FilterCondition to one record.

Coercions are explicit and total — they never raise:
  to_number  decimal parse, NaN on failure (NaN compares false to everything)
  to_bool    truthiness table below
  to_date    calendar date from ISO text, None on failure
  stringify  text form used by text operators, search and export

An operator the condition's type does not define lets the record through
(fail-open).
"""

import logging
import math
import operator
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Any

from candidate_grid.core.conditions import FilterCondition
from candidate_grid.core.registry import FILTER_OPERATORS, record_value
from candidate_grid.core.schemas import CandidateRecord

logger = logging.getLogger(__name__)

NAN = math.nan


def stringify(value: Any) -> str:
    """Render a field value as text. String-sets join with ', '."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (tuple, list)):
        return ", ".join(stringify(v) for v in value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def to_number(value: Any) -> float:
    """Coerce to float. Anything that is not a clean decimal becomes NaN."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return NAN
        try:
            number = float(text)
        except ValueError:
            return NAN
        # float() also accepts "inf" and "nan" spellings
        return number if math.isfinite(number) else NAN
    return NAN


def to_bool(value: Any) -> bool:
    """Truthiness table.

    None, False, 0, NaN and "" are false. Non-empty strings (including
    "false"), non-zero numbers and True are true. Sequences are true when
    non-empty.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not (value == 0 or math.isnan(value))
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (tuple, list, set, frozenset)):
        return len(value) > 0
    return True


def to_date(value: Any) -> date | None:
    """Coerce to a calendar date, dropping any time part."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def is_blank(value: Any) -> bool:
    """True when the value is falsy or its text form trims to empty."""
    return not to_bool(value) or stringify(value).strip() == ""


# ---------------------------------------------------------------------------
# Operator tables
# ---------------------------------------------------------------------------

_TEXT_OPERATORS: dict[str, Callable[[str, str], bool]] = {
    "is": lambda cell, target: cell == target,
    "is_not": lambda cell, target: cell != target,
    "contains": lambda cell, target: target in cell,
    "does_not_contain": lambda cell, target: target not in cell,
    "starts_with": lambda cell, target: cell.startswith(target),
    "ends_with": lambda cell, target: cell.endswith(target),
}

_NUMBER_OPERATORS: dict[str, Callable[[float, float], bool]] = {
    "equals": operator.eq,
    "not_equals": operator.ne,
    "greater_than": operator.gt,
    "greater_than_equal": operator.ge,
    "less_than": operator.lt,
    "less_than_equal": operator.le,
}

_DATE_COMPARISONS: dict[str, Callable[[date, date], bool]] = {
    "is": operator.eq,
    "is_before": operator.lt,
    "is_after": operator.gt,
    "is_on_or_before": operator.le,
    "is_on_or_after": operator.ge,
}

_DATE_WINDOWS: dict[str, Callable[[date, date], bool]] = {
    "last_7_days": lambda d, today: today - timedelta(days=7) <= d <= today,
    "next_30_days": lambda d, today: today <= d <= today + timedelta(days=30),
    "is_today": lambda d, today: d == today,
    "is_yesterday": lambda d, today: d == today - timedelta(days=1),
    "is_tomorrow": lambda d, today: d == today + timedelta(days=1),
}


def evaluate(
    record: CandidateRecord,
    condition: FilterCondition,
    today: date | None = None,
) -> bool:
    """Return True if the record passes the condition.

    Args:
        record: The record to test.
        condition: The filter condition. Its ``value`` is ignored by
            value-less operators.
        today: Reference date for relative date windows (defaults to the
            local current date).
    """
    field = record_value(record, condition.column)
    cell = field.value
    data_type = condition.data_type
    if field.kind == "string_set":
        cell = stringify(cell)
        data_type = "text"

    op = condition.operator
    if op not in FILTER_OPERATORS[data_type]:
        logger.debug("Operator '%s' not defined for %s — passing record", op, data_type)
        return True

    if op == "is_empty":
        return is_blank(cell)
    if op == "is_not_empty":
        return not is_blank(cell)

    if data_type == "text":
        return _TEXT_OPERATORS[op](stringify(cell).casefold(), condition.value.casefold())
    if data_type == "number":
        return _compare_numbers(_NUMBER_OPERATORS[op], cell, condition.value)
    if data_type == "date":
        return _evaluate_date(op, cell, condition.value, today or date.today())
    # boolean
    truth = to_bool(cell)
    return truth if op == "is_true" else not truth


def _compare_numbers(compare: Callable[[float, float], bool], cell: Any, target: str) -> bool:
    left = to_number(cell)
    right = to_number(target)
    if math.isnan(left) or math.isnan(right):
        return False
    return compare(left, right)


def _evaluate_date(op: str, cell: Any, target: str, today: date) -> bool:
    cell_date = to_date(cell)
    if cell_date is None:
        return False
    if op in _DATE_WINDOWS:
        return _DATE_WINDOWS[op](cell_date, today)
    target_date = to_date(target)
    if target_date is None:
        return False
    return _DATE_COMPARISONS[op](cell_date, target_date)
