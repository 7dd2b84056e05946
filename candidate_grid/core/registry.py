"""Schema registry: the fixed column set and the operators each type supports.

The registry is built once at import time and never mutated. Every other
module resolves column keys through it, so an unknown key fails here with
UnknownColumnError instead of deep inside an evaluation.
"""

from typing import Any, Literal, NamedTuple

from pydantic.alias_generators import to_camel

from candidate_grid.core.errors import UnknownColumnError
from candidate_grid.core.schemas import CandidateRecord, ColumnDefinition, DataType

# Operator value → display label, per data type. Order matters: the first
# operator of a type is the default when a condition switches to that type.
OPERATOR_LABELS: dict[DataType, dict[str, str]] = {
    "text": {
        "is": "is",
        "is_not": "is not",
        "contains": "contains",
        "does_not_contain": "does not contain",
        "starts_with": "starts with",
        "ends_with": "ends with",
        "is_empty": "is empty",
        "is_not_empty": "is not empty",
    },
    "number": {
        "equals": "is equal to",
        "not_equals": "is not equal to",
        "greater_than": "is greater than",
        "greater_than_equal": "is greater than or equal to",
        "less_than": "is less than",
        "less_than_equal": "is less than or equal to",
        "is_empty": "is empty",
        "is_not_empty": "is not empty",
    },
    "date": {
        "is": "is",
        "is_before": "is before",
        "is_after": "is after",
        "is_on_or_before": "is on or before",
        "is_on_or_after": "is on or after",
        "is_empty": "is empty",
        "is_not_empty": "is not empty",
        "last_7_days": "is in the last 7 days",
        "next_30_days": "is in the next 30 days",
        "is_today": "is today",
        "is_yesterday": "is yesterday",
        "is_tomorrow": "is tomorrow",
    },
    "boolean": {
        "is_true": "is checked / is true",
        "is_false": "is unchecked / is false",
    },
}

FILTER_OPERATORS: dict[DataType, tuple[str, ...]] = {
    data_type: tuple(labels) for data_type, labels in OPERATOR_LABELS.items()
}

# Operators that never look at the condition value.
VALUELESS_OPERATORS = frozenset({"is_empty", "is_not_empty", "is_true", "is_false"})

COLUMNS: tuple[ColumnDefinition, ...] = (
    ColumnDefinition(key="name", label="Name", type="text"),
    ColumnDefinition(key="email", label="Email", type="text"),
    ColumnDefinition(key="phone", label="Phone", type="text"),
    ColumnDefinition(key="location", label="Location", type="text"),
    ColumnDefinition(key="submittedAt", label="Submitted At", type="date"),
    ColumnDefinition(key="workAvailability", label="Work Availability", type="text"),
    ColumnDefinition(key="annualSalaryExpectation", label="Annual Salary Expectation", type="number"),
    ColumnDefinition(key="workExperience", label="Work Experience", type="text"),
    ColumnDefinition(key="education", label="Education", type="text"),
    ColumnDefinition(key="skills", label="Skills", type="text"),
    ColumnDefinition(key="rating", label="Rating", type="number"),
    ColumnDefinition(key="starred", label="Starred", type="boolean"),
    ColumnDefinition(key="status", label="Status", type="text"),
    ColumnDefinition(key="rank", label="Rank", type="number"),
)

_COLUMNS_BY_KEY: dict[str, ColumnDefinition] = {c.key: c for c in COLUMNS}

# Column key (camelCase) → CandidateRecord attribute. Covers every record
# field, including ``id`` which is searchable but not a column.
_FIELD_BY_KEY: dict[str, str] = {to_camel(name): name for name in CandidateRecord.model_fields}

ValueKind = Literal["text", "number", "date", "boolean", "string_set", "empty"]


class FieldValue(NamedTuple):
    """A record value tagged with the kind the evaluator should treat it as."""

    kind: ValueKind
    value: Any


def columns_of() -> tuple[ColumnDefinition, ...]:
    """Return the registry columns in display order."""
    return COLUMNS


def column_keys() -> list[str]:
    return [c.key for c in COLUMNS]


def get_column(key: str) -> ColumnDefinition:
    """Resolve a column key, raising UnknownColumnError for unknown keys."""
    try:
        return _COLUMNS_BY_KEY[key]
    except KeyError:
        raise UnknownColumnError(key) from None


def operators_for(data_type: DataType) -> tuple[str, ...]:
    return FILTER_OPERATORS[data_type]


def default_operator(data_type: DataType) -> str:
    return FILTER_OPERATORS[data_type][0]


def field_name(key: str) -> str:
    """Map a column key (or a Python field name) to the record attribute."""
    if key in _FIELD_BY_KEY:
        return _FIELD_BY_KEY[key]
    if key in CandidateRecord.model_fields:
        return key
    raise UnknownColumnError(key)


def record_value(record: CandidateRecord, key: str) -> FieldValue:
    """Read one field of a record as a tagged FieldValue.

    The kind comes from the Python value, except that text in a date column
    is tagged ``date``. String-sets are tagged ``string_set`` whatever their
    column's declared type.
    """
    raw = getattr(record, field_name(key))
    if raw is None:
        return FieldValue("empty", None)
    if isinstance(raw, tuple):
        return FieldValue("string_set", raw)
    if isinstance(raw, bool):
        return FieldValue("boolean", raw)
    if isinstance(raw, (int, float)):
        return FieldValue("number", raw)
    column = _COLUMNS_BY_KEY.get(key)
    if column is not None and column.type == "date":
        return FieldValue("date", raw)
    return FieldValue("text", raw)
