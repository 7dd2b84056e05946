"""Filter conditions and the operations that edit them.

A condition always carries an operator valid for its data type. The edit
helpers return new conditions; changing the column resets the operator to
the new type's default and clears the value.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from candidate_grid.core.registry import (
    COLUMNS,
    VALUELESS_OPERATORS,
    default_operator,
    get_column,
    operators_for,
)
from candidate_grid.core.schemas import DataType


class FilterCondition(BaseModel):
    """One user-built predicate over a single column.

    External shape: ``{id, column, operator, value, dataType}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    column: str
    operator: str
    value: str = ""
    data_type: DataType = Field(alias="dataType")

    @model_validator(mode="after")
    def operator_matches_type(self) -> "FilterCondition":
        get_column(self.column)
        valid = operators_for(self.data_type)
        if self.operator not in valid:
            msg = (
                f"operator '{self.operator}' is not valid for {self.data_type} columns; "
                f"expected one of {list(valid)}"
            )
            raise ValueError(msg)
        return self

    @property
    def needs_value(self) -> bool:
        return self.operator not in VALUELESS_OPERATORS

    @property
    def is_active(self) -> bool:
        """True when the condition should be applied.

        A condition applies when it has a value, or when its operator does
        not take one. Date windows (``last_7_days``, ``is_today`` ...) ignore
        the value when evaluated but still need one to be active.
        """
        return bool(self.value) or not self.needs_value


def new_condition(
    condition_id: str,
    column: str | None = None,
    operator: str | None = None,
    value: str = "",
) -> FilterCondition:
    """Build a condition, defaulting to the first column and its first operator.

    Raises:
        UnknownColumnError: If ``column`` is not in the registry.
        pydantic.ValidationError: If ``operator`` is not valid for the column type.
    """
    col = get_column(column) if column is not None else COLUMNS[0]
    return FilterCondition(
        id=condition_id,
        column=col.key,
        operator=operator or default_operator(col.type),
        value=value,
        data_type=col.type,
    )


def change_column(condition: FilterCondition, column: str) -> FilterCondition:
    """Point the condition at another column, resetting operator and value."""
    col = get_column(column)
    return FilterCondition(
        id=condition.id,
        column=col.key,
        operator=default_operator(col.type),
        value="",
        data_type=col.type,
    )


def change_operator(condition: FilterCondition, operator: str) -> FilterCondition:
    return FilterCondition.model_validate({**condition.model_dump(), "operator": operator})


def change_value(condition: FilterCondition, value: str) -> FilterCondition:
    return condition.model_copy(update={"value": value})
