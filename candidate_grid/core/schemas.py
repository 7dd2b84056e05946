"""Core data models for the candidate grid."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataType = Literal["text", "number", "date", "boolean"]
SortDirection = Literal["ascending", "descending"]
CandidateStatus = Literal["new", "screening", "interview", "offer", "hired", "rejected"]

CANDIDATE_STATUSES: tuple[CandidateStatus, ...] = (
    "new",
    "screening",
    "interview",
    "offer",
    "hired",
    "rejected",
)


class CandidateRecord(BaseModel):
    """One row of the grid.

    Frozen — edits go through the collection commands, which build a new
    record and a new collection. Field values are addressed by their
    camelCase column key (``submittedAt``) or by the Python field name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str = Field(min_length=1)
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    submitted_at: str = ""
    work_availability: str = ""
    annual_salary_expectation: int | float | None = None
    work_experience: str = ""
    education: str = ""
    skills: tuple[str, ...] = ()
    rating: int | None = Field(default=None, ge=0, le=5)
    starred: bool = False
    status: CandidateStatus = "new"
    rank: int | None = Field(default=None, ge=1)


class ColumnDefinition(BaseModel):
    """Registry entry describing one column of the grid."""

    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    type: DataType


class SortConfig(BaseModel):
    """The single active sort key and its direction."""

    model_config = ConfigDict(frozen=True)

    key: str
    direction: SortDirection = "ascending"
