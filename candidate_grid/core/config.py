"""Configuration models and YAML loader for the candidate grid."""

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator

from candidate_grid.core.registry import get_column
from candidate_grid.core.schemas import CandidateRecord


class RankConfig(BaseModel):
    """Manual rank enforcement."""

    enforce_unique: bool = True


class IdConfig(BaseModel):
    """How new record and filter identities are generated."""

    strategy: Literal["counter", "uuid"] = "counter"
    start: int = Field(default=1, ge=1)


class ExportConfig(BaseModel):
    """Defaults for exporting the visible view."""

    format: Literal["csv", "json"] = "csv"
    line_terminator: str = "\n"
    columns: list[str] = Field(default_factory=list)

    @field_validator("line_terminator")
    @classmethod
    def terminator_not_empty(cls, v: str) -> str:
        if not v:
            msg = "line_terminator must not be empty"
            raise ValueError(msg)
        return v

    @field_validator("columns")
    @classmethod
    def columns_known(cls, v: list[str]) -> list[str]:
        for key in v:
            get_column(key)
        return v


class Settings(BaseModel):
    """Top-level settings loaded from YAML.

    ``records`` is the seed collection the engine starts from.
    """

    records: list[CandidateRecord] = Field(default_factory=list)
    ranks: RankConfig = Field(default_factory=RankConfig)
    ids: IdConfig = Field(default_factory=IdConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    @field_validator("records")
    @classmethod
    def unique_identities(cls, v: list[CandidateRecord]) -> list[CandidateRecord]:
        seen: set[str] = set()
        for record in v:
            if record.id in seen:
                msg = f"duplicate record id '{record.id}'"
                raise ValueError(msg)
            seen.add(record.id)
        return v

    @field_validator("records")
    @classmethod
    def unique_ranks(cls, v: list[CandidateRecord]) -> list[CandidateRecord]:
        holders: dict[int, str] = {}
        for record in v:
            if record.rank is None:
                continue
            if record.rank in holders:
                msg = (
                    f"rank {record.rank} is held by both '{holders[record.rank]}' "
                    f"and '{record.id}'"
                )
                raise ValueError(msg)
            holders[record.rank] = record.id
        return v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
