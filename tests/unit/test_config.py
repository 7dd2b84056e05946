"""Tests for configuration models and YAML loading."""

from pathlib import Path
from textwrap import dedent

import pytest
from pydantic import ValidationError

from candidate_grid.core.config import (
    ExportConfig,
    IdConfig,
    RankConfig,
    Settings,
)

SAMPLE_CONFIG = Path(__file__).resolve().parents[2] / "config" / "settings.yaml"


class TestRankConfig:
    def test_defaults(self) -> None:
        assert RankConfig().enforce_unique is True


class TestIdConfig:
    def test_defaults(self) -> None:
        c = IdConfig()
        assert c.strategy == "counter"
        assert c.start == 1

    def test_start_min(self) -> None:
        with pytest.raises(ValidationError):
            IdConfig(start=0)

    def test_unknown_strategy(self) -> None:
        with pytest.raises(ValidationError):
            IdConfig(strategy="timestamp")  # type: ignore[arg-type]


class TestExportConfig:
    def test_defaults(self) -> None:
        e = ExportConfig()
        assert e.format == "csv"
        assert e.line_terminator == "\n"
        assert e.columns == []

    def test_known_columns(self) -> None:
        assert ExportConfig(columns=["name", "skills"]).columns == ["name", "skills"]

    def test_unknown_column(self) -> None:
        with pytest.raises(ValidationError):
            ExportConfig(columns=["name", "salary"])

    def test_empty_terminator(self) -> None:
        with pytest.raises(ValidationError):
            ExportConfig(line_terminator="")


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings()
        assert s.records == []
        assert s.ranks.enforce_unique is True

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValidationError, match="duplicate record id"):
            Settings(records=[{"id": "1"}, {"id": "1"}])  # type: ignore[list-item]

    def test_duplicate_ranks_rejected(self) -> None:
        with pytest.raises(ValidationError, match="rank 1"):
            Settings(records=[{"id": "1", "rank": 1}, {"id": "2", "rank": 1}])  # type: ignore[list-item]

    def test_missing_ranks_allowed(self) -> None:
        s = Settings(records=[{"id": "1"}, {"id": "2"}])  # type: ignore[list-item]
        assert len(s.records) == 2


class TestFromYaml:
    def test_load_valid(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(dedent("""\
            ranks:
              enforce_unique: false
            ids:
              strategy: uuid
            export:
              format: json
              columns: [name, location]
            records:
              - id: "a"
                name: Ann
                submittedAt: "2024-07-01"
                annualSalaryExpectation: 70000
                skills: [Go, Rust]
        """))
        s = Settings.from_yaml(config_file)
        assert s.ranks.enforce_unique is False
        assert s.ids.strategy == "uuid"
        assert s.export.format == "json"
        assert s.records[0].submitted_at == "2024-07-01"
        assert s.records[0].skills == ("Go", "Rust")

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "missing.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("")
        assert Settings.from_yaml(config_file).records == []

    def test_invalid_record(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("records:\n  - id: '1'\n    status: ghosted\n")
        with pytest.raises(ValidationError):
            Settings.from_yaml(config_file)

    def test_shipped_sample(self) -> None:
        s = Settings.from_yaml(SAMPLE_CONFIG)
        assert [r.name for r in s.records] == ["John Doe", "Jane Smith"]
        assert s.records[0].skills == ("React", "TypeScript", "Node.js")
        assert s.records[1].location == "San Francisco, CA"
