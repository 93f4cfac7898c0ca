"""Tests for validation module."""

import json
from pathlib import Path
from typing import Any

from rich.console import Console

from ontariovax.config import DataPathsConfig, PipelineConfig
from ontariovax.ingestion import DatasetKind
from ontariovax.validation import ConsoleReporter, ValidationResult, ValidationRunner
from ontariovax.validation.core import DATASET_SCHEMA_MAP


def _config(root: Path, **paths: str) -> PipelineConfig:
    return PipelineConfig(
        data_paths=DataPathsConfig(data_root=root, **{k: Path(v) for k, v in paths.items()})
    )


class TestValidationRunner:
    """Tests for ValidationRunner."""

    def test_every_dataset_has_a_schema(self) -> None:
        assert set(DATASET_SCHEMA_MAP) == set(DatasetKind)

    def test_valid_json_sources(self, data_dir: Path) -> None:
        results = ValidationRunner(_config(data_dir)).run()

        assert [r.dataset_name for r in results] == ["cases", "hospitalizations"]
        assert all(r.schema_valid is True for r in results)
        assert all(r.row_count == 3 for r in results)
        assert all(r.rejected_rows == 0 for r in results)
        assert all(r.passed for r in results)

    def test_missing_file(self, tmp_path: Path) -> None:
        results = ValidationRunner(_config(tmp_path)).run()
        assert all(not r.exists for r in results)
        assert all(r.error_message == "File not found" for r in results)
        assert not any(r.passed for r in results)

    def test_schema_mismatch(self, data_dir: Path, hosp_dataset: dict[str, Any]) -> None:
        hosp_dataset["fields"] = hosp_dataset["fields"][:-1]
        (data_dir / "hosp_by_vac_status.json").write_text(json.dumps(hosp_dataset))

        result = ValidationRunner(_config(data_dir)).validate_dataset(
            DatasetKind.HOSPITALIZATIONS
        )
        assert result.schema_valid is False
        assert result.error_message is not None
        assert "different length" in result.error_message

    def test_rejected_rows_are_counted(
        self, data_dir: Path, cases_dataset: dict[str, Any]
    ) -> None:
        cases_dataset["records"][0][4] = "-3"
        (data_dir / "cases_by_vac_status.json").write_text(json.dumps(cases_dataset))

        result = ValidationRunner(_config(data_dir)).validate_dataset(DatasetKind.CASES)
        assert result.schema_valid is True
        assert result.rejected_rows == 1
        assert result.row_errors[0].startswith("row 1:")

    def test_csv_header_check_skipped(self, csv_dir: Path) -> None:
        config = _config(csv_dir, cases="cases.csv", hospitalizations="hosps.csv")
        results = ValidationRunner(config).run()

        assert all(r.schema_valid is None for r in results)
        assert all(r.error_message == "No header check for CSV layout" for r in results)
        assert all(r.passed for r in results)

    def test_unreadable_file(self, tmp_path: Path) -> None:
        (tmp_path / "cases_by_vac_status.json").write_text("{not json")
        result = ValidationRunner(_config(tmp_path)).validate_dataset(DatasetKind.CASES)
        assert result.schema_valid is False
        assert result.error_message is not None


class TestConsoleReporter:
    """Tests for the rich results table."""

    def test_print_results(self, tmp_path: Path) -> None:
        console = Console(record=True, width=160)
        results = [
            ValidationResult(
                dataset_name="cases",
                schema_name="cases",
                file_path=tmp_path / "cases.json",
                exists=True,
                schema_valid=False,
                row_count=None,
                error_message="cases: header field 2 does not match",
            ),
            ValidationResult(
                dataset_name="hospitalizations",
                schema_name="hospitalizations",
                file_path=tmp_path / "hosps.json",
                exists=False,
                schema_valid=None,
                row_count=None,
                error_message="File not found",
            ),
        ]
        ConsoleReporter(console).print_results(results)
        text = console.export_text()

        assert "Fail" in text
        assert "Missing" in text
        assert "header field 2 does not match" in text
        assert "Failed: 2" in text
