"""Tests for the command-line interface."""

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from ontariovax.cli import app
from ontariovax.domain.index import Index
from ontariovax.storage import INDEX_KEY, StoreEntry, write_bulk

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, data_dir: Path) -> Path:
    """Config pointing at the JSON fixtures and a bulk file under tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(
        f"data:\n  root: {data_dir}\noutput:\n  bulk_path: {tmp_path / 'bulk.json'}\n"
        "logging:\n  level: ERROR\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def bulk_file(config_file: Path, tmp_path: Path) -> Path:
    result = runner.invoke(app, ["build", "--config", str(config_file)])
    assert result.exit_code == 0, result.output
    return tmp_path / "bulk.json"


class TestBuild:
    """Tests for the build command."""

    def test_build(self, config_file: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["build", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Day reports" in result.output
        entries = json.loads((tmp_path / "bulk.json").read_text())
        assert {e["key"] for e in entries} >= {"20211001", "index", "labels"}

    def test_build_with_overrides(self, csv_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "csv_bulk.json"
        result = runner.invoke(
            app,
            [
                "build",
                "--cases",
                str(csv_dir / "cases.csv"),
                "--hosps",
                str(csv_dir / "hosps.csv"),
                "--output",
                str(output),
            ],
        )
        assert result.exit_code == 0, result.output
        assert output.exists()

    def test_build_reports_discards(
        self, tmp_path: Path, data_dir: Path, cases_dataset: dict[str, Any]
    ) -> None:
        cases_dataset["records"][0][4] = "?"
        (data_dir / "cases_by_vac_status.json").write_text(json.dumps(cases_dataset))
        output = tmp_path / "out.json"

        result = runner.invoke(
            app,
            [
                "build",
                "--cases",
                str(data_dir / "cases_by_vac_status.json"),
                "--hosps",
                str(data_dir / "hosp_by_vac_status.json"),
                "-o",
                str(output),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Discarded Rows" in result.output
        assert "parse_failure" in result.output

    def test_build_schema_mismatch(
        self, tmp_path: Path, data_dir: Path, cases_dataset: dict[str, Any]
    ) -> None:
        cases_dataset["fields"] = cases_dataset["fields"][:11]
        (data_dir / "cases_by_vac_status.json").write_text(json.dumps(cases_dataset))

        result = runner.invoke(
            app,
            [
                "build",
                "--cases",
                str(data_dir / "cases_by_vac_status.json"),
                "--hosps",
                str(data_dir / "hosp_by_vac_status.json"),
                "-o",
                str(tmp_path / "out.json"),
            ],
        )
        assert result.exit_code == 1
        assert "Schema mismatch" in result.output

    def test_build_missing_source(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["build", "--cases", str(tmp_path / "a.json"), "--hosps", str(tmp_path / "b.json")]
        )
        assert result.exit_code == 1
        assert "Error" in result.output


class TestValidate:
    """Tests for the validate command."""

    def test_validate_passes(self, config_file: Path) -> None:
        result = runner.invoke(app, ["validate", "--config", str(config_file)])
        assert result.exit_code == 0, result.output
        assert "Passed: 2" in result.output

    def test_validate_fails_on_missing_files(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(f"data:\n  root: {tmp_path / 'nowhere'}\n", encoding="utf-8")
        result = runner.invoke(app, ["validate", "--config", str(path)])
        assert result.exit_code == 1
        assert "Failed: 2" in result.output


class TestShow:
    """Tests for the show command."""

    def test_most_recent(self, bulk_file: Path) -> None:
        result = runner.invoke(app, ["show", str(bulk_file)])
        assert result.exit_code == 0, result.output
        assert "2021-10-03" in result.output
        assert "Report 3 of 3" in result.output

    def test_by_date(self, bulk_file: Path) -> None:
        result = runner.invoke(app, ["show", str(bulk_file), "--date", "2021-10-01"])
        assert result.exit_code == 0, result.output
        assert "2021-10-01" in result.output
        assert "4.50" in result.output
        assert "1,000,000" in result.output

    def test_by_position(self, bulk_file: Path) -> None:
        result = runner.invoke(app, ["show", str(bulk_file), "--position", "1", "--detail"])
        assert result.exit_code == 0, result.output
        assert "2021-10-02" in result.output
        assert "Boosted" in result.output

    def test_unknown_date(self, bulk_file: Path) -> None:
        result = runner.invoke(app, ["show", str(bulk_file), "--date", "2020-01-01"])
        assert result.exit_code == 1

    def test_position_out_of_range(self, bulk_file: Path) -> None:
        result = runner.invoke(app, ["show", str(bulk_file), "--position", "7"])
        assert result.exit_code == 1
        assert "outside" in result.output

    def test_indexed_key_without_report(self, tmp_path: Path) -> None:
        """The missing key is named even when it came from the index."""
        bulk = write_bulk(
            [StoreEntry(key=INDEX_KEY, value=Index.build(["20211001"]).model_dump_json())],
            tmp_path / "bulk.json",
        )
        result = runner.invoke(app, ["show", str(bulk)])
        assert result.exit_code == 1
        assert "no report for 20211001" in result.output

    def test_malformed_bulk_file(self, tmp_path: Path) -> None:
        bulk = tmp_path / "bulk.json"
        bulk.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["show", str(bulk)])
        assert result.exit_code == 1
        assert "not a valid bulk file" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)


def test_version() -> None:
    """Version command prints the package version."""
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "ontariovax version" in result.output
