"""Tests for source loading and row sources."""

import json
from pathlib import Path
from typing import Any

import pytest

from ontariovax.errors import SchemaMismatchError
from ontariovax.ingestion import (
    CasesCsvSource,
    CasesJsonSource,
    DatasetKind,
    HospitalizationCsvSource,
    HospitalizationJsonSource,
    load_csv_rows,
    load_tabular_json,
    open_source,
)
from ontariovax.schemas.tabular import TabularDataset


class TestLoadTabularJson:
    """Tests for the JSON tabular loader."""

    def test_load(self, data_dir: Path) -> None:
        dataset = load_tabular_json(data_dir / "cases_by_vac_status.json")
        assert len(dataset.fields) == 12
        assert len(dataset.records) == 3

    def test_unwraps_result_envelope(
        self, tmp_path: Path, hosp_dataset: dict[str, Any]
    ) -> None:
        path = tmp_path / "hosp.json"
        path.write_text(json.dumps({"success": True, "result": hosp_dataset}))
        assert len(load_tabular_json(path).records) == 3

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_tabular_json(tmp_path / "absent.json")

    def test_not_a_dataset(self, tmp_path: Path) -> None:
        path = tmp_path / "other.json"
        path.write_text(json.dumps({"rows": []}))
        with pytest.raises(ValueError, match="Not a tabular dataset"):
            load_tabular_json(path)


class TestLoadCsvRows:
    """Tests for the CSV loader."""

    def test_cells_stay_text(self, csv_dir: Path) -> None:
        rows = load_csv_rows(csv_dir / "cases.csv")
        assert len(rows) == 2
        assert rows[0]["cases_notfull_vac_rate_per100K"] == "19.5"
        assert rows[1]["covid19_cases_unvac"] == ""

    def test_latin1_fallback(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.csv"
        path.write_bytes("date,note\n2022-01-10,caf\xe9\n".encode("latin-1"))
        rows = load_csv_rows(path)
        assert rows[0]["note"] == "café"


class TestRecordSources:
    """Tests for the four row source providers."""

    def test_json_sources(self, cases_dataset: dict[str, Any], hosp_dataset: dict[str, Any]) -> None:
        cases = CasesJsonSource(TabularDataset.model_validate(cases_dataset))
        hosps = HospitalizationJsonSource(TabularDataset.model_validate(hosp_dataset))
        cases.check_schema()
        hosps.check_schema()

        rows = list(cases.rows())
        assert [r.number for r in rows] == [1, 2, 3]
        assert cases.transform(rows[1]).covid19_cases_full_vac == 60
        assert hosps.row_count == 3
        assert cases.name == "cases"

    def test_json_schema_mismatch(self, hosp_dataset: dict[str, Any]) -> None:
        hosp_dataset["fields"] = hosp_dataset["fields"][:7]
        source = HospitalizationJsonSource(TabularDataset.model_validate(hosp_dataset))
        with pytest.raises(SchemaMismatchError):
            source.check_schema()

    def test_cases_dataset_under_hospitalization_source(
        self, cases_dataset: dict[str, Any]
    ) -> None:
        source = HospitalizationJsonSource(TabularDataset.model_validate(cases_dataset))
        with pytest.raises(SchemaMismatchError, match="hospitalizations"):
            source.check_schema()

    def test_csv_sources(
        self, cases_csv_rows: list[dict[str, str]], hosp_csv_rows: list[dict[str, str]]
    ) -> None:
        cases = CasesCsvSource(cases_csv_rows)
        hosps = HospitalizationCsvSource(hosp_csv_rows)
        cases.check_schema()

        records = [cases.transform(r) for r in cases.rows()]
        assert [r.id for r in records] == [1, 2]
        assert hosps.transform(next(hosps.rows())).icu_unvac == 50
        assert cases.layout == "csv"


class TestOpenSource:
    """Tests for layout selection by file suffix."""

    def test_json(self, data_dir: Path) -> None:
        source = open_source(DatasetKind.HOSPITALIZATIONS, data_dir / "hosp_by_vac_status.json")
        assert isinstance(source, HospitalizationJsonSource)

    def test_csv(self, csv_dir: Path) -> None:
        source = open_source(DatasetKind.CASES, csv_dir / "cases.csv")
        assert isinstance(source, CasesCsvSource)
        assert source.row_count == 2

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "cases.xlsx"
        path.write_text("")
        with pytest.raises(ValueError, match="Unsupported source format"):
            open_source(DatasetKind.CASES, path)
