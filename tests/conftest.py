"""Pytest configuration and shared fixtures."""

import csv
import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest

from ontariovax.domain.records import CasesRecord, HospitalizationRecord
from ontariovax.schemas.tabular import CASES_FIELDS, HOSPITALIZATION_FIELDS

# Rates are chosen so cohort populations come out whole:
# unvac 100 at 10 per 100k -> 1,000,000; full 50 at 1 per 100k -> 5,000,000.
CASES_ROWS: list[list[Any]] = [
    [1, "2021-10-01T00:00:00", "100", "20", "50", "3", "10", "4", "1", "9.5", "3.8", "0.9"],
    [2, "2021-10-02T00:00:00", "80", "10", "60", "2", "8", "2", "1.2", "9.1", "3.5", "1.0"],
    [3, "2021-10-03T00:00:00", "90", "15", "55", "1", "9", "3", "1.1", "8.9", "3.1", "1.05"],
]

HOSPITALIZATION_ROWS: list[list[Any]] = [
    [1, "2021-10-01T00:00:00", 20, 1, 5, 45, 3, 12],
    [2, "2021-10-02T00:00:00", 10, 1, 4, 30, 2, 15],
    [3, "2021-10-03T00:00:00", 12, 0, 6, 35, 1, 14],
]

CASES_CSV_HEADER = [
    "Date",
    "covid19_cases_unvac",
    "covid19_cases_partial_vac",
    "covid19_cases_notfull_vac",
    "covid19_cases_full_vac",
    "covid19_cases_boost_vac",
    "covid19_cases_vac_unknown",
    "cases_unvac_rate_per100K",
    "cases_partial_vac_rate_per100K",
    "cases_notfull_vac_rate_per100K",
    "cases_full_vac_rate_per100K",
    "cases_boost_vac_rate_per100K",
    "cases_unvac_rate_7ma",
    "cases_partial_vac_rate_7ma",
    "cases_notfull_vac_rate_7ma",
    "cases_full_vac_rate_7ma",
    "cases_boost_vac_rate_7ma",
]

HOSPITALIZATION_CSV_HEADER = [
    "date",
    "icu_unvac",
    "icu_partial_vac",
    "icu_full_vac",
    "hospitalnonicu_unvac",
    "hospitalnonicu_partial_vac",
    "hospitalnonicu_full_vac",
]


def _fields_json(fields: tuple[Any, ...]) -> list[dict[str, Any]]:
    return [f.model_dump(by_alias=True) for f in fields]


def _write_csv(path: Path, header: list[str], rows: list[dict[str, str]]) -> Path:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=header)
        writer.writeheader()
        writer.writerows(rows)
    return path


@pytest.fixture
def cases_dataset() -> dict[str, Any]:
    """Cases dataset in the JSON tabular layout."""
    return {
        "fields": _fields_json(CASES_FIELDS),
        "records": [list(r) for r in CASES_ROWS],
    }


@pytest.fixture
def hosp_dataset() -> dict[str, Any]:
    """Hospitalization dataset in the JSON tabular layout."""
    return {
        "fields": _fields_json(HOSPITALIZATION_FIELDS),
        "records": [list(r) for r in HOSPITALIZATION_ROWS],
    }


@pytest.fixture
def data_dir(tmp_path: Path, cases_dataset: dict[str, Any], hosp_dataset: dict[str, Any]) -> Path:
    """Directory holding both JSON datasets under their default names."""
    root = tmp_path / "data"
    root.mkdir()
    (root / "cases_by_vac_status.json").write_text(json.dumps(cases_dataset))
    (root / "hosp_by_vac_status.json").write_text(json.dumps(hosp_dataset))
    return root


@pytest.fixture
def cases_csv_rows() -> list[dict[str, str]]:
    """Cases rows in the CSV layout, including boosted cohort columns."""
    base = {name: "" for name in CASES_CSV_HEADER}
    return [
        {
            **base,
            "Date": "2022-01-10",
            "covid19_cases_unvac": "200",
            "covid19_cases_partial_vac": "30",
            "covid19_cases_notfull_vac": "230",
            "covid19_cases_full_vac": "500",
            "covid19_cases_boost_vac": "100",
            "covid19_cases_vac_unknown": "7",
            "cases_unvac_rate_per100K": "20",
            "cases_partial_vac_rate_per100K": "15",
            "cases_notfull_vac_rate_per100K": "19.5",
            "cases_full_vac_rate_per100K": "10",
            "cases_boost_vac_rate_per100K": "2",
        },
        {
            **base,
            "Date": "2022-01-11",
            "covid19_cases_unvac": "",
            "covid19_cases_full_vac": "400",
            "cases_unvac_rate_per100K": "",
            "cases_full_vac_rate_per100K": "8",
        },
    ]


@pytest.fixture
def hosp_csv_rows() -> list[dict[str, str]]:
    """Hospitalization rows in the CSV layout."""
    return [
        {
            "date": "2022-01-10",
            "icu_unvac": "50",
            "icu_partial_vac": "2",
            "icu_full_vac": "25",
            "hospitalnonicu_unvac": "100",
            "hospitalnonicu_partial_vac": "4",
            "hospitalnonicu_full_vac": "250",
        },
        {
            "date": "2022-01-11",
            "icu_unvac": "40",
            "icu_partial_vac": "1",
            "icu_full_vac": "20",
            "hospitalnonicu_unvac": "90",
            "hospitalnonicu_partial_vac": "3",
            "hospitalnonicu_full_vac": "200",
        },
    ]


@pytest.fixture
def csv_dir(
    tmp_path: Path,
    cases_csv_rows: list[dict[str, str]],
    hosp_csv_rows: list[dict[str, str]],
) -> Path:
    """Directory holding both datasets in the CSV layout."""
    root = tmp_path / "csv"
    root.mkdir()
    _write_csv(root / "cases.csv", CASES_CSV_HEADER, cases_csv_rows)
    _write_csv(root / "hosps.csv", HOSPITALIZATION_CSV_HEADER, hosp_csv_rows)
    return root


@pytest.fixture
def cases_record() -> CasesRecord:
    """A consistent cases record for 2021-10-01."""
    return CasesRecord(
        id=1,
        date=date(2021, 10, 1),
        covid19_cases_unvac=100,
        covid19_cases_partial_vac=20,
        covid19_cases_full_vac=50,
        covid19_cases_vac_unknown=3,
        cases_unvac_rate_per100k=Decimal("10"),
        cases_partial_vac_rate_per100k=Decimal("4"),
        cases_full_vac_rate_per100k=Decimal("1"),
        cases_unvac_rate_7ma=Decimal("9.5"),
        cases_partial_vac_rate_7ma=Decimal("3.8"),
        cases_full_vac_rate_7ma=Decimal("0.9"),
    )


@pytest.fixture
def hosp_record() -> HospitalizationRecord:
    """Hospitalizations matching ``cases_record``."""
    return HospitalizationRecord(
        id=1,
        date=date(2021, 10, 1),
        icu_unvac=20,
        icu_partial_vac=1,
        icu_full_vac=5,
        hospitalnonicu_unvac=45,
        hospitalnonicu_partial_vac=3,
        hospitalnonicu_full_vac=12,
    )
