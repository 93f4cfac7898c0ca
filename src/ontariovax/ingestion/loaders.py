"""
Read source files from disk and wrap them in row sources.

This is the only place that touches the filesystem on the input side;
everything downstream works on in-memory rows.
"""

import json
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from ontariovax.config.settings import SourceFormat, ValidationConfig
from ontariovax.domain.rules import DEFAULT_RULES
from ontariovax.ingestion.sources import (
    CasesCsvSource,
    CasesJsonSource,
    DatasetKind,
    HospitalizationCsvSource,
    HospitalizationJsonSource,
    RecordSource,
)
from ontariovax.schemas.tabular import TabularDataset
from ontariovax.utils.logging import get_logger

log = get_logger(__name__)


def load_tabular_json(path: Path) -> TabularDataset:
    """
    Load a JSON tabular dataset.

    Accepts either the bare ``{"fields": ..., "records": ...}`` object or a
    datastore API response wrapping it under ``result``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a tabular dataset.
    """
    if not path.exists():
        msg = f"Source file not found: {path}"
        raise FileNotFoundError(msg)

    log.info("Loading JSON tabular dataset", path=str(path))
    with path.open(encoding="utf-8") as f:
        data: Any = json.load(f)

    if isinstance(data, dict) and "fields" not in data and isinstance(data.get("result"), dict):
        data = data["result"]

    try:
        return TabularDataset.model_validate(data)
    except ValidationError as e:
        msg = f"Not a tabular dataset ({e.error_count()} problems): {path}"
        raise ValueError(msg) from e


def load_csv_rows(path: Path) -> list[dict[str, str]]:
    """
    Load CSV rows as string cells keyed by header.

    Cells are kept as text so decimals stay exact; blank cells become "".
    """
    if not path.exists():
        msg = f"Source file not found: {path}"
        raise FileNotFoundError(msg)

    log.info("Loading CSV dataset", path=str(path))
    read_options: dict[str, Any] = {"dtype": str, "keep_default_na": False}
    try:
        df = pd.read_csv(path, encoding="utf-8-sig", **read_options)
    except UnicodeDecodeError:
        log.warning("UTF-8 decode failed, retrying with Latin-1", path=str(path))
        df = pd.read_csv(path, encoding="latin-1", **read_options)

    df.columns = [str(c).strip() for c in df.columns]
    return df.to_dict(orient="records")


def open_source(
    kind: DatasetKind,
    path: Path,
    rules: ValidationConfig = DEFAULT_RULES,
) -> RecordSource[Any]:
    """
    Load a source file and wrap it in the matching row source.

    The layout is chosen from the file suffix (.json or .csv).
    """
    layout = SourceFormat.from_path(path)
    if layout is SourceFormat.JSON:
        dataset = load_tabular_json(path)
        if kind is DatasetKind.CASES:
            return CasesJsonSource(dataset, rules)
        return HospitalizationJsonSource(dataset, rules)

    rows = load_csv_rows(path)
    if kind is DatasetKind.CASES:
        return CasesCsvSource(rows, rules)
    return HospitalizationCsvSource(rows, rules)
