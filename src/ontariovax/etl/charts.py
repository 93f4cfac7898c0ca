"""
Chart series derived from day reports.

One value per report and series, aligned with the report labels. The
series are assembled as a DataFrame and validated before export.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

import pandas as pd

from ontariovax.domain.rates import chart_float
from ontariovax.domain.report import DayReport
from ontariovax.schemas.charts import CHART_SERIES, ChartSeriesSchema
from ontariovax.storage.bulk import LABELS_KEY
from ontariovax.utils.logging import get_logger

log = get_logger(__name__)


@dataclass
class ChartSeries:
    """Labels plus the six aligned rate series."""

    labels: list[str] = field(default_factory=list)
    cases_dose0: list[float] = field(default_factory=list)
    cases_dose2: list[float] = field(default_factory=list)
    nonicu_dose0: list[float] = field(default_factory=list)
    nonicu_dose2: list[float] = field(default_factory=list)
    icu_dose0: list[float] = field(default_factory=list)
    icu_dose2: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.labels)

    def as_dict(self) -> dict[str, list[str] | list[float]]:
        """Series keyed by output name, labels first."""
        data: dict[str, list[str] | list[float]] = {LABELS_KEY: self.labels}
        for name in CHART_SERIES:
            data[name] = getattr(self, name)
        return data

    def to_frame(self) -> pd.DataFrame:
        """One row per label, one column per series."""
        frame = pd.DataFrame(self.as_dict())
        return frame.astype({name: "float64" for name in CHART_SERIES})


def _chart_row(report: DayReport, decimals: int) -> dict[str, str | float]:
    return {
        "labels": report.label,
        "cases_dose0": chart_float(report.cases.cases_unvac_rate_per100k, decimals),
        "cases_dose2": chart_float(report.cases.cases_full_vac_rate_per100k, decimals),
        "nonicu_dose0": chart_float(report.nonicu_unvac_rate_per100k(), decimals),
        "nonicu_dose2": chart_float(report.nonicu_full_vac_rate_per100k(), decimals),
        "icu_dose0": chart_float(report.icu_unvac_rate_per100k(), decimals),
        "icu_dose2": chart_float(report.icu_full_vac_rate_per100k(), decimals),
    }


def build_chart_series(reports: Sequence[DayReport], decimals: int = 2) -> ChartSeries:
    """
    Derive chart series from reports sorted by date.

    Rates are rounded half away from zero; an absent rate becomes 0.0.

    Raises:
        pandera.errors.SchemaError: If labels are not unique and ascending.
    """
    columns = ["labels", *CHART_SERIES]
    frame = pd.DataFrame([_chart_row(r, decimals) for r in reports], columns=columns)
    frame = ChartSeriesSchema.validate(frame)

    log.debug("Built chart series", points=len(frame))
    return ChartSeries(
        labels=frame["labels"].astype(str).tolist(),
        **{name: frame[name].astype(float).tolist() for name in CHART_SERIES},
    )
