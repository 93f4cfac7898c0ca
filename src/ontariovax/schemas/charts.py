"""
Pandera schema for derived chart series.
"""

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series

CHART_SERIES = (
    "cases_dose0",
    "cases_dose2",
    "nonicu_dose0",
    "nonicu_dose2",
    "icu_dose0",
    "icu_dose2",
)


class ChartSeriesSchema(pa.DataFrameModel):
    """
    Schema for chart series, one row per day report.

    ``dose0`` columns describe the unvaccinated cohort, ``dose2`` the
    fully vaccinated cohort. Values are rates per 100,000.
    """

    labels: Series[str] = pa.Field(
        str_matches=r"^\d{4}-\d{2}-\d{2}$",
        unique=True,
        description="Report date, YYYY-MM-DD",
    )
    cases_dose0: Series[float] = pa.Field(description="Cases per 100k, unvaccinated")
    cases_dose2: Series[float] = pa.Field(description="Cases per 100k, fully vaccinated")
    nonicu_dose0: Series[float] = pa.Field(
        description="Non-ICU admissions per 100k, unvaccinated"
    )
    nonicu_dose2: Series[float] = pa.Field(
        description="Non-ICU admissions per 100k, fully vaccinated"
    )
    icu_dose0: Series[float] = pa.Field(description="ICU admissions per 100k, unvaccinated")
    icu_dose2: Series[float] = pa.Field(
        description="ICU admissions per 100k, fully vaccinated"
    )

    @pa.dataframe_check
    def labels_ascending(cls, df: pd.DataFrame) -> bool:
        """Series must be aligned in chronological order."""
        return bool(df["labels"].is_monotonic_increasing)

    class Config:
        """Schema configuration."""

        name = "ChartSeriesSchema"
        strict = True
        coerce = True
