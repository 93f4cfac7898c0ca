"""
Report pipeline implementation.

Joins the cases and hospitalization datasets by date into day reports,
builds the navigation index and chart series, and produces the entries
of the key/value bulk file.
"""

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from ontariovax.config.settings import PipelineConfig, default_config
from ontariovax.domain.index import Index
from ontariovax.domain.records import HospitalizationRecord
from ontariovax.domain.report import KEY_FORMAT, DayReport, build_day_report
from ontariovax.errors import CrossValidationError, ErrorKind, RowError, SchemaMismatchError
from ontariovax.etl.charts import ChartSeries, build_chart_series
from ontariovax.etl.diagnostics import DiagnosticLog
from ontariovax.ingestion.loaders import open_source
from ontariovax.ingestion.sources import DatasetKind, RecordSource
from ontariovax.storage.bulk import INDEX_KEY, StoreEntry, write_bulk
from ontariovax.utils.logging import get_logger, log_context

log = get_logger(__name__)


@dataclass
class PipelineResult:
    """
    Result of a pipeline run.

    Attributes:
        reports: Day reports sorted by key.
        index: Index over the report keys.
        charts: Chart series aligned with the reports.
        diagnostics: Everything discarded during the run.
        cases_rows: Raw rows read from the cases source.
        hospitalization_rows: Raw rows read from the hospitalization source.
        output_path: Bulk file written, if any.
    """

    reports: list[DayReport]
    index: Index
    charts: ChartSeries
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)
    cases_rows: int = 0
    hospitalization_rows: int = 0
    output_path: Path | None = None

    @property
    def n_reports(self) -> int:
        return len(self.reports)

    def to_entries(self) -> list[StoreEntry]:
        """Key/value entries: one per report, then the index, labels and series."""
        entries = [StoreEntry(key=r.key, value=r.model_dump_json()) for r in self.reports]
        entries.append(StoreEntry(key=INDEX_KEY, value=self.index.model_dump_json()))
        for name, values in self.charts.as_dict().items():
            entries.append(StoreEntry(key=name, value=json.dumps(values)))
        return entries


class ReportPipeline:
    """
    Batch pipeline from two row sources to day reports.

    Dataset-level schema mismatches abort the run. Row-level failures,
    unmatched dates and cross-validation failures discard a single row
    and are recorded in the diagnostics log.
    """

    def __init__(
        self,
        config: PipelineConfig | None = None,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            config: Pipeline configuration. Defaults apply when omitted.
            diagnostics: Collector for discarded rows. A new one is created
                when omitted.
        """
        self.config = config or default_config()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    def run(
        self,
        cases_source: RecordSource[Any],
        hosp_source: RecordSource[Any],
    ) -> PipelineResult:
        """
        Run the join.

        Raises:
            SchemaMismatchError: If either dataset's declared fields differ
                from the expected layout.
        """
        log.info(
            "Starting report pipeline",
            cases_layout=cases_source.layout,
            hospitalizations_layout=hosp_source.layout,
        )

        # Step 1: Dataset-level schema checks
        for source in (cases_source, hosp_source):
            try:
                source.check_schema()
            except SchemaMismatchError as e:
                self.diagnostics.from_error(e, source.name)
                raise

        # Step 2: Hospitalizations by date
        hosp_map = self._hospitalizations_by_date(hosp_source)

        # Step 3: Join cases against the map
        reports = self._join_cases(cases_source, hosp_map)

        # Step 4: Leftover hospitalizations have no cases row
        for hosp_date, (number, _) in sorted(hosp_map.items()):
            self.diagnostics.record(
                ErrorKind.UNMATCHED_ROW,
                hosp_source.name,
                f"no cases row for {hosp_date.isoformat()}",
                row=number,
                key=hosp_date.strftime(KEY_FORMAT),
            )

        # Step 5: Order, index and charts
        reports.sort(key=lambda r: r.key)
        index = Index.build(r.key for r in reports)
        charts = build_chart_series(reports, self.config.charts.decimals)

        if not reports:
            log.warning("Pipeline produced no day reports")

        log.info(
            "Report pipeline complete",
            reports=len(reports),
            discarded=len(self.diagnostics),
            most_recent=index.keys[-1] if index.keys else None,
        )
        return PipelineResult(
            reports=reports,
            index=index,
            charts=charts,
            diagnostics=self.diagnostics,
            cases_rows=cases_source.row_count,
            hospitalization_rows=hosp_source.row_count,
        )

    def _hospitalizations_by_date(
        self, source: RecordSource[Any]
    ) -> dict[date, tuple[int, HospitalizationRecord]]:
        """Transform hospitalization rows into a date map; later duplicates win."""
        hosp_map: dict[date, tuple[int, HospitalizationRecord]] = {}
        for row in source.rows():
            try:
                record = source.transform(row)
            except RowError as e:
                self.diagnostics.from_error(e, source.name, row=row.number)
                continue

            if record.date in hosp_map:
                earlier, _ = hosp_map[record.date]
                self.diagnostics.record(
                    ErrorKind.DUPLICATE_DATE,
                    source.name,
                    f"{record.date.isoformat()} already seen in row {earlier}, "
                    "keeping the later row",
                    row=row.number,
                    key=record.date.strftime(KEY_FORMAT),
                )
            hosp_map[record.date] = (row.number, record)

        log.debug("Indexed hospitalizations", dates=len(hosp_map))
        return hosp_map

    def _join_cases(
        self,
        source: RecordSource[Any],
        hosp_map: dict[date, tuple[int, HospitalizationRecord]],
    ) -> list[DayReport]:
        """Pair each cases row with its hospitalization record, consuming the map."""
        rules = self.config.validation
        reports: list[DayReport] = []
        for row in source.rows():
            try:
                cases = source.transform(row)
            except RowError as e:
                self.diagnostics.from_error(e, source.name, row=row.number)
                continue

            key = cases.date.strftime(KEY_FORMAT)
            match = hosp_map.pop(cases.date, None)
            if match is None:
                self.diagnostics.record(
                    ErrorKind.UNMATCHED_ROW,
                    source.name,
                    f"no hospitalization row for {cases.date.isoformat()}",
                    row=row.number,
                    key=key,
                )
                continue

            _, hosps = match
            try:
                report = build_day_report(cases, hosps, rules)
            except (RowError, CrossValidationError) as e:
                self.diagnostics.from_error(e, source.name, row=row.number, key=key)
                continue
            reports.append(report)
        return reports


def run_pipeline(
    config: PipelineConfig,
    cases_path: Path | None = None,
    hosps_path: Path | None = None,
    output_path: Path | None = None,
    *,
    write: bool = True,
) -> PipelineResult:
    """
    Convenience function to run the pipeline from files.

    Args:
        config: Pipeline configuration.
        cases_path: Cases source, overriding the configured path.
        hosps_path: Hospitalization source, overriding the configured path.
        output_path: Bulk file to write, overriding the configured path.
        write: Whether to write the bulk file.

    Returns:
        PipelineResult, with ``output_path`` set when a file was written.
    """
    cases_path = cases_path or config.cases_path
    hosps_path = hosps_path or config.hospitalizations_path

    with log_context(cases=str(cases_path), hospitalizations=str(hosps_path)):
        rules = config.validation
        cases_source = open_source(DatasetKind.CASES, cases_path, rules)
        hosp_source = open_source(DatasetKind.HOSPITALIZATIONS, hosps_path, rules)

        result = ReportPipeline(config).run(cases_source, hosp_source)

        if write:
            target = output_path or config.output.bulk_path
            result.output_path = write_bulk(result.to_entries(), target)

    return result
