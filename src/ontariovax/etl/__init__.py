"""
Report pipeline: join, index, chart series and bulk entries.
"""

from ontariovax.etl.charts import ChartSeries, build_chart_series
from ontariovax.etl.diagnostics import Diagnostic, DiagnosticLog
from ontariovax.etl.pipeline import PipelineResult, ReportPipeline, run_pipeline
from ontariovax.etl.reporter import RunReporter

__all__ = [
    "ChartSeries",
    "Diagnostic",
    "DiagnosticLog",
    "PipelineResult",
    "ReportPipeline",
    "RunReporter",
    "build_chart_series",
    "run_pipeline",
]
