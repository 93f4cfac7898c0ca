"""
Console reporter for pipeline runs.

Prints a run summary and the discarded rows using Rich.
"""

from rich.console import Console
from rich.table import Table

from ontariovax.etl.pipeline import PipelineResult


class RunReporter:
    """Formats a pipeline result for the console."""

    def __init__(self, console: Console, max_diagnostics: int = 50) -> None:
        """
        Initialize run reporter.

        Args:
            console: Rich Console instance for output.
            max_diagnostics: Rows of the diagnostics table to show.
        """
        self.console = console
        self.max_diagnostics = max_diagnostics

    def print_result(self, result: PipelineResult) -> None:
        self._print_summary(result)
        self._print_diagnostics(result)

    def _print_summary(self, result: PipelineResult) -> None:
        table = Table(title="Report Pipeline", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Cases rows", str(result.cases_rows))
        table.add_row("Hospitalization rows", str(result.hospitalization_rows))
        table.add_row("Day reports", f"[green]{result.n_reports}[/green]")
        table.add_row("Discarded", self._discarded_cell(len(result.diagnostics)))
        if result.index.keys:
            table.add_row("Range", f"{result.charts.labels[0]} .. {result.charts.labels[-1]}")
        if result.output_path is not None:
            table.add_row("Output", str(result.output_path))

        self.console.print(table)

        counts = result.diagnostics.by_kind()
        if counts:
            parts = ", ".join(f"{kind.value}: {n}" for kind, n in counts.items())
            self.console.print(f"[dim]Discarded by kind: {parts}[/dim]")

    def _discarded_cell(self, n: int) -> str:
        if n == 0:
            return "0"
        return f"[yellow]{n}[/yellow]"

    def _print_diagnostics(self, result: PipelineResult) -> None:
        entries = result.diagnostics.entries
        if not entries:
            return

        table = Table(title="Discarded Rows", show_header=True)
        table.add_column("Dataset", style="cyan", no_wrap=True)
        table.add_column("Row", justify="right")
        table.add_column("Key")
        table.add_column("Kind", style="yellow")
        table.add_column("Reason", style="dim")

        for d in entries[: self.max_diagnostics]:
            table.add_row(
                d.dataset,
                str(d.row) if d.row is not None else "-",
                d.key or "-",
                d.kind.value,
                d.message,
            )

        self.console.print()
        self.console.print(table)
        hidden = len(entries) - self.max_diagnostics
        if hidden > 0:
            self.console.print(f"[dim]... and {hidden} more[/dim]")
