"""
Console reporter for validation results.

Formats validation results using Rich for clear, colored output.
"""

from rich.console import Console
from rich.table import Table

from ontariovax.validation.core import ValidationResult


class ConsoleReporter:
    """Formats and displays validation results to the console."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def print_results(self, results: list[ValidationResult]) -> None:
        """
        Print validation results as a table, then a summary and any errors.

        Args:
            results: List of validation results to display.
        """
        table = Table(title="Source Validation Results", show_header=True)
        table.add_column("Dataset", style="cyan", no_wrap=True)
        table.add_column("Schema", style="blue")
        table.add_column("Header", justify="center")
        table.add_column("Rows", justify="right")
        table.add_column("Rejected", justify="right")
        table.add_column("Details", style="dim")

        for result in results:
            table.add_row(
                result.dataset_name,
                result.schema_name or "-",
                self._format_status(result),
                str(result.row_count) if result.row_count is not None else "-",
                self._format_rejected(result),
                self._format_details(result),
            )

        self.console.print(table)
        self._print_summary(results)
        self._print_detailed_errors(results)

    def _format_status(self, result: ValidationResult) -> str:
        if not result.exists:
            return "[yellow]Missing[/yellow]"
        if result.schema_valid is None:
            return "[yellow]Skipped[/yellow]"
        if result.schema_valid:
            return "[green]Pass[/green]"
        return "[red]Fail[/red]"

    def _format_rejected(self, result: ValidationResult) -> str:
        if result.row_count is None:
            return "-"
        if result.rejected_rows:
            return f"[yellow]{result.rejected_rows}[/yellow]"
        return "0"

    def _format_details(self, result: ValidationResult) -> str:
        if not result.exists:
            return "File not found"
        if result.schema_valid is False:
            return "See errors below"
        if result.error_message:
            return result.error_message
        return "OK"

    def _print_summary(self, results: list[ValidationResult]) -> None:
        total = len(results)
        passed = sum(1 for r in results if r.schema_valid is True)
        failed = sum(1 for r in results if r.schema_valid is False or not r.exists)
        skipped = sum(1 for r in results if r.exists and r.schema_valid is None)

        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  Total datasets: {total}")
        self.console.print(f"  [green]Passed: {passed}[/green]")
        self.console.print(f"  [red]Failed: {failed}[/red]")
        self.console.print(f"  [yellow]Skipped: {skipped}[/yellow]")

    def _print_detailed_errors(self, results: list[ValidationResult]) -> None:
        """Print schema errors and sample row errors."""
        noisy = [r for r in results if r.schema_valid is False or r.row_errors]
        if not noisy:
            return

        self.console.print()
        self.console.print("[bold red]Validation Errors:[/bold red]")

        for result in noisy:
            self.console.print()
            self.console.print(
                f"[bold]{result.dataset_name}[/bold] (schema: {result.schema_name}):"
            )
            self.console.print(f"  File: {result.file_path}")
            if result.schema_valid is False and result.error_message:
                for line in result.error_message.split("\n"):
                    self.console.print(f"  {line}")
            for line in result.row_errors:
                self.console.print(f"  {line}")
            hidden = result.rejected_rows - len(result.row_errors)
            if hidden > 0:
                self.console.print(f"  [dim]... and {hidden} more rejected rows[/dim]")
