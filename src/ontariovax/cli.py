"""Command-line interface for the ontariovax pipeline."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console

if TYPE_CHECKING:
    from ontariovax.config.settings import PipelineConfig

app = typer.Typer(
    name="ontariovax",
    help="Join Ontario cases and hospitalizations by vaccination status into day reports.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file. Defaults apply when omitted.",
        exists=True,
        dir_okay=False,
    ),
]


def _load(config: Path | None) -> "PipelineConfig":
    """Load configuration and set up logging from it."""
    from ontariovax.config.loader import load_config
    from ontariovax.config.settings import default_config
    from ontariovax.utils.logging import configure_from_settings

    pipeline_config = load_config(config) if config is not None else default_config()
    configure_from_settings(pipeline_config.logging)
    return pipeline_config


@app.command()
def build(
    config: ConfigOption = None,
    cases: Annotated[
        Path | None,
        typer.Option("--cases", help="Cases source file (.json or .csv)."),
    ] = None,
    hosps: Annotated[
        Path | None,
        typer.Option("--hosps", help="Hospitalization source file (.json or .csv)."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path for the bulk JSON file."),
    ] = None,
) -> None:
    """Run the pipeline and write the key/value bulk file."""
    from ontariovax.errors import SchemaMismatchError
    from ontariovax.etl import RunReporter, run_pipeline

    pipeline_config = _load(config)
    console.print("[blue]Running report pipeline[/blue]")

    try:
        result = run_pipeline(
            pipeline_config, cases_path=cases, hosps_path=hosps, output_path=output
        )
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except SchemaMismatchError as e:
        console.print(f"[red]Schema mismatch: {e}[/red]")
        raise typer.Exit(code=1) from e
    except ValueError as e:
        console.print(f"[red]Pipeline failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print()
    RunReporter(console).print_result(result)

    if result.n_reports == 0:
        console.print("[yellow]No day reports were produced[/yellow]")
    if result.output_path:
        console.print(f"\n[green]Saved to: {result.output_path}[/green]")


@app.command()
def validate(config: ConfigOption = None) -> None:
    """Check the configured source files against the expected layouts."""
    from ontariovax.validation import ConsoleReporter, ValidationRunner

    pipeline_config = _load(config)
    console.print("[blue]Running source validation...[/blue]")

    results = ValidationRunner(pipeline_config).run()
    ConsoleReporter(console).print_results(results)

    if not all(r.passed for r in results):
        raise typer.Exit(code=1)


@app.command()
def show(
    bulk: Annotated[
        Path,
        typer.Argument(help="Bulk JSON file written by 'build'.", exists=True, dir_okay=False),
    ],
    date: Annotated[
        str | None,
        typer.Option("--date", "-d", help="Report date, YYYY-MM-DD or YYYYMMDD."),
    ] = None,
    position: Annotated[
        int | None,
        typer.Option("--position", "-p", help="Zero-based position in the index."),
    ] = None,
    detail: Annotated[
        bool,
        typer.Option("--detail", help="Include partial, not-fully and boosted cohorts."),
    ] = False,
) -> None:
    """Show a day report. Defaults to the most recent one."""
    from pydantic import ValidationError

    from ontariovax.errors import EmptyIndexError
    from ontariovax.storage import BulkStore
    from ontariovax.views import DayReportView

    if date is not None and position is not None:
        console.print("[red]Error: use either --date or --position, not both[/red]")
        raise typer.Exit(code=1)

    try:
        store = BulkStore.from_file(bulk)
        index = store.index()
    except KeyError as e:
        console.print(f"[red]Error: {bulk} has no index entry[/red]")
        raise typer.Exit(code=1) from e
    except ValidationError as e:
        console.print(f"[red]Error: not a valid bulk file: {bulk}[/red]")
        raise typer.Exit(code=1) from e

    if date is not None:
        key: str | None = date.replace("-", "")
    elif position is not None:
        key = index.by_position(position)
        if key is None:
            console.print(
                f"[red]Error: position {position} is outside 0..{len(index) - 1}[/red]"
            )
            raise typer.Exit(code=1)
    else:
        try:
            key = index.most_recent()
        except EmptyIndexError as e:
            console.print("[yellow]The index is empty[/yellow]")
            raise typer.Exit(code=1) from e

    try:
        report = store.report(key) if key is not None else None
    except ValidationError as e:
        console.print(f"[red]Error: malformed report {key} in {bulk}[/red]")
        raise typer.Exit(code=1) from e
    if report is None:
        console.print(f"[red]Error: no report for {key}[/red]")
        raise typer.Exit(code=1)

    DayReportView(index, report, detail=detail).print(console)


@app.command()
def version() -> None:
    """Show version information."""
    from ontariovax import __version__

    console.print(f"ontariovax version {__version__}")


if __name__ == "__main__":
    app()
