"""CLI entry point for cohortid."""

import logging
import os
from pathlib import Path

# Load .env file if it exists
from dotenv import load_dotenv
load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from cohortid.adapters.csv_source import DEFAULT_INPUT, CsvRecordSource
from cohortid.analyzers.pipeline import CohortPipeline
from cohortid.config import load_config
from cohortid.errors import CohortError
from cohortid.models.schemas import Cohort, CohortAggregate, WeightConfig

app = typer.Typer(help="Repository migration cohort identification tool.")

console = Console()

CONFIG_ENV_VAR = "COHORTID_CONFIG"

COHORT_COLORS = {
    Cohort.CLEAN: "green",
    Cohort.LOW_COMPLEXITY: "green",
    Cohort.MEDIUM_COMPLEXITY: "yellow",
    Cohort.HIGH_COMPLEXITY: "red",
    Cohort.ARCHIVED: "dim",
    Cohort.UNMIGRATABLE: "bold red",
    Cohort.MACOS_RUNNERS: "magenta",
    Cohort.MAVEN_PACKAGES: "magenta",
    Cohort.CODESPACES: "magenta",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _resolve_config(source: str | None) -> WeightConfig:
    """Load configuration from the option, the environment, or the default profile."""
    try:
        return load_config(source or os.environ.get(CONFIG_ENV_VAR, "").strip() or None)
    except CohortError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def analyze(
    input_file: Path = typer.Argument(DEFAULT_INPUT, help="Repository analysis CSV"),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Built-in profile name or JSON config file"
    ),
    output_dir: Path = typer.Option(Path("output"), "--output-dir", "-o", help="Report directory"),
    write: bool = typer.Option(True, "--write/--no-write", help="Write CSV reports"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Classify repositories into migration cohorts."""
    from cohortid.reports import write_reports

    _setup_logging(verbose)
    weight_config = _resolve_config(config)

    try:
        records = CsvRecordSource(input_file).load()
    except CohortError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    pipeline = CohortPipeline(weight_config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Classifying repositories...", total=len(records))
        assignments = []
        for record in records:
            assignments.append(pipeline.assign(record))
            progress.advance(task)

    run = pipeline.summarize(assignments)

    console.print()
    console.print(
        f"[bold green]Completed:[/bold green] {run.total_repositories} repositories classified "
        f"[dim](config version {run.config_version})[/dim]"
    )
    console.print()
    console.print(_summary_table("Overall Cohort Summary", run.summaries))

    for group in run.enterprises:
        console.print()
        console.print(
            f"[bold cyan]{group.name}[/bold cyan]  "
            f"{group.total_repositories} repos, average weight {group.average_weight:.2f}"
        )
        console.print(_summary_table("Cohort Breakdown", group.cohorts))

    if write:
        try:
            paths = write_reports(run, output_dir)
        except OSError as e:
            console.print(f"[red]Error writing reports: {escape(str(e))}[/red]")
            raise typer.Exit(1)
        console.print()
        for path in paths:
            console.print(f"[green]Saved to {path}[/green]")


def _summary_table(title: str, summaries: tuple[CohortAggregate, ...]) -> Table:
    """Render cohort aggregates as a table."""
    table = Table(title=title, show_header=True)
    table.add_column("Cohort", style="bold")
    table.add_column("Repos", justify="right")
    table.add_column("Total Weight", justify="right", style="dim")
    table.add_column("Avg Weight", justify="right")

    for s in summaries:
        color = COHORT_COLORS.get(s.cohort, "white")
        table.add_row(
            f"[{color}]{s.cohort.value}[/{color}]",
            f"{s.repository_count:,}",
            f"{s.total_weight:,}",
            f"{s.average_weight:.2f}",
        )
    return table


@app.command()
def show_config(
    config: str | None = typer.Option(
        None, "--config", "-c", help="Built-in profile name or JSON config file"
    ),
) -> None:
    """Show the effective weights, thresholds and cohort toggles."""
    weight_config = _resolve_config(config)

    console.print(f"[bold]Configuration version:[/bold] {weight_config.version}")
    console.print()

    weights_table = Table(title="Weights", show_header=True)
    weights_table.add_column("Category", style="bold")
    weights_table.add_column("Weight", justify="right")
    for category, weight in weight_config.weights.items():
        weights_table.add_row(category.value, str(weight))
    console.print(weights_table)
    console.print()

    thresholds = weight_config.thresholds
    thresholds_table = Table(title="Thresholds", show_header=False, box=None)
    thresholds_table.add_column("Cohort", style="bold")
    thresholds_table.add_column("Max Weight", justify="right")
    thresholds_table.add_row("CLEAN", str(thresholds.clean_max))
    thresholds_table.add_row("LOW_COMPLEXITY", str(thresholds.low_max))
    thresholds_table.add_row("MEDIUM_COMPLEXITY", str(thresholds.medium_max))
    console.print(thresholds_table)
    console.print()

    def status(val: bool) -> str:
        return "[green]Yes[/green]" if val else "[dim]No[/dim]"

    features_table = Table(title="Cohort Toggles", show_header=False, box=None)
    features_table.add_column("Toggle", style="bold")
    features_table.add_column("Enabled", justify="right")
    for name, enabled in weight_config.features.model_dump().items():
        features_table.add_row(name, status(enabled))
    console.print(features_table)


@app.command()
def version() -> None:
    """Show version information."""
    from cohortid import __version__

    console.print(f"cohortid v{__version__}")


if __name__ == "__main__":
    app()
