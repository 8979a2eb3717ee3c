"""Typer-based CLI entry point."""

from __future__ import annotations

import math
import numbers
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .core import ArgumentIntervalError, CatdistError
from .distributions import Categorical, get_table, list_tables, load_yaml_config
from .sampling import SamplingConfig, frequency_check, sample_categorical, tabulate_draws

app = typer.Typer(help="Categorical distribution toolkit CLI.")
console = Console()

WEIGHTS_ARGUMENT = typer.Argument(
    None,
    help="Unnormalised, non-negative category weights.",
    show_default=False,
)

TABLE_OPTION = typer.Option(
    None,
    "--table",
    "-t",
    help="Use a registered weight table instead of explicit weights.",
    show_default=False,
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    exists=True,
    dir_okay=False,
    readable=True,
    help="YAML file with additional weight tables to register first.",
    show_default=False,
)

SIZE_OPTION = typer.Option(1000, "--size", "-n", min=0, help="Number of draws.")
SEED_OPTION = typer.Option(None, "--seed", help="Seed for the random generator.")
SEARCH_OPTION = typer.Option(
    "binary",
    "--search",
    help="Inverse-CDF search strategy: binary (default) or linear.",
    show_default=True,
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose output.")
VERSION_OPTION = typer.Option(False, "--version", help="Show version and exit.")


@app.callback(invoke_without_command=True)
def cli_callback(  # noqa: B008
    ctx: typer.Context,
    verbose: bool = VERBOSE_OPTION,
    version: bool = VERSION_OPTION,
) -> None:
    if verbose or version:
        console.print(f"[bold green]catdist {__version__}[/bold green]")
    if ctx.invoked_subcommand is None and not ctx.resilient_parsing:
        raise typer.Exit()


def _format_metric(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, numbers.Real):
        val = float(value)
        if math.isnan(val) or math.isinf(val):
            return "-"
        return f"{val:.4f}"
    return str(value)


def _resolve_distribution(
    weights: list[float] | None,
    table: str | None,
    config: Path | None,
) -> Categorical:
    if config is not None:
        load_yaml_config(config)
    if table and weights:
        console.print("[red]Specify either explicit weights or --table, not both.[/red]")
        raise typer.Exit(code=1)
    try:
        if table:
            return get_table(table).build()
        if not weights:
            console.print("[red]Provide category weights or --table.[/red]")
            raise typer.Exit(code=1)
        return Categorical.from_weights(weights)
    except (CatdistError, KeyError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc


@app.command()
def registry() -> None:
    """List registered weight tables."""
    table = Table(title="Registered Weight Tables")
    table.add_column("Name")
    table.add_column("Weights")
    table.add_column("Description", overflow="fold")
    for name in list_tables():
        entry = get_table(name)
        weights = ", ".join(f"{value:g}" for value in entry.weights)
        table.add_row(entry.name, weights, entry.notes or "")
    console.print(table)


@app.command()
def describe(  # noqa: B008
    weights: list[float] | None = WEIGHTS_ARGUMENT,
    table: str | None = TABLE_OPTION,
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Summarise a categorical distribution."""
    dist = _resolve_distribution(weights, table, config)
    frame = dist.summary_frame()
    outcomes = Table(title="Categorical Distribution", expand=True)
    outcomes.add_column("Outcome", justify="right", no_wrap=True)
    outcomes.add_column("Cumulative", justify="right", no_wrap=True)
    outcomes.add_column("Probability", justify="right", no_wrap=True)
    outcomes.add_column("CDF", justify="right", no_wrap=True)
    for row in frame.itertuples(index=False):
        outcomes.add_row(
            str(row.outcome),
            _format_metric(row.cumulative),
            _format_metric(row.probability),
            _format_metric(row.cdf),
        )
    console.print(outcomes)

    stats = Table(title="Summary")
    stats.add_column("Statistic")
    stats.add_column("Value", justify="right")
    stats.add_row("mean", _format_metric(dist.mean()))
    stats.add_row("variance", _format_metric(dist.variance()))
    stats.add_row("entropy", _format_metric(dist.entropy()))
    stats.add_row("min", str(dist.min()))
    stats.add_row("max", str(dist.max()))
    console.print(stats)


@app.command()
def cdf(  # noqa: B008
    x: float = typer.Argument(
        ...,
        help="Point at which to evaluate the CDF (0 <= x <= k). "
        "Put `--` before a negative value so it is not read as an option.",
    ),
    weights: list[float] | None = WEIGHTS_ARGUMENT,
    table: str | None = TABLE_OPTION,
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Evaluate the cumulative distribution function at ``x``."""
    dist = _resolve_distribution(weights, table, config)
    try:
        value = dist.cdf(x)
    except ArgumentIntervalError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"cdf({x:g}) = {value:.6g}")


@app.command()
def sample(  # noqa: B008
    weights: list[float] | None = WEIGHTS_ARGUMENT,
    table: str | None = TABLE_OPTION,
    config: Path | None = CONFIG_OPTION,
    size: int = SIZE_OPTION,
    seed: int | None = SEED_OPTION,
    search: str = SEARCH_OPTION,
) -> None:
    """Draw samples and compare observed frequencies with the distribution."""
    if search not in {"binary", "linear"}:
        console.print(f"[red]Unknown search strategy '{search}'.[/red]")
        raise typer.Exit(code=1)
    dist = _resolve_distribution(weights, table, config)
    draws = sample_categorical(
        dist,
        size,
        random_state=seed,
        config=SamplingConfig(search=search),  # type: ignore[arg-type]
    )
    counts = tabulate_draws(draws, dist.n_categories)

    result = Table(title=f"Draws (n={size}, search={search})", expand=True)
    result.add_column("Outcome", justify="right", no_wrap=True)
    result.add_column("Count", justify="right", no_wrap=True)
    result.add_column("Observed", justify="right", no_wrap=True)
    result.add_column("Expected", justify="right", no_wrap=True)
    for outcome, count in enumerate(counts):
        observed = count / size if size else float("nan")
        result.add_row(
            str(outcome),
            str(int(count)),
            _format_metric(observed),
            _format_metric(dist.pmf(outcome)),
        )
    console.print(result)

    if size:
        check = frequency_check(dist, draws)
        console.print(
            f"Chi^2 = {_format_metric(check.statistic)} "
            f"(dof={check.dof}, p={_format_metric(check.p_value)})"
        )


def main() -> None:  # pragma: no cover - console entry
    app()
