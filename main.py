from pathlib import Path
from typing import Optional

import typer

from experiments.acs_chapter import ReportConfig, rank_counties, run_chapter
from src.datahub import CountyTable, load_acs_table
from src.stats import (
    StatsError,
    describe_correlation,
    describe_r_squared,
    linear_regression,
    measure,
    round_half_up,
)
from src.stats.records import VARIANCE_MODES

app = typer.Typer()


def _csv_option():
    return typer.Option(
        None,
        "--csv",
        exists=False,
        file_okay=True,
        dir_okay=False,
        help="County CSV to load (defaults to data/raw/acs_2014_2018_stats.csv).",
    )


def _load(csv_path: Optional[Path]) -> CountyTable:
    try:
        return load_acs_table(csv_path)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--csv") from exc


@app.command()
def chapter(
    csv_path: Optional[Path] = _csv_option(),
    prediction_x: float = typer.Option(30.0, "--at", help="Bachelor's percentage used for the income estimate."),
    places: int = typer.Option(2, "--places", help="Decimal places for correlations, regression and spread."),
) -> None:
    """
    Run the full correlation / regression / variance walkthrough over the county table.
    """
    table = _load(csv_path)
    config = ReportConfig(
        correlation_places=places,
        regression_places=places,
        spread_places=places,
        prediction_x=prediction_x,
    )
    try:
        config.validate()
        run_chapter(table, config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def corr(
    field_x: str = typer.Argument(..., help="First numeric column."),
    field_y: str = typer.Argument(..., help="Second numeric column."),
    csv_path: Optional[Path] = _csv_option(),
    places: int = typer.Option(2, "--places", help="Decimal places to display."),
) -> None:
    """Pearson correlation between two columns."""
    table = _load(csv_path)
    try:
        result = measure("corr", table, field_x, field_y)
    except StatsError as exc:
        raise typer.BadParameter(str(exc)) from exc
    print(f"corr({field_x}, {field_y}) = {round_half_up(result.value, places)} over {result.n} rows")
    print(f"[stats] {describe_correlation(result.value)}")


@app.command()
def regress(
    field_x: str = typer.Argument(..., help="Independent (predictor) column."),
    field_y: str = typer.Argument(..., help="Dependent column."),
    csv_path: Optional[Path] = _csv_option(),
    at: Optional[float] = typer.Option(None, "--at", help="Predict the dependent value for this x."),
    places: int = typer.Option(2, "--places", help="Decimal places to display."),
) -> None:
    """Least-squares line of FIELD_Y on FIELD_X with its R²."""
    table = _load(csv_path)
    try:
        fit = linear_regression(table, field_x, field_y)
    except StatsError as exc:
        raise typer.BadParameter(str(exc)) from exc
    print(f"slope = {round_half_up(fit.slope, places)}")
    print(f"y_intercept = {round_half_up(fit.intercept, places)}")
    print(f"r_squared = {round_half_up(fit.r_squared, 3)} ({describe_r_squared(fit.r_squared, field_x, field_y)})")
    if at is not None:
        print(f"predicted {field_y} at {field_x}={at}: {round_half_up(fit.predict(at), places)}")


@app.command()
def spread(
    field: str = typer.Argument(..., help="Numeric column."),
    csv_path: Optional[Path] = _csv_option(),
    mode: str = typer.Option("population", "--mode", help="population or sample."),
    places: int = typer.Option(2, "--places", help="Decimal places to display."),
) -> None:
    """Variance and standard deviation of one column."""
    if mode not in VARIANCE_MODES:
        raise typer.BadParameter(f"Expected one of {', '.join(VARIANCE_MODES)}.", param_hint="--mode")
    table = _load(csv_path)
    try:
        var = measure("variance", table, field, mode=mode)  # type: ignore[arg-type]
        std = measure("stddev", table, field, mode=mode)  # type: ignore[arg-type]
    except StatsError as exc:
        raise typer.BadParameter(str(exc)) from exc
    print(f"{mode} variance = {round_half_up(var.value, places)} over {var.n} rows")
    print(f"{mode} standard deviation = {round_half_up(std.value, places)}")


@app.command("rank")
def rank_command(
    field: str = typer.Argument(..., help="Numeric column to rank counties by."),
    csv_path: Optional[Path] = _csv_option(),
    top: int = typer.Option(10, "--top", help="Number of counties to show."),
    ascending: bool = typer.Option(False, "--ascending", help="Rank the smallest values first."),
    dense: bool = typer.Option(False, "--dense", help="Continue ranks after ties without gaps."),
) -> None:
    """Rank counties by FIELD, with masters holders per 100 bachelor's holders."""
    if top < 0:
        raise typer.BadParameter("Must be non-negative.", param_hint="--top")
    table = _load(csv_path)
    try:
        ranked = rank_counties(table, field, top_n=top, descending=not ascending, dense=dense)
    except StatsError as exc:
        raise typer.BadParameter(str(exc)) from exc
    for entry in ranked:
        share = "n/a" if entry.masters_per_100_bachelors is None else round_half_up(entry.masters_per_100_bachelors, 1)
        print(f"{entry.rank}\t{entry.geoid}\t{entry.county}, {entry.st}\t{entry.value:g}\t{share}")


if __name__ == "__main__":
    app()
