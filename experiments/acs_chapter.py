"""Walk through the county statistics chapter: correlations, regression, R², spread and rankings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from src.datahub.table import CountyTable
from src.stats import (
    RegressionResult,
    StatResult,
    correlation,
    dense_rank,
    describe_correlation,
    describe_r_squared,
    linear_regression,
    measure,
    rank,
    rate_per,
    round_half_up,
)

INCOME = "median_hh_income"
BACHELORS = "pct_bachelors_higher"
TRAVEL = "pct_travel_60_min"
MASTERS = "pct_masters_higher"

CorrelationKey = Tuple[str, str]

CORRELATION_PAIRS: Tuple[CorrelationKey, ...] = (
    (INCOME, BACHELORS),
    (TRAVEL, INCOME),
    (TRAVEL, BACHELORS),
)


@dataclass(frozen=True)
class ReportConfig:
    """Presentation settings for the walkthrough; computations keep full precision."""

    correlation_places: int = 2
    regression_places: int = 2
    r_squared_places: int = 3
    spread_places: int = 2
    prediction_x: float = 30.0
    top_n: int = 3

    def validate(self) -> None:
        places = (self.correlation_places, self.regression_places, self.r_squared_places, self.spread_places)
        if any(value < 0 for value in places):
            raise ValueError("Rounding places must be non-negative.")
        if not 0.0 <= self.prediction_x <= 100.0:
            raise ValueError("prediction_x is a percentage and must fall within [0, 100].")
        if self.top_n < 0:
            raise ValueError("top_n must be non-negative.")


@dataclass(frozen=True)
class CountyRank:
    """One county's position when the table is ordered by a numeric column."""

    rank: int
    geoid: str
    county: str
    st: str
    value: float
    masters_per_100_bachelors: Optional[float]


def rank_counties(
    table: CountyTable,
    field: str,
    top_n: int = 10,
    descending: bool = True,
    dense: bool = False,
) -> List[CountyRank]:
    """Rank counties by `field` and return the leading `top_n`; counties missing the value are left out."""
    values = table.column(field)
    ranker = dense_rank if dense else rank
    positions = ranker(values, descending=descending, field=field)

    ranked: List[CountyRank] = []
    for record, value, position in zip(table, values, positions):
        if position is None:
            continue
        masters = record.get(MASTERS)
        bachelors = record.get(BACHELORS)
        per_100 = None if bachelors == 0 else rate_per(masters, bachelors, per=100.0)
        ranked.append(
            CountyRank(
                rank=position,
                geoid=str(record.get("geoid")),
                county=str(record.get("county")),
                st=str(record.get("st")),
                value=float(value),
                masters_per_100_bachelors=per_100,
            )
        )
    ranked.sort(key=lambda item: (item.rank, item.geoid))
    return ranked[:top_n]


@dataclass(frozen=True)
class ChapterReport:
    correlations: Dict[CorrelationKey, float]
    regression: RegressionResult
    predicted_income: float
    income_variance: StatResult
    income_stddev: StatResult
    top_income: Tuple[CountyRank, ...] = ()


def run_chapter(table: CountyTable, config: ReportConfig | None = None) -> ChapterReport:
    """Run the chapter's aggregate queries over the table and print interpretive notes."""
    cfg = config or ReportConfig()
    cfg.validate()
    print(f"[stats] {table.name}: {len(table.fieldnames)} columns, {len(table)} rows.")

    correlations: Dict[CorrelationKey, float] = {}
    for field_a, field_b in CORRELATION_PAIRS:
        r = correlation(table, field_a, field_b)
        correlations[(field_a, field_b)] = r
        print(
            f"[stats] corr({field_a}, {field_b}) = {round_half_up(r, cfg.correlation_places)}"
            f" → {describe_correlation(r)}"
        )

    # Income is the dependent variable; bachelor's share is the predictor.
    regression = linear_regression(table, BACHELORS, INCOME)
    slope = round_half_up(regression.slope, cfg.regression_places)
    intercept = round_half_up(regression.intercept, cfg.regression_places)
    print(f"[stats] regression over {regression.n} counties: slope={slope}, y_intercept={intercept}")
    print(f"[stats] each extra point of {BACHELORS} adds {slope} to {INCOME}.")

    predicted = regression.predict(cfg.prediction_x)
    print(
        f"[stats] expected {INCOME} at {cfg.prediction_x}% {BACHELORS}: "
        f"{round_half_up(predicted, cfg.regression_places)}"
    )

    r_squared = round_half_up(regression.r_squared, cfg.r_squared_places)
    print(f"[stats] r_squared = {r_squared}: {describe_r_squared(regression.r_squared, BACHELORS, INCOME)}.")

    income_variance = measure("variance", table, INCOME, mode="population")
    income_stddev = measure("stddev", table, INCOME, mode="population")
    print(
        f"[stats] {INCOME}: var_pop={round_half_up(income_variance.value, cfg.spread_places)}, "
        f"stddev_pop={round_half_up(income_stddev.value, cfg.spread_places)}"
    )

    top_income = tuple(rank_counties(table, INCOME, top_n=cfg.top_n))
    for entry in top_income:
        share = "n/a" if entry.masters_per_100_bachelors is None else round_half_up(entry.masters_per_100_bachelors, 1)
        print(
            f"[stats] #{entry.rank} {entry.county}, {entry.st}: {INCOME}={entry.value:.0f}, "
            f"masters per 100 bachelor's holders={share}"
        )

    return ChapterReport(
        correlations=correlations,
        regression=regression,
        predicted_income=predicted,
        income_variance=income_variance,
        income_stddev=income_stddev,
        top_income=top_income,
    )
