"""Tests for the chapter walkthrough and the Typer commands."""

from __future__ import annotations

from pathlib import Path
import sys

import pytest
from typer.testing import CliRunner

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from experiments.acs_chapter import BACHELORS, INCOME, TRAVEL, ReportConfig, rank_counties, run_chapter
from main import app
from src.datahub.table import CountyTable
from src.stats import FieldTypeError, correlation, standard_deviation, variance

HEADER = "geoid,county,st,pct_travel_60_min,pct_bachelors_higher,pct_masters_higher,median_hh_income"
FIELDS = ("geoid", "county", "st", TRAVEL, BACHELORS, "pct_masters_higher", INCOME)


# ---------------------------------------------------------------------------
# Helper fixtures and utilities


def _row(idx: int, travel: float | None, bachelors: float, income: int | None) -> dict:
    return {
        "geoid": f"{idx:05d}",
        "county": f"County {idx}",
        "st": "Somewhere",
        TRAVEL: travel,
        BACHELORS: bachelors,
        "pct_masters_higher": bachelors / 3,
        INCOME: income,
    }


def _linear_table() -> CountyTable:
    # Income = 1000 * bachelors + 30000 exactly, with one county lacking an income.
    rows = [
        _row(1, 4.0, 10.0, 40000),
        _row(2, 9.0, 20.0, 50000),
        _row(3, 2.0, 30.0, 60000),
        _row(4, 7.5, 40.0, 70000),
        _row(5, None, 25.0, None),
    ]
    return CountyTable(name="acs_test", fieldnames=FIELDS, records=tuple(rows))


def _write_csv(tmp_path: Path) -> Path:
    rows = [
        "01001,Autauga County,Alabama,5.60,27.70,9.70,58786",
        "01003,Baldwin County,Alabama,4.80,31.30,10.60,55962",
        "01005,Barbour County,Alabama,3.10,12.20,4.30,34186",
        "01007,Bibb County,Alabama,9.10,11.50,3.10,45340",
    ]
    path = tmp_path / "acs.csv"
    path.write_text("\n".join([HEADER, *rows]) + "\n", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Walkthrough tests


def test_run_chapter_collects_results(capsys: pytest.CaptureFixture[str]) -> None:
    table = _linear_table()
    report = run_chapter(table)

    assert report.correlations[(INCOME, BACHELORS)] == pytest.approx(1.0)
    assert set(report.correlations) == {(INCOME, BACHELORS), (TRAVEL, INCOME), (TRAVEL, BACHELORS)}
    assert report.regression.slope == pytest.approx(1000.0)
    assert report.regression.intercept == pytest.approx(30000.0)
    assert report.regression.n == 4
    assert report.predicted_income == pytest.approx(60000.0)
    assert report.income_variance.value == pytest.approx(variance(table, INCOME))
    assert report.income_stddev.value == pytest.approx(standard_deviation(table, INCOME))
    assert report.income_stddev.n == 4

    out = capsys.readouterr().out
    assert "[stats] acs_test: 7 columns, 5 rows." in out
    assert "perfect positive relationship" in out
    assert "slope=1000.0, y_intercept=30000.0" in out


def test_run_chapter_uses_prediction_point() -> None:
    report = run_chapter(_linear_table(), ReportConfig(prediction_x=45.0))
    assert report.predicted_income == pytest.approx(75000.0)


def test_report_config_validation() -> None:
    with pytest.raises(ValueError):
        ReportConfig(correlation_places=-1).validate()
    with pytest.raises(ValueError):
        ReportConfig(prediction_x=120.0).validate()


# ---------------------------------------------------------------------------
# CLI tests


def test_cli_corr(tmp_path: Path) -> None:
    path = _write_csv(tmp_path)
    result = CliRunner().invoke(app, ["corr", INCOME, BACHELORS, "--csv", str(path)])
    assert result.exit_code == 0, result.output
    assert f"corr({INCOME}, {BACHELORS})" in result.output
    assert "over 4 rows" in result.output


def test_cli_regress_with_prediction(tmp_path: Path) -> None:
    path = _write_csv(tmp_path)
    result = CliRunner().invoke(app, ["regress", BACHELORS, INCOME, "--csv", str(path), "--at", "30"])
    assert result.exit_code == 0, result.output
    assert "slope = " in result.output
    assert f"predicted {INCOME} at {BACHELORS}=30.0" in result.output


def test_cli_spread_sample_mode(tmp_path: Path) -> None:
    path = _write_csv(tmp_path)
    result = CliRunner().invoke(app, ["spread", INCOME, "--csv", str(path), "--mode", "sample"])
    assert result.exit_code == 0, result.output
    assert "sample variance = " in result.output
    assert "over 4 rows" in result.output


def test_cli_chapter(tmp_path: Path) -> None:
    path = _write_csv(tmp_path)
    result = CliRunner().invoke(app, ["chapter", "--csv", str(path)])
    assert result.exit_code == 0, result.output
    assert "r_squared" in result.output


def test_cli_reports_bad_requests(tmp_path: Path) -> None:
    path = _write_csv(tmp_path)
    runner = CliRunner()
    assert runner.invoke(app, ["corr", INCOME, "county_typo", "--csv", str(path)]).exit_code == 2
    assert runner.invoke(app, ["spread", INCOME, "--csv", str(path), "--mode", "biased"]).exit_code == 2
    assert runner.invoke(app, ["corr", INCOME, BACHELORS, "--csv", str(tmp_path / "absent.csv")]).exit_code == 2


def test_correlation_over_cli_fixture_matches_direct_call(tmp_path: Path) -> None:
    from src.datahub.loader import load_acs_table

    table = load_acs_table(_write_csv(tmp_path))
    assert -1.0 <= correlation(table, TRAVEL, INCOME) <= 1.0


# ---------------------------------------------------------------------------
# Ranking tests


def test_rank_counties_orders_by_income_and_skips_missing() -> None:
    ranked = rank_counties(_linear_table(), INCOME, top_n=10)
    assert [entry.geoid for entry in ranked] == ["00004", "00003", "00002", "00001"]
    assert [entry.rank for entry in ranked] == [1, 2, 3, 4]
    assert ranked[0].value == pytest.approx(70000.0)
    assert ranked[0].masters_per_100_bachelors == pytest.approx(100.0 / 3)


def test_rank_counties_ties_and_dense_ranks() -> None:
    rows = [_row(1, 1.0, 10.0, 50000), _row(2, 1.0, 20.0, 50000), _row(3, 1.0, 30.0, 40000)]
    table = CountyTable(name="ties", fieldnames=FIELDS, records=tuple(rows))
    assert [entry.rank for entry in rank_counties(table, INCOME)] == [1, 1, 3]
    assert [entry.rank for entry in rank_counties(table, INCOME, dense=True)] == [1, 1, 2]
    assert [entry.geoid for entry in rank_counties(table, INCOME, top_n=1, descending=False)] == ["00003"]


def test_rank_counties_rejects_text_columns() -> None:
    with pytest.raises(FieldTypeError):
        rank_counties(_linear_table(), "county")


def test_run_chapter_reports_top_counties(capsys: pytest.CaptureFixture[str]) -> None:
    report = run_chapter(_linear_table(), ReportConfig(top_n=2))
    assert [entry.geoid for entry in report.top_income] == ["00004", "00003"]
    assert "#1 County 4, Somewhere" in capsys.readouterr().out


def test_cli_rank(tmp_path: Path) -> None:
    path = _write_csv(tmp_path)
    result = CliRunner().invoke(app, ["rank", INCOME, "--csv", str(path), "--top", "2"])
    assert result.exit_code == 0, result.output
    lines = [line for line in result.output.splitlines() if not line.startswith("[datahub]")]
    assert len(lines) == 2
    assert lines[0].startswith("1\t01001\tAutauga County, Alabama\t58786")
    assert CliRunner().invoke(app, ["rank", "county", "--csv", str(path)]).exit_code == 2
