"""Aggregate statistics over the numeric fields of a record dataset.

Every operation makes one forward pass over the dataset, feeding non-missing
values into a constant-size accumulator, and either returns a full-precision
result or raises a single `StatsError`. Bivariate statistics only use records
where both fields are present; univariate statistics skip missing values.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, Optional

from .accumulators import CoMomentAccumulator, MomentAccumulator
from .columns import Dataset, numeric_values, paired_sample
from .errors import DegenerateInputError, InsufficientDataError, StatsError
from .records import VARIANCE_MODES, RegressionResult, StatResult, VarianceMode


def paired_moments(dataset: Dataset, field_x: str, field_y: str) -> CoMomentAccumulator:
    """Accumulate the paired sample of two fields in one pass."""
    return CoMomentAccumulator().extend(paired_sample(dataset, field_x, field_y))


def column_moments(dataset: Dataset, field: str) -> MomentAccumulator:
    """Accumulate the non-missing values of one field in one pass."""
    return MomentAccumulator().extend(numeric_values(dataset, field))


# ---------------------------------------------------------------------------
# Bivariate statistics


def correlation(dataset: Dataset, field_x: str, field_y: str) -> float:
    """Pearson correlation coefficient of two fields over their paired sample."""
    return correlation_from_moments(paired_moments(dataset, field_x, field_y))


def correlation_from_moments(moments: CoMomentAccumulator) -> float:
    if moments.count < 2:
        raise InsufficientDataError("correlation", 2, moments.count)
    if moments.m2_x <= 0.0 or moments.m2_y <= 0.0:
        raise DegenerateInputError("correlation is undefined when either column has zero variance.")
    return moments.pearson()


def linear_regression(dataset: Dataset, field_x: str, field_y: str) -> RegressionResult:
    """Least-squares fit of `field_y` on `field_x`.

    Slope, intercept and R² all come from the same accumulated sample. A
    constant `field_y` is fitted exactly by a flat line, so R² is reported as 1.0.
    """
    moments = paired_moments(dataset, field_x, field_y)
    return regression_from_moments(moments, field_x=field_x, field_y=field_y)


def regression_from_moments(
    moments: CoMomentAccumulator, field_x: str = "x", field_y: str = "y"
) -> RegressionResult:
    if moments.count < 2:
        raise InsufficientDataError("linear regression", 2, moments.count)
    if moments.m2_x <= 0.0:
        raise DegenerateInputError(f"Slope is undefined: every '{field_x}' value is identical.")

    slope = moments.c_xy / moments.m2_x
    intercept = moments.mean_y - slope * moments.mean_x
    r_squared = 1.0 if moments.m2_y <= 0.0 else moments.pearson() ** 2
    return RegressionResult(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        n=moments.count,
        field_x=field_x,
        field_y=field_y,
    )


def covariance(dataset: Dataset, field_x: str, field_y: str, mode: VarianceMode = "population") -> float:
    """Population or sample covariance of two fields over their paired sample."""
    check_mode(mode)
    return covariance_from_moments(paired_moments(dataset, field_x, field_y), mode)


def covariance_from_moments(moments: CoMomentAccumulator, mode: VarianceMode) -> float:
    denominator = _denominator("covariance", moments.count, mode)
    return moments.c_xy / denominator


# ---------------------------------------------------------------------------
# Univariate statistics


def variance(dataset: Dataset, field: str, mode: VarianceMode = "population") -> float:
    """Population (divide by n) or sample (divide by n - 1) variance of one field."""
    check_mode(mode)
    return variance_from_moments(column_moments(dataset, field), mode)


def variance_from_moments(moments: MomentAccumulator, mode: VarianceMode) -> float:
    denominator = _denominator("variance", moments.count, mode)
    return max(moments.m2, 0.0) / denominator


def standard_deviation(dataset: Dataset, field: str, mode: VarianceMode = "population") -> float:
    """Square root of `variance` for the same field and mode."""
    return math.sqrt(variance(dataset, field, mode))


def mean(dataset: Dataset, field: str) -> float:
    """Arithmetic mean of the non-missing values of one field."""
    moments = column_moments(dataset, field)
    if moments.count < 1:
        raise InsufficientDataError("mean", 1, moments.count)
    return moments.mean


def check_mode(mode: str) -> None:
    """Reject anything other than 'population' or 'sample' before any data is read."""
    if mode not in VARIANCE_MODES:
        raise StatsError(f"Unknown mode '{mode}'; expected one of {', '.join(VARIANCE_MODES)}.")


def _denominator(statistic: str, count: int, mode: VarianceMode) -> int:
    check_mode(mode)
    if mode == "population":
        if count < 1:
            raise InsufficientDataError(f"population {statistic}", 1, count)
        return count
    if count < 2:
        raise InsufficientDataError(f"sample {statistic}", 2, count)
    return count - 1


# ---------------------------------------------------------------------------
# Tagged results


UnivariateFn = Callable[[MomentAccumulator, VarianceMode], float]
BivariateFn = Callable[[CoMomentAccumulator, VarianceMode], float]

UNIVARIATE: Dict[str, UnivariateFn] = {
    "variance": variance_from_moments,
    "stddev": lambda moments, mode: math.sqrt(variance_from_moments(moments, mode)),
}

BIVARIATE: Dict[str, BivariateFn] = {
    "corr": lambda moments, _mode: correlation_from_moments(moments),
    "covar": covariance_from_moments,
    "regr_slope": lambda moments, _mode: regression_from_moments(moments).slope,
    "regr_intercept": lambda moments, _mode: regression_from_moments(moments).intercept,
    "regr_r2": lambda moments, _mode: regression_from_moments(moments).r_squared,
}


def measure(
    statistic: str,
    dataset: Dataset,
    field: str,
    other: Optional[str] = None,
    mode: VarianceMode = "population",
) -> StatResult:
    """Compute a named statistic and tag it with its fields, sample size and mode.

    Bivariate statistics take `field` as the independent variable and `other`
    as the dependent one.
    """
    check_mode(mode)
    if statistic in UNIVARIATE:
        if other is not None:
            raise ValueError(f"'{statistic}' takes a single field.")
        moments = column_moments(dataset, field)
        value = UNIVARIATE[statistic](moments, mode)
        return StatResult(statistic=statistic, value=value, fields=(field,), n=moments.count, mode=mode)

    if statistic in BIVARIATE:
        if other is None:
            raise ValueError(f"'{statistic}' needs two fields.")
        paired = paired_moments(dataset, field, other)
        value = BIVARIATE[statistic](paired, mode)
        tagged_mode: Optional[VarianceMode] = mode if statistic == "covar" else None
        return StatResult(statistic=statistic, value=value, fields=(field, other), n=paired.count, mode=tagged_mode)

    known = ", ".join(sorted([*UNIVARIATE, *BIVARIATE]))
    raise ValueError(f"Unknown statistic '{statistic}'; expected one of {known}.")


__all__ = [
    "BIVARIATE",
    "UNIVARIATE",
    "check_mode",
    "column_moments",
    "correlation",
    "correlation_from_moments",
    "covariance",
    "covariance_from_moments",
    "linear_regression",
    "mean",
    "measure",
    "paired_moments",
    "regression_from_moments",
    "standard_deviation",
    "variance",
    "variance_from_moments",
]
