"""Single-pass statistical aggregates over numeric fields of record datasets."""

from .accumulators import CoMomentAccumulator, MomentAccumulator
from .columns import Dataset, column_view, is_missing, numeric_values, paired_sample
from .engine import (
    correlation,
    covariance,
    linear_regression,
    mean,
    measure,
    standard_deviation,
    variance,
)
from .errors import (
    DegenerateInputError,
    FieldNotFoundError,
    FieldTypeError,
    InsufficientDataError,
    StatsError,
)
from .interpretation import describe_correlation, describe_r_squared, interpret_correlation, round_half_up
from .records import RegressionResult, StatResult, VarianceMode
from .window import dense_rank, rank, rate_per

__all__ = [
    "CoMomentAccumulator",
    "Dataset",
    "DegenerateInputError",
    "FieldNotFoundError",
    "FieldTypeError",
    "InsufficientDataError",
    "MomentAccumulator",
    "RegressionResult",
    "StatResult",
    "StatsError",
    "VarianceMode",
    "column_view",
    "correlation",
    "covariance",
    "dense_rank",
    "describe_correlation",
    "describe_r_squared",
    "interpret_correlation",
    "is_missing",
    "linear_regression",
    "mean",
    "measure",
    "numeric_values",
    "paired_sample",
    "rank",
    "rate_per",
    "round_half_up",
    "standard_deviation",
    "variance",
]
