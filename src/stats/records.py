"""Result records returned by the statistics core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Tuple

VarianceMode = Literal["population", "sample"]
VARIANCE_MODES: Tuple[VarianceMode, ...] = ("population", "sample")


@dataclass(frozen=True)
class StatResult:
    """Scalar statistic tagged with what it measures."""

    statistic: str
    value: float
    fields: Tuple[str, ...]
    n: int
    mode: Optional[VarianceMode] = None

    def __float__(self) -> float:
        return self.value


@dataclass(frozen=True)
class RegressionResult:
    """Least-squares fit of `y = slope * x + intercept` over a paired sample."""

    slope: float
    intercept: float
    r_squared: float
    n: int
    field_x: str = "x"
    field_y: str = "y"

    def predict(self, x: float) -> float:
        """Expected y for the supplied x under the fitted line."""
        return self.slope * float(x) + self.intercept


__all__ = ["RegressionResult", "StatResult", "VarianceMode", "VARIANCE_MODES"]
