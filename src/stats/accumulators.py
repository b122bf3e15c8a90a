"""Single-pass moment accumulators (Welford / Youngs-Cramer updates).

Both accumulators keep running means and centred sums of squares instead of raw
power sums, so large-magnitude columns such as household incomes do not lose
precision to cancellation. Partial accumulators built over separate chunks of a
stream can be combined with `merge`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from .errors import DegenerateInputError


@dataclass
class MomentAccumulator:
    """Running count, mean and centred sum of squares for one column."""

    count: int = 0
    mean: float = 0.0
    m2: float = 0.0

    def update(self, value: float) -> None:
        self.count += 1
        n = self.count
        delta = value - self.mean
        self.mean += delta / n
        self.m2 += delta * delta * (n - 1) / n

    def extend(self, values: Iterable[float]) -> "MomentAccumulator":
        for value in values:
            self.update(value)
        return self

    def merge(self, other: "MomentAccumulator") -> "MomentAccumulator":
        """Return the accumulator describing both inputs combined."""
        if other.count == 0:
            return MomentAccumulator(self.count, self.mean, self.m2)
        if self.count == 0:
            return MomentAccumulator(other.count, other.mean, other.m2)
        n = self.count + other.count
        delta = other.mean - self.mean
        mean = self.mean + delta * other.count / n
        m2 = self.m2 + other.m2 + delta * delta * self.count * other.count / n
        return MomentAccumulator(n, mean, m2)

    @property
    def total(self) -> float:
        """Σx reconstructed from the running mean."""
        return self.mean * self.count


@dataclass
class CoMomentAccumulator:
    """Running moments of an index-aligned (x, y) sample."""

    count: int = 0
    mean_x: float = 0.0
    mean_y: float = 0.0
    m2_x: float = 0.0
    m2_y: float = 0.0
    c_xy: float = 0.0

    def update(self, x: float, y: float) -> None:
        self.count += 1
        n = self.count
        dx = x - self.mean_x
        dy = y - self.mean_y
        self.mean_x += dx / n
        self.mean_y += dy / n
        # The (n - 1) / n factor keeps the update identical when x and y are swapped.
        self.m2_x += dx * dx * (n - 1) / n
        self.m2_y += dy * dy * (n - 1) / n
        self.c_xy += dx * dy * (n - 1) / n

    def extend(self, pairs: Iterable[Tuple[float, float]]) -> "CoMomentAccumulator":
        for x, y in pairs:
            self.update(x, y)
        return self

    def merge(self, other: "CoMomentAccumulator") -> "CoMomentAccumulator":
        """Return the accumulator describing both inputs combined."""
        if other.count == 0:
            return CoMomentAccumulator(self.count, self.mean_x, self.mean_y, self.m2_x, self.m2_y, self.c_xy)
        if self.count == 0:
            return CoMomentAccumulator(other.count, other.mean_x, other.mean_y, other.m2_x, other.m2_y, other.c_xy)
        n = self.count + other.count
        weight = self.count * other.count / n
        dx = other.mean_x - self.mean_x
        dy = other.mean_y - self.mean_y
        return CoMomentAccumulator(
            count=n,
            mean_x=self.mean_x + dx * other.count / n,
            mean_y=self.mean_y + dy * other.count / n,
            m2_x=self.m2_x + other.m2_x + dx * dx * weight,
            m2_y=self.m2_y + other.m2_y + dy * dy * weight,
            c_xy=self.c_xy + other.c_xy + dx * dy * weight,
        )

    def swapped(self) -> "CoMomentAccumulator":
        """Accumulator for the (y, x) sample."""
        return CoMomentAccumulator(self.count, self.mean_y, self.mean_x, self.m2_y, self.m2_x, self.c_xy)

    def pearson(self) -> float:
        """Pearson r, clamped to [-1, 1]; callers must rule out zero variances first."""
        # Root each sum separately: their product overflows or underflows at extreme magnitudes.
        denominator = math.sqrt(self.m2_x) * math.sqrt(self.m2_y)
        r = self.c_xy / denominator if denominator > 0.0 else math.nan
        if not math.isfinite(r):
            raise DegenerateInputError("Correlation is not representable at this magnitude.")
        return max(-1.0, min(1.0, r))


__all__ = ["CoMomentAccumulator", "MomentAccumulator"]
