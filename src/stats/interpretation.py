"""Reader-facing wording and rounding for computed statistics."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

CorrelationStrength = Literal["none", "weak", "moderate", "strong", "perfect"]

# Upper bounds (inclusive) of |r| rounded to two places; "perfect" needs |r| == 1 up to float drift.
STRENGTH_BANDS: tuple[tuple[float, CorrelationStrength], ...] = (
    (0.0, "none"),
    (0.29, "weak"),
    (0.59, "moderate"),
    (0.99, "strong"),
)
PERFECT_TOLERANCE = 1e-12


def round_half_up(value: float, places: int = 2) -> float:
    """Round like SQL `round(numeric, places)`: halves move away from zero."""
    if places < 0:
        raise ValueError("places must be non-negative.")
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def interpret_correlation(r: float) -> CorrelationStrength:
    """Classify the strength of a correlation coefficient."""
    if not -1.0 <= r <= 1.0:
        raise ValueError(f"Correlation must fall within [-1, 1], received {r}.")
    if math.isclose(abs(r), 1.0, rel_tol=0.0, abs_tol=PERFECT_TOLERANCE):
        return "perfect"
    magnitude = round_half_up(abs(r), 2)
    for upper, label in STRENGTH_BANDS:
        if magnitude <= upper:
            return label
    return "strong"


def describe_correlation(r: float) -> str:
    strength = interpret_correlation(r)
    if strength == "none":
        return "no relationship"
    direction = "positive" if r > 0 else "negative"
    return f"{strength} {direction} relationship"


def describe_r_squared(r_squared: float, field_x: str, field_y: str) -> str:
    """Explain R² as the share of variation in `field_y` attributable to `field_x`."""
    if not 0.0 <= r_squared <= 1.0:
        raise ValueError(f"R² must fall within [0, 1], received {r_squared}.")
    explained = round_half_up(r_squared * 100, 1)
    return f"{explained}% of the variation in {field_y} is explained by {field_x}"


__all__ = [
    "CorrelationStrength",
    "PERFECT_TOLERANCE",
    "STRENGTH_BANDS",
    "describe_correlation",
    "describe_r_squared",
    "interpret_correlation",
    "round_half_up",
]
