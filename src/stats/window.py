"""Rankings and rates over a single column of values."""

from __future__ import annotations

from typing import Any, Iterable, List, Literal, Optional

import pandas as pd

from .columns import as_number
from .errors import DegenerateInputError

RankMethod = Literal["min", "dense"]


def rank(values: Iterable[Any], descending: bool = True, field: str = "value") -> List[Optional[int]]:
    """Competition ranking: ties share a rank and the following rank is skipped.

    Missing values receive None and do not take part in the ranking.
    """
    return _rank(values, descending=descending, method="min", field=field)


def dense_rank(values: Iterable[Any], descending: bool = True, field: str = "value") -> List[Optional[int]]:
    """Like `rank`, but ranks after a tie continue without gaps."""
    return _rank(values, descending=descending, method="dense", field=field)


def _rank(values: Iterable[Any], descending: bool, method: RankMethod, field: str) -> List[Optional[int]]:
    numbers = pd.Series([as_number(value, field) for value in values], dtype=float)
    ranks = numbers.rank(method=method, ascending=not descending, na_option="keep")
    return [None if pd.isna(position) else int(position) for position in ranks]


def rate_per(numerator: Any, denominator: Any, per: float = 1000.0) -> Optional[float]:
    """Return `numerator / denominator * per`, or None if either side is missing."""
    top = as_number(numerator, "numerator")
    bottom = as_number(denominator, "denominator")
    if top is None or bottom is None:
        return None
    if bottom == 0.0:
        raise DegenerateInputError("Rate is undefined for a zero denominator.")
    return top / bottom * per


__all__ = ["dense_rank", "rank", "rate_per"]
