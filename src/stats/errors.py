"""Typed failures raised by the statistics core."""

from __future__ import annotations


class StatsError(ValueError):
    """Base class for every failure surfaced by `src.stats`."""


class FieldTypeError(StatsError, TypeError):
    """A requested field holds a value that is neither numeric nor missing."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Field '{field}' holds non-numeric value {value!r} ({type(value).__name__}).")
        self.field = field
        self.value = value


class FieldNotFoundError(StatsError, KeyError):
    """A requested field is absent from the dataset schema."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Field '{field}' is not present in the dataset.")
        self.field = field

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class InsufficientDataError(StatsError):
    """Fewer non-missing observations than the statistic requires."""

    def __init__(self, statistic: str, required: int, observed: int) -> None:
        super().__init__(f"{statistic} needs at least {required} observation(s), received {observed}.")
        self.statistic = statistic
        self.required = required
        self.observed = observed


class DegenerateInputError(StatsError):
    """The statistic is undefined because a denominator variance is zero."""


__all__ = [
    "DegenerateInputError",
    "FieldNotFoundError",
    "FieldTypeError",
    "InsufficientDataError",
    "StatsError",
]
