"""Column views and paired samples drawn from record datasets.

A dataset is any of:

* an iterable of mapping records whose values are already numbers
  (``list[dict]``, ``src.datahub.CountyTable``, ...),
* a column-oriented mapping ``{field: sequence}`` of index-aligned columns,
* a ``pandas.DataFrame``.

Objects exposing ``fieldnames`` (or ``columns``) declare their schema up front;
text cells are not parsed, so raw CSV rows must go through a loader first;
for plain record iterables a field counts as present once any record carries it.
Missing values (``None``, ``NaN``, ``pd.NA``) are dropped from column views and
any record missing either side is dropped from a paired sample.
"""

from __future__ import annotations

import math
import numbers
from decimal import Decimal
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .errors import FieldNotFoundError, FieldTypeError

Record = Mapping[str, Any]
Dataset = Union[Iterable[Record], Mapping[str, Sequence[Any]], pd.DataFrame]


def is_missing(value: Any) -> bool:
    """True for the values treated as an absent observation."""
    if value is None or value is pd.NA:
        return True
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, (float, np.floating)):
        return bool(np.isnan(value))
    return False


def as_number(value: Any, field: str) -> Optional[float]:
    """Convert a field value to float, returning None when it is missing."""
    if is_missing(value):
        return None
    if isinstance(value, (bool, np.bool_)):
        raise FieldTypeError(field, value)
    if isinstance(value, (numbers.Real, Decimal)):
        number = float(value)
        if not math.isfinite(number):
            raise FieldTypeError(field, value)
        return number
    raise FieldTypeError(field, value)


def ensure_mapping(row: Any) -> Record:
    """Guarantee dataset rows behave like mappings."""
    if isinstance(row, Mapping):
        return row
    raise TypeError(f"Unexpected row type: {type(row)}")


def dataset_fields(dataset: Any) -> Optional[Tuple[str, ...]]:
    """Return the declared schema of a dataset, or None when it only emerges from scanning."""
    if isinstance(dataset, pd.DataFrame):
        return tuple(str(column) for column in dataset.columns)
    if isinstance(dataset, Mapping):
        return tuple(str(key) for key in dataset.keys())
    fieldnames = getattr(dataset, "fieldnames", None)
    if fieldnames is not None:
        return tuple(fieldnames)
    return None


def column_view(dataset: Dataset, field: str) -> Iterator[Optional[float]]:
    """Lazily yield one field's values across the dataset, keeping missing markers as None."""
    for (value,) in _iter_raw(dataset, (field,)):
        yield as_number(value, field)


def numeric_values(dataset: Dataset, field: str) -> Iterator[float]:
    """Yield the non-missing values of a single field."""
    for value in column_view(dataset, field):
        if value is not None:
            yield value


def paired_sample(dataset: Dataset, field_x: str, field_y: str) -> Iterator[Tuple[float, float]]:
    """Yield index-aligned (x, y) pairs from records where both fields are present."""
    for raw_x, raw_y in _iter_raw(dataset, (field_x, field_y)):
        x = as_number(raw_x, field_x)
        y = as_number(raw_y, field_y)
        if x is None or y is None:
            continue
        yield x, y


def _iter_raw(dataset: Any, fields: Tuple[str, ...]) -> Iterator[Tuple[Any, ...]]:
    schema = dataset_fields(dataset)
    if schema is not None:
        for field in fields:
            if field not in schema:
                raise FieldNotFoundError(field)

    if isinstance(dataset, pd.DataFrame):
        yield from zip(*(dataset[field] for field in fields))
        return

    if isinstance(dataset, Mapping):
        columns = [dataset[field] for field in fields]
        lengths = {len(column) for column in columns}
        if len(lengths) > 1:
            raise ValueError(f"Columns {', '.join(fields)} are not index-aligned (lengths {sorted(lengths)}).")
        yield from zip(*columns)
        return

    seen = set(fields) if schema is not None else set()
    scanned = 0
    for row in dataset:
        record = ensure_mapping(row)
        scanned += 1
        values = []
        for field in fields:
            if field in record:
                seen.add(field)
            values.append(record.get(field))
        yield tuple(values)

    if scanned:
        for field in fields:
            if field not in seen:
                raise FieldNotFoundError(field)


__all__ = [
    "Dataset",
    "Record",
    "as_number",
    "column_view",
    "dataset_fields",
    "ensure_mapping",
    "is_missing",
    "numeric_values",
    "paired_sample",
]
