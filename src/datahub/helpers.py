from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from .config import ColumnKind


def to_int(value: Any) -> int:
    """Robustly convert parsed CSV fields to ints."""
    if value is None:
        raise ValueError("Expected integer-like value, received None")
    if isinstance(value, bool):
        return int(value)
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Cannot convert {value!r} to int") from exc
    if not number.is_integer():
        raise ValueError(f"Cannot convert {value!r} to int without truncation")
    return int(number)


def to_cell(value: Any, kind: ColumnKind) -> Optional[Any]:
    """Convert a pandas cell to a plain Python value, mapping NaN/NA to None."""
    if value is None or pd.isna(value):
        return None
    if kind == "text":
        return str(value)
    if kind == "integer":
        return to_int(value)
    return float(value)


def frame_to_records(frame: pd.DataFrame, columns: Mapping[str, ColumnKind]) -> List[Dict[str, Any]]:
    """Convert a typed frame into plain dict records in row order."""
    records: List[Dict[str, Any]] = []
    for row in frame.itertuples(index=False, name=None):
        records.append({name: to_cell(value, columns[name]) for name, value in zip(frame.columns, row)})
    return records
