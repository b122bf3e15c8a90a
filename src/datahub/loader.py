from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from .config import ACS_2014_2018, DEFAULT_DATA_ROOT, TableConfig
from .helpers import frame_to_records
from .table import CountyTable


def load_acs_table(path: Optional[Path] = None, config: TableConfig = ACS_2014_2018) -> CountyTable:
    """Read a county CSV (with header) and enforce the table's key, NOT NULL and ordering constraints."""
    csv_path = path or DEFAULT_DATA_ROOT / config["file_name"]
    if not csv_path.exists():
        raise FileNotFoundError(f"No CSV found at {csv_path}")

    frame = pd.read_csv(csv_path, dtype=str, keep_default_na=False, na_values=[""])
    missing_columns = [name for name in config["columns"] if name not in frame.columns]
    if missing_columns:
        raise ValueError(f"{csv_path} is missing columns: {', '.join(missing_columns)}")
    frame = _coerce_columns(frame[list(config["columns"])], config)
    _check_constraints(frame, config)

    records = frame_to_records(frame, config["columns"])
    print(f"[datahub] Loaded {config['table_name']} ({len(records)} rows) ← {csv_path}")
    return CountyTable(
        name=config["table_name"],
        fieldnames=tuple(config["columns"]),
        records=tuple(records),
    )


def _coerce_columns(frame: pd.DataFrame, config: TableConfig) -> pd.DataFrame:
    converted: Dict[str, pd.Series] = {}
    for name, kind in config["columns"].items():
        column = frame[name]
        if kind == "text":
            converted[name] = column.str.strip()
            continue
        try:
            converted[name] = pd.to_numeric(column, errors="raise")
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Column '{name}' holds non-numeric values: {exc}") from exc
    return pd.DataFrame(converted, index=frame.index)


def _check_constraints(frame: pd.DataFrame, config: TableConfig) -> None:
    for name in config["not_null"]:
        nulls = frame[name].isna() | (frame[name] == "")
        if nulls.any():
            raise ValueError(f"Column '{name}' must not be empty (row {int(nulls.idxmax()) + 1}).")

    key = config["primary_key"]
    duplicates = frame[key][frame[key].duplicated()]
    if not duplicates.empty:
        raise ValueError(f"Duplicate {key} values: {', '.join(sorted(set(duplicates)))}")

    for smaller, larger in config["ordered_pairs"]:
        both = frame[smaller].notna() & frame[larger].notna()
        violations = frame[both & (frame[smaller] > frame[larger])]
        if not violations.empty:
            first = violations.iloc[0]
            raise ValueError(
                f"Check failed: {smaller} <= {larger} violated for {key}={first[key]} "
                f"({first[smaller]} > {first[larger]})."
            )
