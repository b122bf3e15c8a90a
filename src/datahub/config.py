"""Static configuration for the county statistics tables."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Literal, Tuple, TypedDict

ColumnKind = Literal["text", "numeric", "integer"]


class TableConfig(TypedDict):
    table_name: str
    file_name: str
    primary_key: str
    columns: Dict[str, ColumnKind]
    not_null: List[str]
    # (smaller, larger) pairs enforcing `smaller <= larger` whenever both are present.
    ordered_pairs: List[Tuple[str, str]]


# Default directory used by the Typer CLI; callers may override it.
DEFAULT_DATA_ROOT = Path("data/raw")

# ---------------------------------------------------------------------------
# Table-specific configuration payloads.

ACS_2014_2018: TableConfig = {
    "table_name": "acs_2014_2018_stats",
    "file_name": "acs_2014_2018_stats.csv",
    "primary_key": "geoid",
    "columns": {
        "geoid": "text",
        "county": "text",
        "st": "text",
        "pct_travel_60_min": "numeric",
        "pct_bachelors_higher": "numeric",
        "pct_masters_higher": "numeric",
        "median_hh_income": "integer",
    },
    "not_null": ["geoid", "county", "st"],
    "ordered_pairs": [("pct_masters_higher", "pct_bachelors_higher")],
}


__all__ = [
    "ACS_2014_2018",
    "ColumnKind",
    "DEFAULT_DATA_ROOT",
    "TableConfig",
]
