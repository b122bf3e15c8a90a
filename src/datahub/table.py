from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from src.stats.errors import FieldNotFoundError


@dataclass(frozen=True)
class CountyTable:
    """Loaded rows of a county table; missing values are stored as None."""

    name: str
    fieldnames: Tuple[str, ...]
    records: Tuple[Mapping[str, Any], ...]

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def column(self, field: str) -> List[Optional[Any]]:
        """Return one field across every row, preserving row order."""
        if field not in self.fieldnames:
            raise FieldNotFoundError(field)
        return [record.get(field) for record in self.records]

    def lookup(self, key_field: str) -> Dict[Any, Mapping[str, Any]]:
        """Index rows by a unique key column."""
        if key_field not in self.fieldnames:
            raise FieldNotFoundError(key_field)
        index: Dict[Any, Mapping[str, Any]] = {}
        for record in self.records:
            key = record.get(key_field)
            if key in index:
                raise ValueError(f"Column '{key_field}' is not unique in {self.name}: {key!r} repeats.")
            index[key] = record
        return index
