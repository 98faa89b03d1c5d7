"""Shared core type aliases and value types used across the adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence, Tuple, Union

QueryParams = Union[Mapping[str, Any], Sequence[Any], None]

RowArray = List[Any]


@dataclass(frozen=True)
class Changes:
    """Outcome of a mutating statement."""

    changes: int = 0
    last_insert_rowid: int = 0


@dataclass(frozen=True)
class QueryResult:
    """Normalized result of one native round trip."""

    rows: List[Any]
    fields: Tuple[str, ...] = ()
    affected_rows: int = 0
    insert_id: int = 0
