"""Map raw field-value rows into caller supplied types."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


def materialize(row: Any, target: Optional[Callable[..., T]] = None) -> Any:
    """Construct `target` from one row mapping.

    `None` rows stay `None` and rows are returned unchanged without a target.
    Field names are passed through as keyword arguments; whether they fit the
    target's constructor is up to the target.
    """

    if row is None:
        return None
    if target is None or not isinstance(row, Mapping):
        return row
    return target(**dict(row))
