"""SQL inputs accepted by the connection facade.

A query builder hands this layer either a finished `SqlFragment`, an object
with a `build()` method that returns one, or a `SqlTemplate` whose literal
parts are joined with positional placeholders.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Protocol, Tuple, Type, runtime_checkable

from .types import QueryParams


@dataclass(frozen=True)
class SqlFragment:
    """Finished SQL text with its parameters and optional result type."""

    sql: str
    params: QueryParams = None
    into: Optional[Type[Any]] = None

    def into_type(self, into: Type[Any]) -> SqlFragment:
        """Return a copy whose rows are materialized into `into`."""

        return replace(self, into=into)


@runtime_checkable
class SqlBuilder(Protocol):
    """Anything that can build itself into a `SqlFragment`."""

    def build(self) -> SqlFragment: ...


@dataclass(frozen=True)
class SqlTemplate:
    """Literal SQL parts interleaved with positional values.

    `SqlTemplate(("SELECT * FROM t WHERE id = ", ""), (1,))` renders as
    `SELECT * FROM t WHERE id = %s` bound to `(1,)`.
    """

    strings: Tuple[str, ...]
    values: Tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        if len(self.strings) != len(self.values) + 1:
            raise ValueError(
                "SqlTemplate needs exactly one more string part than values, got "
                f"{len(self.strings)} parts and {len(self.values)} values."
            )

    @classmethod
    def of(cls, *parts: Any) -> SqlTemplate:
        """Build a template from alternating literal strings and values.

        `SqlTemplate.of("SELECT * FROM t WHERE id = ", 1)` is equivalent to
        the example above.
        """

        items = list(parts)
        if len(items) % 2 == 0:
            items.append("")
        strings = tuple(items[0::2])
        for part in strings:
            if not isinstance(part, str):
                raise TypeError(
                    f"SqlTemplate.of() expects str at even positions, got {type(part).__name__}."
                )
        return cls(strings, tuple(items[1::2]))
