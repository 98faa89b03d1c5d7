"""Prepared statements with a uniform fetch/execute surface."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

from .contracts import AsyncDatabasePort
from .materialize import materialize
from .params import QueryDescriptor, bind
from .splitter import split_sql_statements
from .types import Changes, QueryResult, RowArray

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _sync_not_supported(name: str) -> NotImplementedError:
    return NotImplementedError(
        f"{name}() is not supported: the aiomysql adapter only executes asynchronously."
    )


class Statement:
    """One prepared query bound to the native database.

    Every call takes its own parameter source; without one, the values given
    when the statement was prepared are used. Statements hold no state
    between calls and can be reused concurrently.
    """

    def __init__(self, db: AsyncDatabasePort, query: QueryDescriptor):
        self.db = db
        self.query = query

    @property
    def sql(self) -> str:
        return self.query.sql

    def with_result_type(self, cls: Callable[..., T]) -> TypedStatement[T]:
        """Return a statement whose `all`/`one` rows are built into `cls`."""

        return TypedStatement(self.db, self.query, cls)

    def params(self, params: Any = None) -> Optional[Tuple[Any, ...]]:
        """Resolve the positional values for one execution."""

        return bind(self.query, params)

    def _row(self, row: Any) -> Any:
        return row

    async def _execute(
        self, sql: str, values: Optional[Tuple[Any, ...]], *, rows_as_array: bool = False
    ) -> QueryResult:
        logger.debug(
            "Executing %s with %d parameters",
            sql,
            len(values) if values else 0,
        )
        return await self.db.query(sql, values, rows_as_array=rows_as_array)

    async def all(self, params: Any = None) -> List[Any]:
        """Return every row as a mapping (or result type instance)."""

        result = await self._execute(self.query.sql, self.params(params))
        return [self._row(row) for row in result.rows]

    async def one(self, params: Any = None) -> Any:
        """Return the first row or `None`."""

        result = await self._execute(self.query.sql, self.params(params))
        return self._row(result.rows[0]) if result.rows else None

    async def arrays(self, params: Any = None) -> List[RowArray]:
        """Return every row as a list of column values."""

        result = await self._execute(self.query.sql, self.params(params), rows_as_array=True)
        return [list(row) for row in result.rows]

    async def array(self, params: Any = None) -> Optional[RowArray]:
        """Return the first row as a list of column values, or `None`."""

        rows = await self.arrays(params)
        return rows[0] if rows else None

    async def column(self, params: Any = None) -> List[Any]:
        """Return the first column of every row."""

        return [row[0] for row in await self.arrays(params)]

    async def value(self, params: Any = None) -> Any:
        """Return the first column of the first row, or `None`."""

        row = await self.array(params)
        return row[0] if row else None

    async def exec(self, params: Any = None) -> Changes:
        """Execute a mutating statement and report affected rows and last id."""

        result = await self._execute(self.query.sql, self.params(params), rows_as_array=True)
        return Changes(
            changes=result.affected_rows or 0,
            last_insert_rowid=result.insert_id or 0,
        )

    async def run(self, params: Any = None) -> None:
        """Execute for side effects only.

        Without bound values the SQL is split into individual statements that
        run one after another; the first failure stops the script.
        """

        values = self.params(params)
        if values:
            await self._execute(self.query.sql, values)
            return
        for sql in split_sql_statements(self.query.sql):
            await self._execute(sql, None)

    def all_sync(self, params: Any = None) -> List[Any]:
        raise _sync_not_supported("all_sync")

    def one_sync(self, params: Any = None) -> Any:
        raise _sync_not_supported("one_sync")

    def arrays_sync(self, params: Any = None) -> List[RowArray]:
        raise _sync_not_supported("arrays_sync")

    def array_sync(self, params: Any = None) -> Optional[RowArray]:
        raise _sync_not_supported("array_sync")

    def column_sync(self, params: Any = None) -> List[Any]:
        raise _sync_not_supported("column_sync")

    def value_sync(self, params: Any = None) -> Any:
        raise _sync_not_supported("value_sync")

    def exec_sync(self, params: Any = None) -> Changes:
        raise _sync_not_supported("exec_sync")

    def run_sync(self, params: Any = None) -> None:
        raise _sync_not_supported("run_sync")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.query.sql!r})"


class TypedStatement(Statement, Generic[T]):
    """Statement whose row results are materialized into `result_type`."""

    def __init__(
        self,
        db: AsyncDatabasePort,
        query: QueryDescriptor,
        result_type: Callable[..., T],
    ):
        super().__init__(db, query)
        self.result_type = result_type

    def _row(self, row: Any) -> Optional[T]:
        return materialize(row, self.result_type)

    async def all(self, params: Any = None) -> List[T]:
        return await super().all(params)

    async def one(self, params: Any = None) -> Optional[T]:
        return await super().one(params)
