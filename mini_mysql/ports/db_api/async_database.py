"""aiomysql pool adapter implementing the core async database port."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import aiomysql

from ...core.types import QueryResult
from .dialects import Dialect, MySQLDialect

logger = logging.getLogger(__name__)


class AsyncPoolDatabase:
    """Run each query on a connection borrowed from an `aiomysql.Pool`."""

    def __init__(self, pool: Any, dialect: Optional[Dialect] = None):
        """Create async database adapter.

        Args:
            pool: `aiomysql.Pool` (or any object with the same interface).
            dialect: SQL dialect, `MySQLDialect` by default.
        """

        self.pool = pool
        self.dialect = dialect or MySQLDialect()

    async def query(
        self,
        sql: str,
        params: Optional[Sequence[Any]] = None,
        *,
        rows_as_array: bool = False,
    ) -> QueryResult:
        """Execute SQL on a pooled connection and collect the whole result.

        Rows are dicts keyed by column label, or lists of column values when
        `rows_as_array` is set. `params=None` executes without interpolation.
        """

        cursor_cls = aiomysql.Cursor if rows_as_array else aiomysql.DictCursor
        async with self.pool.acquire() as conn:
            async with conn.cursor(cursor_cls) as cur:
                if params is None:
                    await cur.execute(sql)
                else:
                    await cur.execute(sql, tuple(params))
                description = cur.description
                rows = list(await cur.fetchall()) if description else []
                return QueryResult(
                    rows=rows,
                    fields=tuple(d[0] for d in description or ()),
                    affected_rows=max(cur.rowcount or 0, 0),
                    insert_id=cur.lastrowid or 0,
                )

    async def close(self) -> None:
        """Close the pool and wait until every connection is released."""

        self.pool.close()
        await self.pool.wait_closed()
        logger.debug("aiomysql pool closed")

    def close_sync(self) -> None:
        """Close the pool without waiting for checked-out connections."""

        self.pool.close()
