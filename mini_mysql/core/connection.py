"""Connection facade: prepare statements and run them in one call."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple, Type, Union

from . import mutations
from .contracts import AsyncDatabasePort, DialectPort
from .fragments import SqlBuilder, SqlFragment, SqlTemplate
from .models import DataclassModel
from .params import from_template, normalize
from .schema import create_table_sql, drop_table_sql, table_names_sql
from .statement import Statement
from .types import Changes, QueryParams, RowArray

logger = logging.getLogger(__name__)

QueryInput = Union[str, SqlTemplate, SqlFragment, SqlBuilder]


class Connection:
    """Async facade over one native pool.

    Every statement prepared here shares the pool; `close()` releases it.
    """

    def __init__(self, db: AsyncDatabasePort):
        self.db = db
        self.dialect: DialectPort = db.dialect
        self._closed = False

    def quote(self, ident: str) -> str:
        return self.dialect.q(ident)

    def prepare(self, query: QueryInput, params: QueryParams = None) -> Statement:
        """Prepare `query` bound to `params`.

        Strings may use `$name` tokens (bound from a mapping) or `%s`
        placeholders (bound from a sequence or a single value). Fragments
        that carry an `into` type produce a typed statement.
        """

        return self._prepare(query, params)[0]

    def prepare_sync(self, query: QueryInput, params: QueryParams = None) -> Statement:
        raise NotImplementedError(
            "prepare_sync() is not supported: the aiomysql adapter only executes asynchronously."
        )

    def _prepare(
        self, query: QueryInput, params: QueryParams
    ) -> Tuple[Statement, Optional[Type[Any]]]:
        if isinstance(query, SqlTemplate):
            if params is not None:
                raise ValueError("SqlTemplate carries its own values; params must be None.")
            return Statement(self.db, from_template(query.strings, query.values)), None
        if isinstance(query, str):
            return Statement(self.db, normalize(query, params)), None
        if isinstance(query, SqlBuilder):
            query = query.build()
        if isinstance(query, SqlFragment):
            stmt = Statement(
                self.db, normalize(query.sql, query.params if params is None else params)
            )
            if query.into is not None and query.into is not bool:
                return stmt.with_result_type(query.into), query.into
            return stmt, query.into
        raise TypeError(
            f"Expected SQL string, SqlTemplate, SqlFragment or SqlBuilder, got {type(query).__name__}."
        )

    async def all(self, query: QueryInput, params: QueryParams = None) -> List[Any]:
        return await self.prepare(query, params).all()

    async def one(self, query: QueryInput, params: QueryParams = None) -> Any:
        return await self.prepare(query, params).one()

    async def column(self, query: QueryInput, params: QueryParams = None) -> List[Any]:
        return await self.prepare(query, params).column()

    async def value(self, query: QueryInput, params: QueryParams = None) -> Any:
        """Return the first column of the first row.

        A fragment built `into` `bool` yields `True`/`False` instead of the
        raw value.
        """

        stmt, into = self._prepare(query, params)
        value = await stmt.value()
        if into is bool:
            return bool(value)
        return value

    async def arrays(self, query: QueryInput, params: QueryParams = None) -> List[RowArray]:
        return await self.prepare(query, params).arrays()

    async def array(self, query: QueryInput, params: QueryParams = None) -> Optional[RowArray]:
        return await self.prepare(query, params).array()

    async def exec(self, query: QueryInput, params: QueryParams = None) -> Changes:
        return await self.prepare(query, params).exec()

    async def run(self, query: QueryInput, params: QueryParams = None) -> None:
        await self.prepare(query, params).run()

    async def insert(
        self,
        row: Any,
        *,
        only_props: Optional[Sequence[str]] = None,
        only_with_values: bool = False,
    ) -> Changes:
        """Insert one dataclass row."""

        return await mutations.insert(
            self, row, only_props=only_props, only_with_values=only_with_values
        )

    async def insert_all(
        self,
        rows: Sequence[Any],
        *,
        only_props: Optional[Sequence[str]] = None,
        only_with_values: bool = False,
    ) -> Changes:
        """Insert dataclass rows sequentially."""

        return await mutations.insert_all(
            self, rows, only_props=only_props, only_with_values=only_with_values
        )

    async def update(
        self,
        row: Any,
        *,
        only_props: Optional[Sequence[str]] = None,
        only_with_values: bool = False,
    ) -> Changes:
        """Update one dataclass row by primary key."""

        return await mutations.update(
            self, row, only_props=only_props, only_with_values=only_with_values
        )

    async def delete(self, row: Any) -> Changes:
        """Delete one dataclass row by primary key."""

        return await mutations.delete(self, row)

    async def list_tables(self) -> List[str]:
        return await self.column(table_names_sql(self.dialect))

    async def create_table(self, model: Type[DataclassModel], *, if_not_exists: bool = False) -> None:
        await self.prepare(create_table_sql(model, self.dialect, if_not_exists=if_not_exists)).run()

    async def drop_table(self, model: Type[DataclassModel], *, if_exists: bool = True) -> None:
        await self.prepare(drop_table_sql(model, self.dialect, if_exists=if_exists)).run()

    async def close(self) -> None:
        """Close the shared pool. Later calls are no-ops."""

        if self._closed:
            return
        self._closed = True
        logger.debug("Closing connection pool")
        await self.db.close()

    def close_sync(self) -> None:
        """Close the shared pool without waiting for connections to finish."""

        if self._closed:
            return
        self._closed = True
        self.db.close_sync()

    async def __aenter__(self) -> Connection:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()
