"""Core port contracts used by the statement layer and schema helpers."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .types import QueryResult


class DialectPort(Protocol):
    """Dialect behavior required by schema generation and binding."""

    name: str
    paramstyle: str
    variables: Mapping[str, str]

    def q(self, ident: str) -> str: ...

    def placeholder(self, key: str) -> str: ...

    def auto_pk_sql(self, pk_name: str) -> str: ...

    def column_type(self, sql_type: str) -> str: ...

    def table_names_sql(self) -> str: ...


class AsyncDatabasePort(Protocol):
    """Native database behavior required by `Statement` and `Connection`."""

    dialect: DialectPort

    async def query(
        self,
        sql: str,
        params: Optional[Sequence[Any]] = None,
        *,
        rows_as_array: bool = False,
    ) -> QueryResult: ...

    async def close(self) -> None: ...

    def close_sync(self) -> None: ...
