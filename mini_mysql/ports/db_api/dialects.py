"""Concrete SQL dialect for the aiomysql adapter."""

from __future__ import annotations

from typing import Dict, List

from ...core.schema_columns import DefaultValue


class Dialect:
    """Base dialect that defines SQL quoting and placeholder behavior."""

    name: str = "generic"
    paramstyle: str = "format"
    quote_char: str = '"'

    # column types the database accepts unchanged
    native_types: List[str] = []
    # database type -> portable types it stands in for
    type_map: Dict[str, List[str]] = {}
    variables: Dict[str, str] = {}

    def q(self, ident: str) -> str:
        """Quote SQL identifier."""

        return f"{self.quote_char}{ident}{self.quote_char}"

    def placeholder(self, key: str) -> str:
        """Return parameter placeholder for current param style."""

        if self.paramstyle == "named":
            return f":{key}"
        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    def auto_pk_sql(self, pk_name: str) -> str:
        """Return SQL fragment for auto-increment primary key column."""

        return f"{self.q(pk_name)} INTEGER PRIMARY KEY"

    def column_type(self, sql_type: str) -> str:
        """Translate a portable column type into this dialect's type."""

        if sql_type in self.native_types:
            return sql_type
        for db_type, portable in self.type_map.items():
            if sql_type in portable:
                return db_type
        return sql_type

    def table_names_sql(self) -> str:
        """Return SQL listing the table names of the current database."""

        raise NotImplementedError(f"{type(self).__name__} cannot list tables.")


class MySQLDialect(Dialect):
    """MySQL/MariaDB dialect (`%s` positional parameters, backtick quoting)."""

    name = "mysql"
    paramstyle = "format"
    quote_char = "`"

    native_types = [
        "INTEGER", "SMALLINT", "BIGINT",
        "DOUBLE", "FLOAT", "DECIMAL",
        "NUMERIC",
        "BOOLEAN",
        "DATE", "DATETIME",
        "TIME", "TIMESTAMP",
        "JSON",
        "BLOB",
        "TEXT",
    ]
    type_map = {
        "DOUBLE": ["REAL"],
        "TIME": ["TIMEZ"],
        "TIMESTAMP": ["TIMESTAMPZ"],
        "INTEGER": ["INTERVAL"],
        "JSON": ["JSONB"],
        "TEXT": ["XML"],
        "CHAR(36)": ["UUID"],
        "BINARY": ["BYTES"],
        "BINARY(1)": ["BIT"],
        "DECIMAL(15,2)": ["MONEY"],
    }
    variables = {
        DefaultValue.NOW: "CURRENT_TIMESTAMP",
        DefaultValue.MAX_TEXT: "TEXT",
        DefaultValue.MAX_TEXT_UNICODE: "TEXT",
        DefaultValue.TRUE: "1",
        DefaultValue.FALSE: "0",
    }

    def auto_pk_sql(self, pk_name: str) -> str:
        return f"{self.q(pk_name)} INT AUTO_INCREMENT PRIMARY KEY"

    def table_names_sql(self) -> str:
        return (
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = DATABASE() ORDER BY table_name"
        )
