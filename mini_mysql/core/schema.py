"""SQL generation for dataclass models.

Generated DML uses `$name` tokens keyed by model property names, so the
statements go through the same named-parameter binding as hand written SQL
and are bound from the mapping produced by `to_db_row`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Type

from .codecs import serialize_value
from .contracts import DialectPort
from .models import (
    DataclassModel,
    auto_pk_field,
    column_name,
    model_fields,
    model_type,
    pk_fields,
    require_dataclass_model,
    require_pk_fields,
    table_name,
)
from .schema_columns import column_sql


def insert_sql(
    cls: Type[DataclassModel],
    dialect: DialectPort,
    *,
    only_props: Optional[Sequence[str]] = None,
) -> str:
    """Build `INSERT` for all writable properties or only `only_props`.

    The auto-increment primary key is only inserted when listed explicitly.
    """

    fields_by_name = _fields_by_name(cls, only_props)
    if only_props is None:
        auto_pk = auto_pk_field(cls)
        fields = [f for f in fields_by_name.values() if f is not auto_pk]
    else:
        fields = [fields_by_name[name] for name in dict.fromkeys(only_props)]

    table_sql = dialect.q(table_name(cls))
    if not fields:
        return f"INSERT INTO {table_sql} () VALUES ()"

    column_sql_list = ", ".join(dialect.q(column_name(f)) for f in fields)
    tokens = ", ".join(f"${f.name}" for f in fields)
    return f"INSERT INTO {table_sql} ({column_sql_list}) VALUES ({tokens})"


def update_sql(
    cls: Type[DataclassModel],
    dialect: DialectPort,
    *,
    only_props: Optional[Sequence[str]] = None,
) -> str:
    """Build `UPDATE` of non-key properties identified by the primary key."""

    pks = require_pk_fields(cls)
    fields_by_name = _fields_by_name(cls, only_props)
    names = list(fields_by_name) if only_props is None else list(dict.fromkeys(only_props))
    set_fields = [fields_by_name[name] for name in names if fields_by_name[name] not in pks]
    if not set_fields:
        raise ValueError(
            f"Cannot UPDATE {cls.__name__} with no writable columns besides primary key."
        )

    set_clause = ", ".join(f"{dialect.q(column_name(f))} = ${f.name}" for f in set_fields)
    return (
        f"UPDATE {dialect.q(table_name(cls))} SET {set_clause} "
        f"WHERE {_pk_where(pks, dialect)}"
    )


def delete_sql(cls: Type[DataclassModel], dialect: DialectPort) -> str:
    """Build `DELETE` of one row identified by the primary key."""

    pks = require_pk_fields(cls)
    return f"DELETE FROM {dialect.q(table_name(cls))} WHERE {_pk_where(pks, dialect)}"


def create_table_sql(
    cls: Type[DataclassModel],
    dialect: DialectPort,
    *,
    if_not_exists: bool = False,
) -> str:
    """Build `CREATE TABLE` statement for a dataclass model."""

    require_dataclass_model(cls)

    definitions = [column_sql(cls, field, dialect) for field in model_fields(cls)]
    pks = pk_fields(cls)
    if pks and auto_pk_field(cls) is None:
        key_columns = ", ".join(dialect.q(column_name(f)) for f in pks)
        definitions.append(f"PRIMARY KEY ({key_columns})")

    prefix = "CREATE TABLE IF NOT EXISTS" if if_not_exists else "CREATE TABLE"
    table_sql = dialect.q(table_name(cls))
    return f"{prefix} {table_sql} (\n  " + ",\n  ".join(definitions) + "\n);"


def drop_table_sql(
    cls: Type[DataclassModel],
    dialect: DialectPort,
    *,
    if_exists: bool = True,
) -> str:
    """Build `DROP TABLE` statement for a dataclass model."""

    require_dataclass_model(cls)
    prefix = "DROP TABLE IF EXISTS" if if_exists else "DROP TABLE"
    return f"{prefix} {dialect.q(table_name(cls))};"


def table_names_sql(dialect: DialectPort) -> str:
    return dialect.table_names_sql()


def to_db_row(obj: Any, *, only_props: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    """Serialize a model instance into a property-name to DB-value mapping."""

    cls = model_type(obj)
    fields_by_name = _fields_by_name(cls, only_props)
    names: List[str] = (
        list(fields_by_name) if only_props is None else list(dict.fromkeys(only_props))
    )
    return {
        name: serialize_value(cls, fields_by_name[name], getattr(obj, name))
        for name in names
    }


def _fields_by_name(
    cls: Type[DataclassModel], only_props: Optional[Sequence[str]]
) -> Dict[str, Any]:
    fields_by_name = {f.name: f for f in model_fields(cls)}
    if only_props is not None:
        invalid = [name for name in only_props if name not in fields_by_name]
        if invalid:
            raise ValueError(
                f"Unknown properties for {cls.__name__}. Invalid: {invalid}"
            )
    return fields_by_name


def _pk_where(pks: Sequence[Any], dialect: DialectPort) -> str:
    return " AND ".join(f"{dialect.q(column_name(f))} = ${f.name}" for f in pks)
