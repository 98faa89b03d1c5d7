"""Column SQL helpers used by schema generation."""

from __future__ import annotations

import types
from dataclasses import MISSING, Field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Type, Union, get_args, get_origin
from uuid import UUID

from .codecs import model_type_hints
from .contracts import DialectPort
from .models import column_name


class DefaultValue(str, Enum):
    """Portable default-value variables resolved through `dialect.variables`."""

    NOW = "{NOW}"
    MAX_TEXT = "{MAX_TEXT}"
    MAX_TEXT_UNICODE = "{MAX_TEXT_UNICODE}"
    TRUE = "{TRUE}"
    FALSE = "{FALSE}"


def column_sql(cls: Type[Any], field: Field[Any], dialect: DialectPort) -> str:
    """Build one column definition SQL fragment.

    Non auto-increment primary keys are declared at table level by
    `create_table_sql`.
    """

    name = column_name(field)
    if field.metadata.get("pk") and field.metadata.get("auto"):
        return dialect.auto_pk_sql(name)

    keyed = bool(field.metadata.get("pk") or field.metadata.get("unique"))
    sql_parts = [dialect.q(name), column_type_sql(cls, field, dialect, keyed=keyed)]
    sql_parts.append("NULL" if is_nullable(field) else "NOT NULL")

    if field.metadata.get("unique"):
        sql_parts.append("UNIQUE")

    default = field.metadata.get("default_sql")
    if default is not None:
        sql_parts.append(f"DEFAULT {resolve_variable(default, dialect)}")

    return " ".join(sql_parts)


def column_type_sql(
    cls: Type[Any], field: Field[Any], dialect: DialectPort, *, keyed: bool = False
) -> str:
    """Resolve the SQL type for a field, honoring `metadata={'type': ...}`."""

    explicit = field.metadata.get("type")
    if explicit is not None:
        return dialect.column_type(resolve_variable(explicit, dialect))
    annotation = model_type_hints(cls).get(field.name, field.type)
    return dialect.column_type(resolve_sql_type(annotation, keyed=keyed))


def resolve_variable(value: Any, dialect: DialectPort) -> str:
    """Replace a `DefaultValue` variable with the dialect's SQL for it."""

    if isinstance(value, bool):
        return dialect.variables.get(DefaultValue.TRUE if value else DefaultValue.FALSE, str(int(value)))
    text = str(value.value) if isinstance(value, DefaultValue) else str(value)
    return dialect.variables.get(text, text)


def resolve_sql_type(annotation: Any, *, keyed: bool = False) -> str:
    """Map Python annotation to a portable SQL column type."""

    if isinstance(annotation, str):
        lowered = annotation.lower()
        if "bool" in lowered:
            return "BOOLEAN"
        if "datetime" in lowered:
            return "DATETIME"
        if "date" in lowered:
            return "DATE"
        if "time" in lowered:
            return "TIME"
        if "decimal" in lowered:
            return "NUMERIC"
        if "bytes" in lowered:
            return "BLOB"
        if "uuid" in lowered:
            return "UUID"
        if "dict" in lowered or "list" in lowered:
            return "JSON"
        if "int" in lowered:
            return "INTEGER"
        if "float" in lowered:
            return "REAL"
        return "VARCHAR(255)" if keyed else "TEXT"

    base_type = _unwrap_optional(annotation)

    if base_type is bool:
        return "BOOLEAN"
    if base_type is datetime:
        return "DATETIME"
    if base_type is date:
        return "DATE"
    if base_type is time:
        return "TIME"
    if base_type is Decimal:
        return "NUMERIC"
    if base_type in {bytes, bytearray, memoryview}:
        return "BLOB"
    if base_type is UUID:
        return "UUID"
    if base_type in {dict, list} or get_origin(base_type) in {dict, list}:
        return "JSON"
    if isinstance(base_type, type) and issubclass(base_type, Enum):
        return "VARCHAR(255)"
    if base_type is int:
        return "INTEGER"
    if base_type is float:
        return "REAL"
    return "VARCHAR(255)" if keyed else "TEXT"


def is_nullable(field: Any) -> bool:
    """Infer whether SQL column should allow NULL values."""

    if field.metadata.get("pk"):
        return False

    if field.default is None:
        return True

    if field.default is not MISSING:
        return False

    if isinstance(field.type, str):
        lowered = field.type.lower()
        return (
            lowered.startswith("optional[")
            or "| none" in lowered
            or "none |" in lowered
            or "typing.optional[" in lowered
        )

    origin = get_origin(field.type)
    if origin is None:
        return False

    return any(arg is type(None) for arg in get_args(field.type))


def _unwrap_optional(annotation: Any) -> Any:
    """Extract wrapped type from `Optional[T]` style annotations."""

    if get_origin(annotation) not in {Union, types.UnionType}:
        return annotation

    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    if len(args) == 1:
        return args[0]
    return annotation
