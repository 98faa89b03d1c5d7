"""Public core API: parameter binding, statements, connection facade and schema."""

from .connection import Connection, QueryInput
from .errors import InvalidParameterShapeError, MissingParameterError, ParameterError
from .fragments import SqlBuilder, SqlFragment, SqlTemplate
from .materialize import materialize
from .models import (
    DataclassModel,
    auto_pk_field,
    model_fields,
    pk_fields,
    pk_names,
    props_with_values,
    table_name,
)
from .mutations import delete_props, insert_props, update_props
from .params import (
    Named,
    NoParams,
    ParamSource,
    Positional,
    QueryDescriptor,
    Scalar,
    bind,
    normalize,
    param_source,
)
from .schema import (
    create_table_sql,
    delete_sql,
    drop_table_sql,
    insert_sql,
    to_db_row,
    update_sql,
)
from .schema_columns import DefaultValue
from .splitter import split_sql_statements
from .statement import Statement, TypedStatement
from .types import Changes, QueryResult

__all__ = [
    "Changes",
    "Connection",
    "DataclassModel",
    "DefaultValue",
    "InvalidParameterShapeError",
    "MissingParameterError",
    "Named",
    "NoParams",
    "ParamSource",
    "ParameterError",
    "Positional",
    "QueryDescriptor",
    "QueryInput",
    "QueryResult",
    "Scalar",
    "SqlBuilder",
    "SqlFragment",
    "SqlTemplate",
    "Statement",
    "TypedStatement",
    "auto_pk_field",
    "bind",
    "create_table_sql",
    "delete_props",
    "delete_sql",
    "drop_table_sql",
    "insert_props",
    "insert_sql",
    "materialize",
    "model_fields",
    "normalize",
    "param_source",
    "pk_fields",
    "pk_names",
    "props_with_values",
    "split_sql_statements",
    "table_name",
    "to_db_row",
    "update_props",
    "update_sql",
]
