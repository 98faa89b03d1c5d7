"""Row insert/update/delete helpers used by `Connection`.

Each helper builds SQL from the row's dataclass model, serializes the row
into a property mapping and executes it through a prepared `Statement`.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from .models import model_type, pk_names, props_with_values
from .schema import delete_sql, insert_sql, to_db_row, update_sql
from .types import Changes

NO_CHANGES = Changes(changes=0, last_insert_rowid=0)


def insert_props(
    row: Any,
    *,
    only_props: Optional[Sequence[str]] = None,
    only_with_values: bool = False,
) -> Optional[List[str]]:
    """Properties bound by `insert`, or `None` for every declared property."""

    if only_props is not None:
        return list(only_props)
    if only_with_values:
        return props_with_values(row)
    return None


def update_props(
    row: Any,
    *,
    only_props: Optional[Sequence[str]] = None,
    only_with_values: bool = False,
) -> Optional[List[str]]:
    """Properties bound by `update`; primary keys are always included."""

    requested = insert_props(row, only_props=only_props, only_with_values=only_with_values)
    if requested is None:
        return None
    return list(dict.fromkeys([*requested, *pk_names(model_type(row))]))


def delete_props(row: Any) -> List[str]:
    """Properties bound by `delete`: the primary keys only."""

    return pk_names(model_type(row))


async def insert(
    conn: Any,
    row: Any,
    *,
    only_props: Optional[Sequence[str]] = None,
    only_with_values: bool = False,
) -> Changes:
    """Insert one row and return its `Changes`."""

    if row is None:
        return NO_CHANGES
    cls = model_type(row)
    props = insert_props(row, only_props=only_props, only_with_values=only_with_values)
    stmt = conn.prepare(insert_sql(cls, conn.dialect, only_props=props))
    return await stmt.exec(to_db_row(row, only_props=props))


async def insert_all(
    conn: Any,
    rows: Sequence[Any],
    *,
    only_props: Optional[Sequence[str]] = None,
    only_with_values: bool = False,
) -> Changes:
    """Insert rows one after another, summing changes.

    `last_insert_rowid` is taken from the last row inserted. The first
    failure aborts the remaining rows.
    """

    if not rows:
        return NO_CHANGES

    total = 0
    last_id = 0
    if only_props is not None or only_with_values:
        for row in rows:
            last = await insert(
                conn, row, only_props=only_props, only_with_values=only_with_values
            )
            total += last.changes
            last_id = last.last_insert_rowid
        return Changes(changes=total, last_insert_rowid=last_id)

    cls = model_type(rows[0])
    stmt = conn.prepare(insert_sql(cls, conn.dialect))
    for row in rows:
        last = await stmt.exec(to_db_row(row))
        total += last.changes
        last_id = last.last_insert_rowid
    return Changes(changes=total, last_insert_rowid=last_id)


async def update(
    conn: Any,
    row: Any,
    *,
    only_props: Optional[Sequence[str]] = None,
    only_with_values: bool = False,
) -> Changes:
    """Update one row identified by its primary key."""

    if row is None:
        return NO_CHANGES
    cls = model_type(row)
    props = update_props(row, only_props=only_props, only_with_values=only_with_values)
    stmt = conn.prepare(update_sql(cls, conn.dialect, only_props=props))
    return await stmt.exec(to_db_row(row, only_props=props))


async def delete(conn: Any, row: Any) -> Changes:
    """Delete one row identified by its primary key."""

    if row is None:
        return NO_CHANGES
    cls = model_type(row)
    stmt = conn.prepare(delete_sql(cls, conn.dialect))
    return await stmt.exec(to_db_row(row, only_props=delete_props(row)))

