"""Split multi-statement DDL scripts into individually executable statements."""

from __future__ import annotations

import re
from typing import List

_STATEMENT_END = re.compile(r";(?:\r\n|\n)")


def split_sql_statements(sql: str) -> List[str]:
    """Split `sql` on a semicolon directly followed by a line break.

    Fragments are stripped and empty ones dropped. A semicolon that ends a
    line inside a string literal or comment is split as well.
    """

    return [stmt.strip() for stmt in _STATEMENT_END.split(sql) if stmt.strip()]
