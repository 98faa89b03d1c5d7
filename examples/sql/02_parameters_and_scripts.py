"""Parameter styles, templates and multi-statement scripts."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_mysql").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pymysql

from mini_mysql import MissingParameterError, PoolConfig, SqlTemplate, connect

SCHEMA = """
DROP TABLE IF EXISTS note;
CREATE TABLE note (
  id INT AUTO_INCREMENT PRIMARY KEY,
  title VARCHAR(100) NOT NULL,
  done BOOLEAN NOT NULL DEFAULT 0
);
INSERT INTO note (title) VALUES ('write docs');
INSERT INTO note (title) VALUES ('100% coverage');
"""


async def main() -> None:
    try:
        conn = await connect(PoolConfig.from_env())
    except pymysql.err.OperationalError as exc:
        print("MySQL example skipped:", exc)
        return

    async with conn:
        # 1) A script without parameters runs one statement at a time.
        await conn.run(SCHEMA)

        # 2) Named `$tokens` bind from a mapping; literal `%` is kept.
        titles = await conn.column(
            "SELECT title FROM note WHERE title LIKE '%cover%' AND id > $min_id",
            {"min_id": 0},
        )
        print("Named:", titles)

        # 3) `%s` placeholders bind from a sequence or a single value.
        print("Positional:", await conn.one("SELECT * FROM note WHERE id = %s", [1]))
        print("Scalar:", await conn.array("SELECT id, title FROM note WHERE id = %s", 2))

        # 4) Templates interleave literal SQL and values.
        template = SqlTemplate.of("UPDATE note SET done = ", True, " WHERE id = ", 1)
        print("Template:", await conn.exec(template))

        # 5) One prepared statement, many parameter sets.
        stmt = conn.prepare("SELECT title FROM note WHERE id = $id", {"id": 1})
        print("Reused:", await stmt.value(), await stmt.value({"id": 2}))

        # 6) Missing names fail before anything reaches the server.
        try:
            await stmt.value({"other": 1})
        except MissingParameterError as exc:
            print("Expected error:", exc)

        await conn.run("DROP TABLE note;")


if __name__ == "__main__":
    asyncio.run(main())
