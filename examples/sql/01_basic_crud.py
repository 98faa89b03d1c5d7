"""Basic async CRUD example against a running MySQL server."""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_mysql").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pymysql

from mini_mysql import PoolConfig, SqlFragment, connect


@dataclass
class User:
    # Auto primary key: read it back from `Changes.last_insert_rowid`.
    id: Optional[int] = field(default=None, metadata={"pk": True, "auto": True})
    email: str = field(default="", metadata={"type": "VARCHAR(255)", "unique": True})
    age: Optional[int] = None


async def main() -> None:
    # 1) Pool settings come from MINI_MYSQL_HOST, MINI_MYSQL_USER, ...
    config = PoolConfig.from_env()
    try:
        conn = await connect(config)
    except pymysql.err.OperationalError as exc:
        print("MySQL example skipped:", exc)
        return

    async with conn:
        # 2) Create table from dataclass metadata.
        await conn.drop_table(User)
        await conn.create_table(User)

        # 3) Insert rows.
        alice = await conn.insert(User(email="alice@example.com", age=25))
        print("Inserted alice:", alice)
        batch = await conn.insert_all(
            [User(email="bob@example.com", age=30), User(email="carol@example.com")]
        )
        print("Inserted batch:", batch)

        # 4) Fetch with named parameters, materialized into `User`.
        by_email = SqlFragment(
            "SELECT * FROM `user` WHERE email = $email",
            {"email": "bob@example.com"},
            into=User,
        )
        bob = await conn.one(by_email)
        print("Fetched:", bob)

        # 5) Update only one column; the primary key is bound automatically.
        bob.age = 31
        print("Updated:", await conn.update(bob, only_props=["age"]))

        # 6) Scalar helpers.
        print("Emails:", await conn.column("SELECT email FROM `user` ORDER BY id"))
        print("Count:", await conn.value("SELECT COUNT(*) FROM `user`"))

        # 7) Delete by primary key.
        print("Deleted:", await conn.delete(User(id=alice.last_insert_rowid)))
        print("Tables:", await conn.list_tables())


if __name__ == "__main__":
    asyncio.run(main())
