from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, patch

import aiomysql

from mini_mysql import AsyncPoolDatabase, Connection, MySQLDialect, PoolConfig, connect


class _FakeCursor:
    def __init__(self, conn: "_FakeConn", cursor_cls):  # noqa: ANN001
        self._conn = conn
        self.cursor_cls = cursor_cls
        self.description = None
        self.rowcount = -1
        self.lastrowid = None

    async def __aenter__(self) -> "_FakeCursor":
        return self

    async def __aexit__(self, *exc) -> None:  # noqa: ANN002
        self._conn.cursors_closed += 1

    async def execute(self, sql, args=None):  # noqa: ANN001,ANN201
        self._conn.executed.append((sql, args, self.cursor_cls))
        result = self._conn.results.pop(0)
        self.description = result.get("description")
        self.rowcount = result.get("rowcount", -1)
        self.lastrowid = result.get("lastrowid")
        self._rows = result.get("rows", [])
        return self.rowcount

    async def fetchall(self):  # noqa: ANN201
        return tuple(self._rows)


class _FakeConn:
    def __init__(self, results):  # noqa: ANN001
        self.results = list(results)
        self.executed = []
        self.cursors_closed = 0

    def cursor(self, cursor_cls):  # noqa: ANN001,ANN201
        return _FakeCursor(self, cursor_cls)


class _Acquire:
    def __init__(self, pool: "_FakePool"):
        self._pool = pool

    async def __aenter__(self) -> _FakeConn:
        self._pool.acquired += 1
        return self._pool.conn

    async def __aexit__(self, *exc) -> None:  # noqa: ANN002
        self._pool.released += 1


class _FakePool:
    def __init__(self, results=()):  # noqa: ANN001
        self.conn = _FakeConn(results)
        self.acquired = 0
        self.released = 0
        self.closed = False
        self.waited = False

    def acquire(self) -> _Acquire:
        return _Acquire(self)

    def close(self) -> None:
        self.closed = True

    async def wait_closed(self) -> None:
        self.waited = True


class AsyncPoolDatabaseTests(unittest.IsolatedAsyncioTestCase):
    async def test_select_uses_dict_cursor_and_collects_rows(self) -> None:
        pool = _FakePool(
            [
                {
                    "description": (("id",), ("name",)),
                    "rows": [{"id": 1, "name": "Jane"}],
                    "rowcount": 1,
                }
            ]
        )
        db = AsyncPoolDatabase(pool)

        result = await db.query("SELECT id, name FROM contact WHERE id = %s", [1])

        self.assertEqual(result.rows, [{"id": 1, "name": "Jane"}])
        self.assertEqual(result.fields, ("id", "name"))
        self.assertEqual(
            pool.conn.executed,
            [("SELECT id, name FROM contact WHERE id = %s", (1,), aiomysql.DictCursor)],
        )
        self.assertEqual((pool.acquired, pool.released), (1, 1))
        self.assertEqual(pool.conn.cursors_closed, 1)
        self.assertIsInstance(db.dialect, MySQLDialect)

    async def test_array_rows_use_plain_cursor(self) -> None:
        pool = _FakePool([{"description": (("id",),), "rows": [(1,), (2,)]}])
        result = await AsyncPoolDatabase(pool).query("SELECT id FROM t", rows_as_array=True)

        self.assertEqual(result.rows, [(1,), (2,)])
        self.assertIs(pool.conn.executed[0][2], aiomysql.Cursor)

    async def test_no_params_executes_without_interpolation(self) -> None:
        pool = _FakePool([{"rowcount": 0}])
        await AsyncPoolDatabase(pool).query("CREATE TABLE t (pct TEXT DEFAULT '100%')")

        self.assertIsNone(pool.conn.executed[0][1])

    async def test_write_reports_rowcount_and_lastrowid(self) -> None:
        pool = _FakePool([{"rowcount": 2, "lastrowid": 11}, {"rowcount": -1}])
        db = AsyncPoolDatabase(pool)

        result = await db.query("INSERT INTO t (a) VALUES (%s), (%s)", (1, 2))
        self.assertEqual((result.rows, result.affected_rows, result.insert_id), ([], 2, 11))

        result = await db.query("DO 1")
        self.assertEqual((result.affected_rows, result.insert_id), (0, 0))

    async def test_close_waits_for_pool(self) -> None:
        pool = _FakePool()
        await AsyncPoolDatabase(pool).close()
        self.assertTrue(pool.closed)
        self.assertTrue(pool.waited)

    def test_close_sync_does_not_wait(self) -> None:
        pool = _FakePool()
        AsyncPoolDatabase(pool).close_sync()
        self.assertTrue(pool.closed)
        self.assertFalse(pool.waited)


class ConnectTests(unittest.IsolatedAsyncioTestCase):
    async def test_connect_wraps_existing_pool(self) -> None:
        pool = _FakePool([{"description": (("n",),), "rows": [(1,)]}])

        conn = await connect(pool)

        self.assertIsInstance(conn, Connection)
        self.assertIs(conn.db.pool, pool)
        self.assertEqual(await conn.value("SELECT 1 AS n"), 1)
        await conn.close()
        self.assertTrue(pool.waited)

    async def test_connect_creates_pool_from_settings(self) -> None:
        pool = _FakePool()
        create_pool = AsyncMock(return_value=pool)
        with patch("mini_mysql.ports.db_api.connect.aiomysql.create_pool", create_pool):
            conn = await connect({"host": "db", "database": "shop", "maxsize": 3})
            await connect(PoolConfig(host="other"))
            await connect("mysql://app@db/shop")

        self.assertIs(conn.db.pool, pool)
        first = create_pool.await_args_list[0].kwargs
        self.assertEqual((first["host"], first["db"], first["maxsize"]), ("db", "shop", 3))
        self.assertEqual(create_pool.await_args_list[1].kwargs["host"], "other")
        self.assertEqual(create_pool.await_args_list[2].kwargs["user"], "app")


if __name__ == "__main__":
    unittest.main()
