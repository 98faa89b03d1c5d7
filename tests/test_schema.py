from __future__ import annotations

import unittest
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from mini_mysql import (
    DefaultValue,
    MySQLDialect,
    create_table_sql,
    delete_sql,
    drop_table_sql,
    insert_sql,
    to_db_row,
    update_sql,
)
from mini_mysql.core.models import auto_pk_field, pk_names, table_name


class Priority(Enum):
    LOW = 1
    HIGH = 2


@dataclass
class Ticket:
    id: Optional[int] = field(default=None, metadata={"pk": True, "auto": True})
    title: str = field(default="", metadata={"unique": True})
    body: Optional[str] = None
    priority: Priority = Priority.LOW
    tags: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(
        default_factory=datetime.now, metadata={"default_sql": DefaultValue.NOW}
    )


@dataclass
class Account:
    __table__ = "accounts"

    code: str = field(metadata={"pk": True})
    owner: UUID = field(metadata={"column": "owner_id"})
    balance: Decimal = field(metadata={"type": "MONEY"})
    active: bool = field(default=True, metadata={"default_sql": True})


@dataclass
class NoKey:
    name: str


class ModelReflectionTests(unittest.TestCase):
    def test_table_name_and_keys(self) -> None:
        self.assertEqual(table_name(Ticket), "ticket")
        self.assertEqual(table_name(Account), "accounts")
        self.assertEqual(pk_names(Account), ["code"])
        self.assertEqual(auto_pk_field(Ticket).name, "id")
        self.assertIsNone(auto_pk_field(Account))

    def test_non_dataclass_is_rejected(self) -> None:
        with self.assertRaises(TypeError):
            insert_sql(object, MySQLDialect())  # type: ignore[arg-type]


class DmlSqlTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dialect = MySQLDialect()

    def test_insert_sql(self) -> None:
        self.assertEqual(
            insert_sql(Account, self.dialect),
            "INSERT INTO `accounts` (`code`, `owner_id`, `balance`, `active`) "
            "VALUES ($code, $owner, $balance, $active)",
        )

    def test_insert_sql_only_props_dedupes(self) -> None:
        self.assertEqual(
            insert_sql(Ticket, self.dialect, only_props=["title", "title", "id"]),
            "INSERT INTO `ticket` (`title`, `id`) VALUES ($title, $id)",
        )

    def test_insert_sql_without_columns(self) -> None:
        self.assertEqual(
            insert_sql(Ticket, self.dialect, only_props=[]),
            "INSERT INTO `ticket` () VALUES ()",
        )

    def test_unknown_props_raise(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            insert_sql(Ticket, self.dialect, only_props=["nope"])
        self.assertIn("nope", str(ctx.exception))

    def test_update_sql_uses_column_names_and_property_tokens(self) -> None:
        self.assertEqual(
            update_sql(Account, self.dialect, only_props=["owner", "code"]),
            "UPDATE `accounts` SET `owner_id` = $owner WHERE `code` = $code",
        )

    def test_update_sql_needs_set_columns(self) -> None:
        with self.assertRaises(ValueError):
            update_sql(Account, self.dialect, only_props=["code"])

    def test_key_less_models_cannot_update_or_delete(self) -> None:
        with self.assertRaises(ValueError):
            update_sql(NoKey, self.dialect)
        with self.assertRaises(ValueError):
            delete_sql(NoKey, self.dialect)

    def test_delete_sql(self) -> None:
        self.assertEqual(
            delete_sql(Ticket, self.dialect),
            "DELETE FROM `ticket` WHERE `id` = $id",
        )


class DdlSqlTests(unittest.TestCase):
    def setUp(self) -> None:
        self.dialect = MySQLDialect()

    def test_create_table_with_auto_key(self) -> None:
        self.assertEqual(
            create_table_sql(Ticket, self.dialect),
            "CREATE TABLE `ticket` (\n"
            "  `id` INT AUTO_INCREMENT PRIMARY KEY,\n"
            "  `title` VARCHAR(255) NOT NULL UNIQUE,\n"
            "  `body` TEXT NULL,\n"
            "  `priority` VARCHAR(255) NOT NULL,\n"
            "  `tags` JSON NOT NULL,\n"
            "  `extra` JSON NOT NULL,\n"
            "  `created_at` DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP\n"
            ");",
        )

    def test_create_table_with_natural_key(self) -> None:
        self.assertEqual(
            create_table_sql(Account, self.dialect, if_not_exists=True),
            "CREATE TABLE IF NOT EXISTS `accounts` (\n"
            "  `code` VARCHAR(255) NOT NULL,\n"
            "  `owner_id` CHAR(36) NOT NULL,\n"
            "  `balance` DECIMAL(15,2) NOT NULL,\n"
            "  `active` BOOLEAN NOT NULL DEFAULT 1,\n"
            "  PRIMARY KEY (`code`)\n"
            ");",
        )

    def test_drop_table(self) -> None:
        self.assertEqual(drop_table_sql(Ticket, self.dialect), "DROP TABLE IF EXISTS `ticket`;")
        self.assertEqual(
            drop_table_sql(Ticket, self.dialect, if_exists=False), "DROP TABLE `ticket`;"
        )


class ToDbRowTests(unittest.TestCase):
    def test_serializes_enum_and_json_fields(self) -> None:
        ticket = Ticket(
            id=3,
            title="Broken",
            priority=Priority.HIGH,
            tags=["a", "b"],
            extra={"k": 1},
            created_at=datetime(2024, 1, 2, 3, 4, 5),
        )

        self.assertEqual(
            to_db_row(ticket),
            {
                "id": 3,
                "title": "Broken",
                "body": None,
                "priority": 2,
                "tags": '["a", "b"]',
                "extra": '{"k": 1}',
                "created_at": datetime(2024, 1, 2, 3, 4, 5),
            },
        )

    def test_only_props_keeps_requested_order(self) -> None:
        ticket = Ticket(id=3, title="Broken")
        self.assertEqual(to_db_row(ticket, only_props=["title", "id"]), {"title": "Broken", "id": 3})


if __name__ == "__main__":
    unittest.main()
