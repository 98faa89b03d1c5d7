"""aiomysql adapter, dialect and pool configuration exports."""

from .async_database import AsyncPoolDatabase
from .config import PoolConfig
from .connect import connect, create_pool
from .dialects import Dialect, MySQLDialect

__all__ = [
    "AsyncPoolDatabase",
    "Dialect",
    "MySQLDialect",
    "PoolConfig",
    "connect",
    "create_pool",
]
