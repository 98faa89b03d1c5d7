"""Public port exports for concrete adapter implementations."""

from .db_api import AsyncPoolDatabase, Dialect, MySQLDialect, PoolConfig, connect

__all__ = [
    "AsyncPoolDatabase",
    "Dialect",
    "MySQLDialect",
    "PoolConfig",
    "connect",
]
