"""mini_mysql: async MySQL adapter with named/positional parameter binding."""

__version__ = "0.1.0"

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .ports import AsyncPoolDatabase, Dialect, MySQLDialect, PoolConfig, connect

__all__ = [
    *_core_all,
    "AsyncPoolDatabase",
    "Dialect",
    "MySQLDialect",
    "PoolConfig",
    "connect",
]
