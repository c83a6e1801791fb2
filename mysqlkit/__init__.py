"""
mysqlkit: templated SQL, statement builders, SQL files and middleware on top of PyMySQL.
"""

from mysqlkit.client import MySqlClient
from mysqlkit.core.config import ConnectionSettings, default_transforms
from mysqlkit.core.connect import DriverResult, MySQLDriver
from mysqlkit.core.errors import (
    DriverError,
    InvalidArgumentError,
    MySqlKitError,
    QueryError,
    SqlFileNotFoundError,
)
from mysqlkit.engines.sql import (
    ALL_ROWS,
    Hook,
    QueryRequest,
    QueryResponse,
    build_delete,
    build_insert,
    build_update,
    build_where,
    escape,
    format_query,
)

__all__ = [
    "ALL_ROWS",
    "ConnectionSettings",
    "DriverError",
    "DriverResult",
    "Hook",
    "InvalidArgumentError",
    "MySQLDriver",
    "MySqlClient",
    "MySqlKitError",
    "QueryError",
    "QueryRequest",
    "QueryResponse",
    "SqlFileNotFoundError",
    "build_delete",
    "build_insert",
    "build_update",
    "build_where",
    "default_transforms",
    "escape",
    "format_query",
]
