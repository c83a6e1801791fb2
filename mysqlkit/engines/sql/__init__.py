"""
SQL helpers: literal escaping, :name formatting, statement builders,
middleware and SQL file loading.
"""

from mysqlkit.engines.sql.builders import (
    ALL_ROWS,
    build_delete,
    build_insert,
    build_update,
    build_where,
)
from mysqlkit.engines.sql.executor import execute_sql, is_select, normalize_result
from mysqlkit.engines.sql.formatter import format_query, parse_parameters
from mysqlkit.engines.sql.literals import escape, escape_identifier, transform_values
from mysqlkit.engines.sql.loader import read_sql_file, resolve_sql_path
from mysqlkit.engines.sql.middleware import (
    Hook,
    MiddlewarePipeline,
    QueryRequest,
    QueryResponse,
)

__all__ = [
    "ALL_ROWS",
    "Hook",
    "MiddlewarePipeline",
    "QueryRequest",
    "QueryResponse",
    "build_delete",
    "build_insert",
    "build_update",
    "build_where",
    "escape",
    "escape_identifier",
    "execute_sql",
    "format_query",
    "is_select",
    "normalize_result",
    "parse_parameters",
    "read_sql_file",
    "resolve_sql_path",
    "transform_values",
]
