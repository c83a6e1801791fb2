"""
MySqlClient: templated SQL over a single PyMySQL connection.

query(sql, values) runs:
before-query middleware -> :name formatting -> driver (worker thread)
-> on-results middleware -> result shape ({"rows": ...} or summary dict).
"""

import asyncio
import logging
from typing import Any

from mysqlkit.core.config import ConnectionSettings
from mysqlkit.core.connect import MySQLDriver
from mysqlkit.engines.sql import (
    Hook,
    MiddlewarePipeline,
    QueryRequest,
    QueryResponse,
    build_delete,
    build_insert,
    build_update,
    execute_sql,
    format_query,
    normalize_result,
    parse_parameters,
    read_sql_file,
)
from mysqlkit.engines.sql.builders import Where

_log = logging.getLogger(__name__)


class MySqlClient:
    """
    MySqlClient(settings=None, *, driver=None, **options)

    - settings: ConnectionSettings; built from **options when omitted.
    - driver: any object with run(sql) -> DriverResult and close(); defaults to
      MySQLDriver(settings), which connects on first use.
    """

    def __init__(
        self,
        settings: ConnectionSettings | None = None,
        *,
        driver: Any = None,
        **options: Any,
    ) -> None:
        if settings is not None and options:
            raise ValueError("pass either settings or keyword options, not both")
        self.settings = settings if settings is not None else ConnectionSettings(**options)
        self.driver = driver if driver is not None else MySQLDriver(self.settings)
        self.middleware = MiddlewarePipeline()

    async def __aenter__(self) -> "MySqlClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        close = getattr(self.driver, "close", None)
        if callable(close):
            await asyncio.to_thread(close)

    def use(self, hook: Hook | str, fn: Any) -> None:
        """Register middleware for ``before_query`` or ``on_results``."""
        self.middleware.register(hook, fn)

    async def query(self, sql: str, values: dict[str, Any] | None = None) -> dict[str, Any]:
        """Format *sql* with *values*, run it and return the normalized result."""
        request = self.middleware.apply(
            Hook.BEFORE_QUERY, QueryRequest(sql=sql, values=dict(values or {}))
        )
        final_sql = format_query(
            request.sql, request.values, charset=self.settings.charset
        ).strip()
        _log.debug("Rendered SQL: %s", final_sql)
        if _log.isEnabledFor(logging.DEBUG):
            unbound = parse_parameters(final_sql)
            if unbound:
                _log.debug("Unbound placeholders left in SQL: %s", unbound)

        results = await asyncio.to_thread(execute_sql, self.driver, final_sql)

        response = self.middleware.apply(
            Hook.ON_RESULTS, QueryResponse(sql=request.sql, results=results)
        )
        return normalize_result(final_sql, response.results)

    async def select(self, sql: str, values: dict[str, Any] | None = None) -> list[Any]:
        result = await self.query(sql, values)
        return result.get("rows", [])

    async def query_file(
        self, filename: str, values: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run the SQL in ``<sql_path>/<filename>.sql`` with *values*."""
        sql = await asyncio.to_thread(read_sql_file, self.settings.sql_path, filename)
        return await self.query(sql, values)

    async def select_file(
        self, filename: str, values: dict[str, Any] | None = None
    ) -> list[Any]:
        result = await self.query_file(filename, values)
        return result.get("rows", [])

    async def insert(self, table: str, values: dict[str, Any]) -> dict[str, Any]:
        sql = build_insert(
            table, values, self.settings.transforms, charset=self.settings.charset
        )
        return await self.query(sql)

    async def update(
        self, table: str, values: dict[str, Any], where: Where | None
    ) -> dict[str, Any]:
        """UPDATE *table*. *where* is a mapping, a raw WHERE string or ALL_ROWS."""
        sql = build_update(
            table, values, where, self.settings.transforms, charset=self.settings.charset
        )
        return await self.query(sql)

    async def delete(self, table: str, where: Where | None) -> dict[str, Any]:
        """DELETE FROM *table*. *where* is a mapping, a raw WHERE string or ALL_ROWS."""
        sql = build_delete(table, where, charset=self.settings.charset)
        return await self.query(sql)
