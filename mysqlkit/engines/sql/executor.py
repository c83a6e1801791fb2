"""
Execute final SQL through a driver and normalize the result shape.

- SELECT: ``{"rows": [...]}``
- anything else: ``{"affectedRows", "insertId", "changedRows", "fieldCount", "sql"}``
"""

import logging
import re
from typing import Any

from mysqlkit.core.errors import QueryError

_log = logging.getLogger(__name__)

SUMMARY_DEFAULTS: dict[str, int] = {
    "affectedRows": 0,
    "insertId": 0,
    "changedRows": 0,
    "fieldCount": 0,
}


def is_select(sql: str) -> bool:
    """True if the first word is SELECT (case-insensitive, leading space/; ignored)."""
    s = re.sub(r"^[\s;]+", "", sql)
    return re.match(r"select\b", s, re.IGNORECASE) is not None


def execute_sql(driver: Any, sql: str) -> Any:
    """
    Run final SQL text on *driver* and return its raw results.

    Returns the row list for SELECT statements (and for SHOW, DESCRIBE, WITH ...
    when the driver returned rows) and the summary dict otherwise.
    Driver failures are logged and re-raised as QueryError carrying the SQL.
    """
    try:
        result = driver.run(sql)
    except Exception as e:
        _log.error("SQL execution failed: %s. SQL: %s", e, sql, exc_info=True)
        raise QueryError(e, sql) from e
    if is_select(sql) or result.rows:
        return list(result.rows)
    return result.summary()


def normalize_result(sql: str, results: Any) -> dict[str, Any]:
    """Shape *results* (after on-results middleware) for the caller."""
    if is_select(sql) or isinstance(results, list):
        return {"rows": results}
    out: dict[str, Any] = dict(SUMMARY_DEFAULTS)
    if isinstance(results, dict):
        out.update(results)
    out["sql"] = sql
    return out
