"""
PyMySQL driver collaborator.

One lazily opened connection per MySQLDriver. ``run`` executes final SQL text
(no parameter binding; the SQL is already formatted) and returns a
DriverResult with rows for result-set statements and the OK-packet summary
otherwise.
"""

import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Any

import pymysql
import pymysql.cursors

from mysqlkit.core.config import ConnectionSettings
from mysqlkit.engines.sql.literals import escape

_log = logging.getLogger(__name__)

# "Rows matched: 1  Changed: 1  Warnings: 0" in the OK packet of an UPDATE
_CHANGED_ROWS = re.compile(r"changed:\s*(\d+)", re.IGNORECASE)


@dataclass
class DriverResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    affected_rows: int = 0
    insert_id: int = 0
    changed_rows: int = 0
    field_count: int = 0

    def summary(self) -> dict[str, int]:
        """Summary fields in the shape returned for non-SELECT statements."""
        return {
            "affectedRows": self.affected_rows,
            "insertId": self.insert_id,
            "changedRows": self.changed_rows,
            "fieldCount": self.field_count,
        }


def connect(settings: ConnectionSettings) -> Any:
    """Open a pymysql connection from settings (extra fields pass through)."""
    options = settings.driver_options()
    if not options.get("host"):
        raise ValueError("settings must provide host")
    return pymysql.connect(cursorclass=pymysql.cursors.DictCursor, **options)


def execute(conn: Any, sql: str) -> Any:
    """Execute SQL and return the cursor. Caller reads rows or the summary from it."""
    cur = conn.cursor()
    cur.execute(sql)
    return cur


def cursor_to_dicts(cursor: Any) -> list[dict[str, Any]]:
    """Rows as a list of dicts. Works for both DictCursor and tuple cursors."""
    desc = cursor.description
    if not desc:
        return []
    rows = cursor.fetchall()
    names = [d[0] for d in desc]
    return [row if isinstance(row, dict) else dict(zip(names, row, strict=True)) for row in rows]


def _changed_rows(result: Any) -> int:
    message = getattr(result, "message", None)
    if not message:
        return 0
    if isinstance(message, bytes):
        message = message.decode("utf-8", "replace")
    m = _CHANGED_ROWS.search(message)
    return int(m.group(1)) if m else 0


def cursor_to_result(cursor: Any) -> DriverResult:
    """Build a DriverResult from an executed cursor."""
    result = getattr(cursor, "_result", None)
    field_count = getattr(result, "field_count", 0) or 0
    if cursor.description:
        return DriverResult(rows=cursor_to_dicts(cursor), field_count=field_count)
    return DriverResult(
        affected_rows=cursor.rowcount if cursor.rowcount and cursor.rowcount > 0 else 0,
        insert_id=cursor.lastrowid or 0,
        changed_rows=_changed_rows(result),
        field_count=field_count,
    )


class MySQLDriver:
    """Single-connection pymysql driver; calls are serialized with a lock."""

    def __init__(self, settings: ConnectionSettings) -> None:
        self._settings = settings
        self._conn: Any = None
        self._lock = threading.Lock()

    @property
    def connection(self) -> Any:
        if self._conn is None:
            self._conn = connect(self._settings)
        return self._conn

    def run(self, sql: str) -> DriverResult:
        """Execute final SQL text on the shared connection."""
        with self._lock:
            cur = execute(self.connection, sql)
            try:
                return cursor_to_result(cur)
            finally:
                try:
                    cur.close()
                except Exception as e:
                    _log.warning("cursor close failed: %s", e)

    def escape(self, value: Any) -> str:
        return escape(value, charset=self._settings.charset)

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            try:
                self._conn.close()
            except Exception as e:
                _log.warning("connection close failed: %s", e)
            finally:
                self._conn = None
