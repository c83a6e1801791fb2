"""Resolve and read SQL files from the configured sql_path."""

import logging
from pathlib import Path

from mysqlkit.core.errors import SqlFileNotFoundError

_log = logging.getLogger(__name__)

SQL_SUFFIX = ".sql"


def resolve_sql_path(sql_path: str | Path, filename: str | Path) -> Path:
    """``users`` -> ``<sql_path>/users.sql``; names with an extension are kept."""
    path = Path(sql_path) / filename
    if not path.suffix:
        path = path.with_name(path.name + SQL_SUFFIX)
    return path.resolve()


def read_sql_file(sql_path: str | Path, filename: str | Path) -> str:
    """Read a SQL file as trimmed UTF-8 text."""
    path = resolve_sql_path(sql_path, filename)
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        _log.warning("SQL file not readable: %s (%s)", path, e)
        raise SqlFileNotFoundError(path) from e
