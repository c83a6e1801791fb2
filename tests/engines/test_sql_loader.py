"""Unit tests for engines.sql.loader."""

import pytest

from mysqlkit.core.errors import SqlFileNotFoundError
from mysqlkit.engines.sql.loader import read_sql_file, resolve_sql_path


def test_resolve_appends_sql_suffix(tmp_path) -> None:
    assert resolve_sql_path(tmp_path, "users") == (tmp_path / "users.sql").resolve()


def test_resolve_keeps_existing_suffix(tmp_path) -> None:
    assert resolve_sql_path(tmp_path, "users.sql") == (tmp_path / "users.sql").resolve()
    assert resolve_sql_path(tmp_path, "users.txt") == (tmp_path / "users.txt").resolve()


def test_resolve_subdirectory(tmp_path) -> None:
    assert resolve_sql_path(tmp_path, "reports/daily") == (tmp_path / "reports" / "daily.sql").resolve()


def test_read_trims(tmp_path) -> None:
    (tmp_path / "users.sql").write_text("\n  SELECT * FROM users WHERE id = :id;\n\n", encoding="utf-8")
    assert read_sql_file(tmp_path, "users") == "SELECT * FROM users WHERE id = :id;"


def test_missing_file_names_resolved_path(tmp_path) -> None:
    expected = str((tmp_path / "missing.sql").resolve())
    with pytest.raises(SqlFileNotFoundError) as exc:
        read_sql_file(tmp_path, "missing")
    assert exc.value.path == expected
    assert str(exc.value) == f"Cannot find: {expected}"
    assert isinstance(exc.value, FileNotFoundError)
