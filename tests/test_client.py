"""Tests for MySqlClient with a fake driver."""

import asyncio
from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from mysqlkit import (
    ALL_ROWS,
    DriverResult,
    InvalidArgumentError,
    MySqlClient,
    QueryError,
    SqlFileNotFoundError,
)
from mysqlkit.core.config import ConnectionSettings


def _run(coro) -> object:
    return asyncio.run(coro)


def _client(result: DriverResult | None = None, **options) -> tuple[MySqlClient, MagicMock]:
    driver = MagicMock()
    driver.run.return_value = result if result is not None else DriverResult()
    return MySqlClient(driver=driver, **options), driver


def _sent_sql(driver: MagicMock) -> str:
    return driver.run.call_args.args[0]


# --- query ---


def test_select_returns_rows_shape() -> None:
    client, driver = _client(DriverResult(rows=[{"1": 1}], field_count=1))

    out = _run(client.query("SELECT 1"))

    assert out == {"rows": [{"1": 1}]}
    assert _sent_sql(driver) == "SELECT 1"


def test_update_returns_summary_shape() -> None:
    client, driver = _client(DriverResult(affected_rows=4, changed_rows=3))

    out = _run(client.query("UPDATE t SET x=1"))

    assert out == {
        "affectedRows": 4,
        "insertId": 0,
        "changedRows": 3,
        "fieldCount": 0,
        "sql": "UPDATE t SET x=1",
    }


def test_query_formats_named_parameters() -> None:
    client, driver = _client()

    _run(client.query("  SELECT * FROM user WHERE id = :id AND name = :name  ", {"id": 1, "name": "a"}))

    assert _sent_sql(driver) == "SELECT * FROM user WHERE id = 1 AND name = 'a'"


def test_query_leaves_unbound_placeholders() -> None:
    client, driver = _client()

    _run(client.query("SELECT :a, :b", {"a": 1}))

    assert _sent_sql(driver) == "SELECT 1, :b"


def test_query_driver_failure_raises_query_error() -> None:
    client, driver = _client()
    driver.run.side_effect = RuntimeError("Unknown column 'y'")

    with pytest.raises(QueryError) as exc:
        _run(client.query("UPDATE t SET y = :y", {"y": 2}))

    assert exc.value.sql == "UPDATE t SET y = 2"
    assert isinstance(exc.value.error, RuntimeError)


def test_select_unwraps_rows() -> None:
    client, _ = _client(DriverResult(rows=[{"id": 1}, {"id": 2}]))
    assert _run(client.select("SELECT id FROM t")) == [{"id": 1}, {"id": 2}]


def test_select_show_tables_returns_rows() -> None:
    client, _ = _client(DriverResult(rows=[{"Tables_in_db": "users"}]))

    assert _run(client.query("SHOW TABLES")) == {"rows": [{"Tables_in_db": "users"}]}
    assert _run(client.select("SHOW TABLES")) == [{"Tables_in_db": "users"}]


def test_select_on_statement_without_rows_returns_empty_list() -> None:
    client, _ = _client(DriverResult(affected_rows=1))

    assert _run(client.select("DO SLEEP(0)")) == []


def test_select_file_show_statement(tmp_path) -> None:
    (tmp_path / "columns.sql").write_text("DESCRIBE users", encoding="utf-8")
    client, _ = _client(DriverResult(rows=[{"Field": "id"}]), sql_path=str(tmp_path))

    assert _run(client.select_file("columns")) == [{"Field": "id"}]


# --- middleware ---


def test_no_middleware_matches_direct_format_and_execute() -> None:
    plain, plain_driver = _client(DriverResult(rows=[{"n": 1}]))
    out = _run(plain.query("SELECT :n AS n", {"n": 1}))
    assert out == {"rows": [{"n": 1}]}
    assert _sent_sql(plain_driver) == "SELECT 1 AS n"


def test_before_query_middleware_rewrites_sql_and_values() -> None:
    client, driver = _client()
    seen = []

    def scope_to_tenant(req):
        seen.append(req.sql)
        return replace(req, sql=req.sql + " AND tenant_id = :tenant", values={**req.values, "tenant": 9})

    client.use("before-query", scope_to_tenant)
    _run(client.query("SELECT * FROM t WHERE id = :id", {"id": 1}))

    assert seen == ["SELECT * FROM t WHERE id = :id"]
    assert _sent_sql(driver) == "SELECT * FROM t WHERE id = 1 AND tenant_id = 9"


def test_on_results_middleware_runs_in_order() -> None:
    client, _ = _client(DriverResult(rows=[{"n": 1}, {"n": 2}]))
    client.use("on_results", lambda r: replace(r, results=[row["n"] for row in r.results]))
    client.use("ON_RESULTS", lambda r: replace(r, results=[n * 10 for n in r.results]))

    assert _run(client.select("SELECT n FROM t")) == [10, 20]


def test_on_results_sees_unformatted_sql() -> None:
    client, _ = _client(DriverResult(rows=[]))
    seen = []
    client.use("on_results", lambda r: seen.append(r.sql))

    _run(client.query("SELECT :x", {"x": 1}))

    assert seen == ["SELECT :x"]


def test_use_rejects_invalid_registration() -> None:
    client, _ = _client()
    with pytest.raises(InvalidArgumentError):
        client.use("before_query", None)
    with pytest.raises(InvalidArgumentError):
        client.use("after_everything", lambda r: r)


# --- builders ---


def test_insert() -> None:
    client, driver = _client(DriverResult(affected_rows=1, insert_id=12))

    out = _run(client.insert("user", {"name": "Brad", "created": "NOW()", "nickname": None}))

    sql = "INSERT INTO `user` SET `name` = 'Brad',`created` = NOW(),`nickname` = NULL"
    assert _sent_sql(driver) == sql
    assert out["insertId"] == 12
    assert out["sql"] == sql


def test_insert_uses_configured_transforms() -> None:
    client, driver = _client(transforms={"@today": lambda v, values: "CURDATE()"})

    _run(client.insert("t", {"day": "@today", "empty": ""}))

    assert _sent_sql(driver) == "INSERT INTO `t` SET `day` = CURDATE(),`empty` = ''"


def test_insert_empty_values() -> None:
    client, driver = _client()
    with pytest.raises(InvalidArgumentError):
        _run(client.insert("t", {}))
    driver.run.assert_not_called()


def test_update_with_where_mapping() -> None:
    client, driver = _client(DriverResult(affected_rows=1, changed_rows=1))

    _run(client.update("user", {"age": 31}, {"user_id": 1}))

    assert _sent_sql(driver) == "UPDATE `user` SET `age` = 31 WHERE `user_id` = 1"


def test_update_all_rows_requires_marker() -> None:
    client, driver = _client()
    with pytest.raises(InvalidArgumentError):
        _run(client.update("user", {"active": 0}, None))

    _run(client.update("user", {"active": 0}, ALL_ROWS))
    assert _sent_sql(driver) == "UPDATE `user` SET `active` = 0"


def test_delete_with_raw_where() -> None:
    client, driver = _client()

    _run(client.delete("session", "WHERE expires < NOW()"))

    assert _sent_sql(driver) == "DELETE FROM `session` WHERE expires < NOW()"


# --- files ---


def test_query_file_reads_sql_path(tmp_path) -> None:
    (tmp_path / "users.sql").write_text("SELECT * FROM users WHERE id = :id\n", encoding="utf-8")
    client, driver = _client(DriverResult(rows=[{"id": 3}]), sql_path=str(tmp_path))

    rows = _run(client.select_file("users", {"id": 3}))

    assert rows == [{"id": 3}]
    assert _sent_sql(driver) == "SELECT * FROM users WHERE id = 3"


def test_query_file_missing(tmp_path) -> None:
    client, driver = _client(sql_path=str(tmp_path))

    with pytest.raises(SqlFileNotFoundError) as exc:
        _run(client.query_file("users"))

    assert exc.value.path == str((tmp_path / "users.sql").resolve())
    driver.run.assert_not_called()


# --- lifecycle ---


def test_settings_or_options_not_both() -> None:
    with pytest.raises(ValueError):
        MySqlClient(ConnectionSettings(), host="x")


def test_async_context_manager_closes_driver() -> None:
    driver = MagicMock()

    async def run() -> None:
        async with MySqlClient(driver=driver):
            pass

    _run(run())
    driver.close.assert_called_once()


def test_concurrent_queries_are_independent() -> None:
    client, driver = _client(DriverResult(rows=[]))

    async def run() -> list:
        return await asyncio.gather(*(client.select("SELECT :i", {"i": i}) for i in range(5)))

    assert _run(run()) == [[], [], [], [], []]
    sent = sorted(call.args[0] for call in driver.run.call_args_list)
    assert sent == [f"SELECT {i}" for i in range(5)]
