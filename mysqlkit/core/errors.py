"""Exceptions raised by mysqlkit."""

from typing import Any


class MySqlKitError(Exception):
    """Base class for mysqlkit errors."""

    pass


class QueryError(MySqlKitError):
    """The driver failed to execute a statement.

    ``error`` is the original driver exception; ``sql`` is the final SQL text
    that was sent.
    """

    def __init__(self, error: Any, sql: str) -> None:
        self.error = error
        self.sql = sql
        super().__init__(f"SQL execution failed: {error}. SQL: {sql}")


DriverError = QueryError


class SqlFileNotFoundError(MySqlKitError, FileNotFoundError):
    """A SQL file could not be read from the configured sql_path."""

    def __init__(self, path: Any) -> None:
        self.path = str(path)
        super().__init__(f"Cannot find: {self.path}")

    def __str__(self) -> str:
        return f"Cannot find: {self.path}"


class InvalidArgumentError(MySqlKitError, ValueError):
    """Raised for arguments that would produce malformed or unintended SQL."""

    pass
