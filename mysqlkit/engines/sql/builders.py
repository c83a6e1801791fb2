"""
INSERT / UPDATE / DELETE statement builders.

UPDATE and DELETE always need a filter. Pass a mapping or a raw WHERE string,
or ``ALL_ROWS`` to touch every row on purpose.
"""

from collections.abc import Mapping
from typing import Any

from mysqlkit.core.errors import InvalidArgumentError
from mysqlkit.engines.sql.literals import (
    DEFAULT_CHARSET,
    escape,
    escape_identifier,
    transform_values,
)


class _AllRows:
    """Marker for an unfiltered UPDATE/DELETE."""

    _instance: "_AllRows | None" = None

    def __new__(cls) -> "_AllRows":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ALL_ROWS"


ALL_ROWS = _AllRows()

Where = Mapping[str, Any] | str | _AllRows


def build_where(where: Where | None, *, charset: str = DEFAULT_CHARSET) -> str:
    """
    Turn ``{"user_id": 1, "age": 30}`` into ``WHERE `user_id` = 1 AND `age` = 30``.

    Strings are returned unchanged (the caller owns their safety). Values are
    escaped generically; the transform table is not applied here.
    """
    if where is ALL_ROWS:
        return ""
    if isinstance(where, str):
        if not where.strip():
            raise InvalidArgumentError(
                "where is required; pass ALL_ROWS to affect every row"
            )
        return where
    if where is None:
        raise InvalidArgumentError(
            "where is required; pass ALL_ROWS to affect every row"
        )
    if not isinstance(where, Mapping) or not where:
        raise InvalidArgumentError(
            f"where must be a non-empty mapping, a string or ALL_ROWS, got {where!r}"
        )
    parts = [
        f"{escape_identifier(key)} = {escape(value, charset=charset)}"
        for key, value in where.items()
    ]
    return "WHERE " + " AND ".join(parts)


def build_assignments(
    values: Mapping[str, Any],
    transforms: Mapping[Any, Any] | None = None,
    *,
    charset: str = DEFAULT_CHARSET,
) -> str:
    """Column assignments for SET, e.g. ``{"first_name": "Brad"}`` -> first_name = 'Brad'."""
    if not isinstance(values, Mapping) or not values:
        raise InvalidArgumentError("values must be a non-empty mapping of column -> value")
    literals = transform_values(values, transforms, charset=charset)
    return ",".join(f"{escape_identifier(key)} = {lit}" for key, lit in literals.items())


def build_insert(
    table: str,
    values: Mapping[str, Any],
    transforms: Mapping[Any, Any] | None = None,
    *,
    charset: str = DEFAULT_CHARSET,
) -> str:
    assignments = build_assignments(values, transforms, charset=charset)
    return f"INSERT INTO {escape_identifier(table)} SET {assignments}"


def build_update(
    table: str,
    values: Mapping[str, Any],
    where: Where | None,
    transforms: Mapping[Any, Any] | None = None,
    *,
    charset: str = DEFAULT_CHARSET,
) -> str:
    assignments = build_assignments(values, transforms, charset=charset)
    clause = build_where(where, charset=charset)
    return f"UPDATE {escape_identifier(table)} SET {assignments} {clause}".strip()


def build_delete(table: str, where: Where | None, *, charset: str = DEFAULT_CHARSET) -> str:
    clause = build_where(where, charset=charset)
    return f"DELETE FROM {escape_identifier(table)} {clause}".strip()
