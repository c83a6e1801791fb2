"""
SQL literal escaping and the value transformer.

``escape`` turns any Python value into MySQL literal text using PyMySQL's
converters. ``transform_values`` applies the connection's transform table
first, so sentinel values (None, '', 'NOW()', ...) can be mapped to raw SQL.
"""

from collections.abc import Mapping
from typing import Any

from pymysql.converters import escape_item

from mysqlkit.core.errors import InvalidArgumentError

DEFAULT_CHARSET = "utf8mb4"


def escape_identifier(name: str) -> str:
    """Backtick-quote a table or column name. Embedded backticks are doubled."""
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError(f"identifier must be a non-empty string, got {name!r}")
    return "`" + name.replace("`", "``") + "`"


def escape(value: Any, *, charset: str = DEFAULT_CHARSET) -> str:
    """
    Generic literal escaping.

    * ``None`` -> ``NULL``; ``bool`` -> ``1`` / ``0``; numbers unquoted.
    * ``str`` -> quoted with backslash escapes.
    * ``date`` / ``datetime`` / ``time`` -> quoted ISO-like text.
    * ``list`` / ``tuple`` -> ``(a,b,c)``.
    * ``bytes`` -> PyMySQL's ``_binary`` literal.
    * ``Mapping`` -> backticked ``key = value`` pairs joined by ``, ``.
    """
    if isinstance(value, Mapping):
        return ", ".join(
            f"{escape_identifier(str(k))} = {escape(v, charset=charset)}"
            for k, v in value.items()
        )
    return escape_item(value, charset)


def _lookup(value: Any, transforms: Mapping[Any, Any]) -> tuple[bool, Any]:
    """Find a transform for *value*: None matches a None key, str matches a str key."""
    if value is None or isinstance(value, str):
        if value in transforms:
            return True, transforms[value]
    return False, None


def transform_value(
    value: Any,
    transforms: Mapping[Any, Any],
    values: Mapping[str, Any] | None = None,
    *,
    charset: str = DEFAULT_CHARSET,
) -> str:
    """Literal text for one value (transform table first, then ``escape``)."""
    found, transform = _lookup(value, transforms)
    if not found:
        return escape(value, charset=charset)
    if callable(transform):
        return str(transform(value, values if values is not None else {}))
    return str(transform)


def transform_values(
    values: Mapping[str, Any],
    transforms: Mapping[Any, Any] | None = None,
    *,
    charset: str = DEFAULT_CHARSET,
) -> dict[str, str]:
    """Map column -> literal SQL text for every entry of *values*."""
    _transforms = transforms or {}
    return {
        key: transform_value(raw, _transforms, values, charset=charset)
        for key, raw in values.items()
    }
