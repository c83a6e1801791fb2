"""
Named-parameter formatting.

Turns ``SELECT * FROM user WHERE user_id = :user_id`` with ``{"user_id": 1}``
into ``SELECT * FROM user WHERE user_id = 1``. Placeholders without a value
are left as they are, so a template can be bound in several passes.
"""

import re
from collections.abc import Mapping
from typing import Any

from mysqlkit.engines.sql.literals import DEFAULT_CHARSET, escape

_PLACEHOLDER = re.compile(r":(\w+)")


def format_query(
    template: str,
    values: Mapping[str, Any] | None = None,
    *,
    charset: str = DEFAULT_CHARSET,
) -> str:
    """Replace bound ``:name`` placeholders with escaped literals and trim."""
    if not values:
        return template

    def _replace(m: re.Match[str]) -> str:
        key = m.group(1)
        if key in values:
            return escape(values[key], charset=charset)
        return m.group(0)

    return _PLACEHOLDER.sub(_replace, template).strip()


def parse_parameters(template: str) -> list[str]:
    """Placeholder names used in *template*, sorted and de-duplicated."""
    return sorted({m.group(1) for m in _PLACEHOLDER.finditer(template)})
