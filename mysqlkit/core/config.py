"""
Connection settings for MySqlClient.

Values come from keyword arguments first, then ``MYSQL_*`` environment
variables, then the defaults below. ``sql_path`` and ``transforms`` are used
locally; every other field (including unknown extras) goes to pymysql.connect.
"""

from pathlib import Path
from typing import Any, Callable, Mapping

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TransformFn = Callable[[Any, Mapping[str, Any]], str]
Transforms = dict[str | None, str | TransformFn]

_LOCAL_FIELDS = {"sql_path", "transforms"}


def default_transforms() -> Transforms:
    """Fresh copy of the default transform table (None and '' become NULL)."""
    return {
        None: "NULL",
        "": "NULL",
        "NOW()": "NOW()",
        "CURTIME()": "CURTIME()",
    }


class ConnectionSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MYSQL_",
        env_ignore_empty=True,
        extra="allow",
        frozen=True,
    )

    host: str = "localhost"
    port: int = 3306
    user: str | None = None
    password: str = ""
    database: str | None = None
    charset: str = "utf8mb4"
    connect_timeout: int = 10
    autocommit: bool = True

    sql_path: Path = Path("./sql")
    transforms: Transforms = Field(default_factory=default_transforms)

    def driver_options(self) -> dict[str, Any]:
        """Keyword arguments for pymysql.connect (local-only fields removed)."""
        options = self.model_dump(exclude=_LOCAL_FIELDS)
        return {k: v for k, v in options.items() if v is not None}
