"""
Middleware pipeline with two hooks.

BEFORE_QUERY stages receive a QueryRequest before formatting; ON_RESULTS
stages receive a QueryResponse after the driver returns. Each stage returns
the record for the next stage. Returning None keeps the current record, so a
stage may also just mutate ``values`` / ``results`` in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from mysqlkit.core.errors import InvalidArgumentError


class Hook(str, Enum):
    """Extension points in MySqlClient.query."""

    BEFORE_QUERY = "before_query"
    ON_RESULTS = "on_results"


_ALIASES = {
    "before_query": Hook.BEFORE_QUERY,
    "on_before_query": Hook.BEFORE_QUERY,
    "on_results": Hook.ON_RESULTS,
    "results": Hook.ON_RESULTS,
}


@dataclass(frozen=True)
class QueryRequest:
    sql: str
    values: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class QueryResponse:
    sql: str
    results: Any = None


_RECORD_TYPES: dict[Hook, type] = {
    Hook.BEFORE_QUERY: QueryRequest,
    Hook.ON_RESULTS: QueryResponse,
}

Stage = Callable[[Any], Any]


def resolve_hook(hook: Hook | str) -> Hook:
    """Accept a Hook or a name like ``before-query`` / ``ON_BEFORE_QUERY``."""
    if isinstance(hook, Hook):
        return hook
    if isinstance(hook, str):
        name = hook.strip().lower().replace("-", "_")
        if name in _ALIASES:
            return _ALIASES[name]
    raise InvalidArgumentError(
        f"Unknown middleware hook: {hook!r}. Expected one of: {[h.value for h in Hook]}"
    )


class MiddlewarePipeline:
    def __init__(self) -> None:
        self._stages: dict[Hook, list[Stage]] = {h: [] for h in Hook}

    def register(self, hook: Hook | str, fn: Stage) -> None:
        """Append *fn* to *hook*. Invalid registrations raise InvalidArgumentError."""
        resolved = resolve_hook(hook)
        if not callable(fn):
            raise InvalidArgumentError(f"middleware must be callable, got {type(fn).__name__}")
        self._stages[resolved].append(fn)

    def stages(self, hook: Hook | str) -> list[Stage]:
        return list(self._stages[resolve_hook(hook)])

    def apply(self, hook: Hook | str, record: Any) -> Any:
        """Run *record* through every stage of *hook*, in registration order."""
        resolved = resolve_hook(hook)
        expected = _RECORD_TYPES[resolved]
        for fn in self._stages[resolved]:
            out = fn(record)
            if out is None:
                continue
            if not isinstance(out, expected):
                raise InvalidArgumentError(
                    f"{resolved.value} middleware {getattr(fn, '__name__', fn)!r} "
                    f"returned {type(out).__name__}, expected {expected.__name__} or None"
                )
            record = out
        return record
