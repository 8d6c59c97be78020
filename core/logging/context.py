"""Per-report log fields carried through the asyncio task tree."""
from __future__ import annotations

import contextvars
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Iterator, Mapping

# Tasks spawned by the enrichment pool copy the current context, so fields
# set around a report (account id, range, queue) reach every worker record.
_fields: contextvars.ContextVar[Mapping[str, Any]] = contextvars.ContextVar(
    "recap_log_fields", default=MappingProxyType({})
)


def current_fields() -> Mapping[str, Any]:
    """Read-only view of the fields active in this task."""
    return _fields.get()


@contextmanager
def log_scope(**fields: Any) -> Iterator[Mapping[str, Any]]:
    """
    Layer ``fields`` over the active ones until the block exits.

    ``None`` values are left out, so optional request attributes can be
    passed through unconditionally.
    """
    merged = dict(_fields.get())
    merged.update((k, v) for k, v in fields.items() if v is not None)
    token = _fields.set(MappingProxyType(merged))
    try:
        yield _fields.get()
    finally:
        _fields.reset(token)
