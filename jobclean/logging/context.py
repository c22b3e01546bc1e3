"""Per-job logging fields carried through a ContextVar.

ContextualFilter copies whatever is bound here onto each record, so stage
and salary logs emitted deep inside the cleaner still carry the ``job_id``
and ``mode`` of the posting being normalized. Worker threads start with an
empty context, which keeps concurrent batch items from mixing their ids.
"""

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Dict, Iterator

_fields: ContextVar[Dict[str, Any]] = ContextVar("jobclean_log_fields", default={})


def get_log_context() -> Dict[str, Any]:
    """Snapshot of the bound fields, safe for callers to mutate."""
    return dict(_fields.get())


def push_log_context(**fields: Any) -> Token:
    """Bind ``fields`` on top of the current ones.

    Returns:
        Token for pop_log_context(); later keys shadow earlier ones until popped
    """
    merged = dict(_fields.get())
    merged.update(fields)
    return _fields.set(merged)


def pop_log_context(token: Token) -> None:
    _fields.reset(token)


def clear_log_context() -> None:
    """Drop every bound field in the current context."""
    _fields.set({})


@contextmanager
def log_context(**fields: Any) -> Iterator[Dict[str, Any]]:
    """Bind ``fields`` for the duration of a ``with`` block.

    Example:
        >>> with log_context(job_id="li-4012345", mode="listing"):
        ...     logger.info("Normalizing job")  # record includes job_id, mode
    """
    token = push_log_context(**fields)
    try:
        yield get_log_context()
    finally:
        pop_log_context(token)
