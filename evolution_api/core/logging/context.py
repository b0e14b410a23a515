"""
Instance context for log records using contextvars.

The instance name is set once around a block of calls (see ``instance_context``)
and picked up by every ``ContextLogger`` without passing it explicitly.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_instance_context: ContextVar[str | None] = ContextVar("instance_name", default=None)


def get_current_instance_context() -> str | None:
    """Get the current instance name, or None if not set."""
    return _instance_context.get()


def clear_instance_context() -> None:
    """Clear the instance context. Mostly useful in tests."""
    _instance_context.set(None)


@contextmanager
def instance_context(instance_name: str) -> Iterator[None]:
    """Scope log records emitted inside the block to ``instance_name``."""
    token = _instance_context.set(instance_name)
    try:
        yield
    finally:
        _instance_context.reset(token)
