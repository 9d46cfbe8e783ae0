"""Context propagation for structured logging.

Fields pushed here (for example ``listing_id`` or ``request_id``) are added
to every record emitted in the same scope. Context lives in a ContextVar, so
threads and asyncio tasks each see their own copy.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the current logging context."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the logging context.

    Returns:
        Token for pop_log_context() to restore the previous state
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the logging context saved by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Clear all logging context fields. Mostly useful in tests."""
    LogContextVar.set({})


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(listing_id="meal-42"):
        ...     content_filter.validate(title, description)
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
