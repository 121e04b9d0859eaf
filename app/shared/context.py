"""Request context management using contextvars.

Provides async-safe storage for request-scoped data. The request ID set
by RequestIDMiddleware is visible to every task spawned while handling
the request (including concurrent authorization checks) and is stamped
on log records by RequestIDLogFilter.

Usage:
    token = set_request_id("abc123")
    request_id = get_request_id()
    reset_request_id(token)
"""

import logging
from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request ID for the current context; returns a reset token."""
    return _request_id.set(request_id)


def reset_request_id(token: Token[str | None]) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    return _request_id.get()


class RequestIDLogFilter(logging.Filter):
    """Add record.request_id ('-' outside a request) for the log format."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True
