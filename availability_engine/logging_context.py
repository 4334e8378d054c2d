"""Correlation ID logging context for tracing one scheduling session.

A scheduling session is a single user interaction: the tier table and
booking list are fetched once and every engine call made for that
interaction shares one session ID, so the day view, the suggestion and
the cost estimate can be read together in the logs.

The ID is injected by a filter on the output handler, so every record
that reaches it (engine or not) carries ``session_id`` and the format
string can always reference it.

Usage:
    from availability_engine.logging_context import scheduling_session

    with scheduling_session() as session_id:
        suggest_slot(...)  # logged as "... [SCHED-1a2b3c4d] INFO: ..."
"""

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import IO, Iterator, Optional

NO_SESSION_ID = "NO_SESSION_ID"
LOG_FORMAT = "%(asctime)s [%(name)s] [%(session_id)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_session_id: ContextVar[str] = ContextVar("session_id", default=NO_SESSION_ID)


def new_session_id() -> str:
    return f"SCHED-{uuid.uuid4().hex[:8]}"


def set_session_id(session_id: str) -> None:
    """Set the correlation ID for the current context."""
    _session_id.set(session_id)


def get_session_id() -> str:
    """Retrieve the current correlation ID."""
    return _session_id.get()


@contextmanager
def scheduling_session(session_id: Optional[str] = None) -> Iterator[str]:
    """Bind a session ID for the duration of the block, then restore the previous one."""
    token = _session_id.set(session_id or new_session_id())
    try:
        yield _session_id.get()
    finally:
        _session_id.reset(token)


class SessionIdFilter(logging.Filter):
    """Injects session_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = _session_id.get()  # type: ignore[attr-defined]
        return True


def build_log_handler(stream: Optional[IO[str]] = None) -> logging.Handler:
    """Stream handler whose records always carry ``session_id``."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(SessionIdFilter())
    return handler
