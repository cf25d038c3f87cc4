"""
Correlation ID context.

Binds one correlation ID per unit of work (an HTTP request or an operator
script run) using contextvars, so every log record emitted inside it can be
traced back together. Inbound IDs supplied by callers are only trusted when
they are short and made of header-safe characters.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import re
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

MAX_CORRELATION_ID_LENGTH = 128

_SAFE_CORRELATION_ID = re.compile(r"[A-Za-z0-9._:\-]+")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def sanitize_correlation_id(raw: str | None) -> str | None:
    """
    Accept a caller-supplied correlation ID if it is safe to echo and log.

    Returns:
        str | None: The stripped ID, or None when missing, too long or
            containing characters outside ``[A-Za-z0-9._:-]``
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value or len(value) > MAX_CORRELATION_ID_LENGTH:
        return None
    if not _SAFE_CORRELATION_ID.fullmatch(value):
        return None
    return value


def get_correlation_id() -> str:
    """Current correlation ID; empty outside any correlation scope."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(inbound: str | None = None) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of the ``with`` block.

    The inbound ID is used when it passes ``sanitize_correlation_id``;
    otherwise a fresh UUID4 is generated. The previous value is restored on
    exit, so scopes nest.

    Args:
        inbound: ID received from the caller, e.g. a request header

    Yields:
        str: The correlation ID bound for the block
    """
    value = sanitize_correlation_id(inbound) or str(uuid.uuid4())
    token = _correlation_id.set(value)
    try:
        yield value
    finally:
        _correlation_id.reset(token)
