"""
Logging utilities for safe structured logging.

Flattens scheduler values (dates, enums, UUIDs, session-number lists and
write-failure records) into short strings before they reach ``extra``, so
formatters and log shippers never see raw objects.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import enum
import logging
from datetime import date
from typing import Any, Iterable, Mapping
from uuid import UUID

# Longest list rendered item by item; longer ones are summarised by length
INLINE_LIST_LIMIT = 10


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Convert a context value to a bounded string for logging.

    Dates render as ISO strings, enums as their value, short lists of
    scalars inline (``[3, 4, 5]``), anything bigger by its size.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, enum.Enum):
            val_str = str(value.value)
        elif isinstance(value, date):
            val_str = value.isoformat()
        elif isinstance(value, (UUID, str)):
            val_str = str(value)
        elif isinstance(value, (list, tuple, set)):
            items = sorted(value) if isinstance(value, set) else list(value)
            if len(items) <= INLINE_LIST_LIMIT and all(isinstance(i, (int, str)) for i in items):
                val_str = f"[{', '.join(str(i) for i in items)}]"
            else:
                val_str = f"{type(value).__name__}({len(items)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def summarize_failures(failures: Iterable[Mapping[str, Any]]) -> str:
    """
    Render write-failure records as ``session 3: reason; session 5: reason``.

    Records without a session number are reported as ``session ?``.
    """
    parts = [
        f"session {failure.get('session_number', '?')}: {failure.get('reason', 'unknown')}"
        for failure in failures
    ]
    return "; ".join(parts) or "none"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message with structured context, safely converting all values.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Arbitrary key-value pairs
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    logger.log(level, message, extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with traceback and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context pairs
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context.update({
        "error_type": type(exc).__name__,
        "error_msg": getattr(exc, "message", str(exc)),
    })
    logger.exception(message, extra=safe_context)
