"""Operation ID logging context for tracing registry calls.

Provides an op_id-aware logger that attaches an operation ID to every
log message, so a cascade (delete case -> cancel appointment -> free slot)
can be followed as a single unit in the logs.

Usage:
    from booking_sync.logging_context import get_op_logger, set_op_id

    set_op_id("OP-1a2b3c4d")
    logger = get_op_logger(__name__)
    logger.info("Cancelling appointment")  # record.op_id == "OP-1a2b3c4d"
"""

import logging
from contextvars import ContextVar, Token

NO_OP_ID = "NO_OP_ID"

_op_id: ContextVar[str] = ContextVar("op_id", default=NO_OP_ID)


def set_op_id(op_id: str) -> Token:
    """Set the operation ID for the current context. Returns a reset token."""
    return _op_id.set(op_id)


def reset_op_id(token: Token) -> None:
    """Restore the operation ID that was active before ``set_op_id``."""
    _op_id.reset(token)


def get_op_id() -> str:
    """Retrieve the current operation ID."""
    return _op_id.get()


class OpIdFilter(logging.Filter):
    """Injects op_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.op_id = _op_id.get()  # type: ignore[attr-defined]
        return True


def get_op_logger(name: str) -> logging.Logger:
    """Return a logger with the OpIdFilter attached.

    The filter adds ``op_id`` to each record so formatters can
    include ``%(op_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, OpIdFilter) for f in logger.filters):
        logger.addFilter(OpIdFilter())
    return logger
