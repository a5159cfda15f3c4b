"""
Error taxonomy and the operation boundary used by every registry call.

Registries raise these exceptions internally. The ``operation`` decorator
catches them at the public method boundary, logs them, and turns them into
a sentinel return value, so no exception crosses into UI code.
"""

import functools
import logging
import uuid
from typing import Any, Callable, Optional, TypeVar

from pydantic import ValidationError

from booking_sync.logging_context import NO_OP_ID, get_op_id, reset_op_id, set_op_id

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


class DataSyncError(Exception):
    """Base class for failures inside a registry operation."""


class NotFoundError(DataSyncError):
    """Raised when an id or (name, phone) identity does not resolve."""


class DuplicateActiveBookingError(DataSyncError):
    """Raised when a phone number already holds a non-cancelled appointment."""


class BackendUnavailableError(DataSyncError):
    """Raised when the storage adapter did not acknowledge a write."""


class InvalidRecordError(DataSyncError):
    """Raised when a record is well-formed but breaks a registry rule."""


def operation(default: Optional[Callable[[], Any]] = None) -> Callable[[F], F]:
    """Wrap a registry method so failures become a sentinel return value.

    ``default`` is a factory for the sentinel (``list`` or ``dict`` for
    collection-returning methods); when omitted the sentinel is ``None``.
    The first operation in a call chain assigns a fresh op_id; nested
    operations (cascades) reuse it.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            token = None
            if get_op_id() == NO_OP_ID:
                token = set_op_id(f"OP-{uuid.uuid4().hex[:8]}")
            try:
                return func(*args, **kwargs)
            except ValidationError as exc:
                logger.warning(
                    "%s rejected invalid record [%s]: %s",
                    func.__qualname__, get_op_id(), exc.errors(include_url=False),
                )
            except DataSyncError as exc:
                logger.warning(
                    "%s failed [%s] %s: %s",
                    func.__qualname__, get_op_id(), type(exc).__name__, exc,
                )
            finally:
                if token is not None:
                    reset_op_id(token)
            return default() if default is not None else None

        return wrapper  # type: ignore[return-value]

    return decorator
