"""
Per-collection pub/sub so UI components stay in sync with writes.

Delivery is synchronous and in registration order. A failing callback
is logged and skipped; it never stops the others or the writer.

Usage:
    bus = EventBus()
    bus.subscribe(Collection.CASES, render_case_table)
    bus.publish(Collection.CASES, cases)  # render_case_table(cases)
"""

import logging
from typing import Any, Callable

from booking_sync.storage.base import Collection

logger = logging.getLogger(__name__)

Callback = Callable[[Any], None]


class EventBus:
    """Subscriber lists keyed by collection."""

    def __init__(self) -> None:
        self._listeners: dict[Collection, list[Callback]] = {}

    def subscribe(self, collection: Collection, callback: Callback) -> None:
        """Register a callback. The same callable may be registered twice."""
        self._listeners.setdefault(Collection(collection), []).append(callback)

    def unsubscribe(self, collection: Collection, callback: Callback) -> None:
        """Remove the first registration of ``callback``. No-op if absent."""
        listeners = self._listeners.get(Collection(collection), [])
        if callback in listeners:
            listeners.remove(callback)

    def publish(self, collection: Collection, payload: Any) -> None:
        """Call every subscriber of ``collection`` with the full payload."""
        key = Collection(collection)
        # Copy so a callback may unsubscribe itself mid-delivery.
        for callback in list(self._listeners.get(key, [])):
            try:
                callback(payload)
            except Exception:
                logger.exception("Error in %s change callback %r", key.value, callback)

    def subscriber_count(self, collection: Collection) -> int:
        return len(self._listeners.get(Collection(collection), []))
