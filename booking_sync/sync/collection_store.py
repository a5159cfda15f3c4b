"""
Typed get/set over the storage adapter, publishing on every write.

Each collection has a fixed pydantic type, so reads come back as model
instances and writes are serialized by alias (``displayDate``).

Record lists are decoded one record at a time: a record that fails
validation is logged and skipped, and the collection is marked damaged.
A damaged collection is never overwritten, so the skipped records stay
on disk (or on the server) until someone repairs them.
"""

import logging
from typing import Any, Callable

from pydantic import TypeAdapter, ValidationError

from booking_sync.schemas import Appointment, Case, SlotIndex
from booking_sync.storage.base import Collection, StorageAdapter
from booking_sync.sync.event_bus import EventBus

logger = logging.getLogger(__name__)

RECORD_TYPES: dict[Collection, TypeAdapter] = {
    Collection.CASES: TypeAdapter(Case),
    Collection.APPOINTMENTS: TypeAdapter(Appointment),
}

COLLECTION_TYPES: dict[Collection, TypeAdapter] = {
    Collection.CASES: TypeAdapter(list[Case]),
    Collection.APPOINTMENTS: TypeAdapter(list[Appointment]),
    Collection.BOOKED_SLOTS: TypeAdapter(SlotIndex),
}

RAW_LIST = TypeAdapter(list[Any])

DEFAULTS: dict[Collection, Callable[[], Any]] = {
    Collection.CASES: list,
    Collection.APPOINTMENTS: list,
    Collection.BOOKED_SLOTS: dict,
}


class CollectionStore:
    """Serialize, persist, and announce collection values."""

    def __init__(self, adapter: StorageAdapter, bus: EventBus) -> None:
        self.adapter = adapter
        self.bus = bus
        self._damaged: set[Collection] = set()

    def read(self, collection: Collection) -> Any:
        """Return the stored value, or the empty default if absent or unreadable.

        Invalid records in a list collection are dropped from the result
        and the collection is marked damaged.
        """
        key = Collection(collection)
        raw = self.adapter.read(key)
        self._damaged.discard(key)
        if raw is None:
            return DEFAULTS[key]()

        if key not in RECORD_TYPES:
            try:
                return COLLECTION_TYPES[key].validate_json(raw)
            except ValidationError as exc:
                return self._undecodable(key, exc)

        try:
            items = RAW_LIST.validate_json(raw)
        except ValidationError as exc:
            return self._undecodable(key, exc)

        records = []
        for position, item in enumerate(items):
            try:
                records.append(RECORD_TYPES[key].validate_python(item))
            except ValidationError as exc:
                self._damaged.add(key)
                logger.error(
                    "Skipping invalid %s record #%d: %s",
                    key.value, position, exc.errors(include_url=False),
                )
        return records

    def _undecodable(self, key: Collection, exc: ValidationError) -> Any:
        self._damaged.add(key)
        logger.error(
            "Stored %s could not be decoded (%d errors), using empty default",
            key.value, exc.error_count(),
        )
        return DEFAULTS[key]()

    def is_damaged(self, collection: Collection) -> bool:
        """True when the last read of ``collection`` skipped undecodable data."""
        return Collection(collection) in self._damaged

    def write(self, collection: Collection, value: Any) -> bool:
        """Persist ``value`` then publish it. Returns the adapter's ack.

        Subscribers are notified even when the backend rejected the write.
        A damaged collection is left untouched: nothing is written or
        published and the result is False.
        """
        key = Collection(collection)
        if key in self._damaged:
            logger.error(
                "Refusing to overwrite %s: stored data has records that could not be decoded",
                key.value,
            )
            return False
        payload = COLLECTION_TYPES[key].dump_json(value, by_alias=True).decode("utf-8")
        ok = self.adapter.write(key, payload)
        if not ok:
            logger.warning("Backend did not accept write to %s", key.value)
        self.bus.publish(key, value)
        return ok

    def exists(self, collection: Collection) -> bool:
        return self.adapter.read(Collection(collection)) is not None
