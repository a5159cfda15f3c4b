from booking_sync.sync.collection_store import CollectionStore
from booking_sync.sync.event_bus import EventBus

__all__ = ["CollectionStore", "EventBus"]
