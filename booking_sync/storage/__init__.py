from booking_sync.storage.base import Collection, StorageAdapter
from booking_sync.storage.local import LocalStorageAdapter, MemoryStorageAdapter
from booking_sync.storage.remote import RemoteStorageAdapter

__all__ = [
    "Collection", "StorageAdapter",
    "LocalStorageAdapter", "MemoryStorageAdapter", "RemoteStorageAdapter",
]
