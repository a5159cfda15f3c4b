from booking_sync.data_sync import DataSync, build_adapter, create_data_sync
from booking_sync.registry import AppointmentRegistry, CaseRegistry, DataStatistics
from booking_sync.schemas import Appointment, AppointmentStatus, Case, CaseStatus
from booking_sync.storage import (
    Collection,
    LocalStorageAdapter,
    MemoryStorageAdapter,
    RemoteStorageAdapter,
    StorageAdapter,
)
from booking_sync.sync import CollectionStore, EventBus

__all__ = [
    "DataSync", "build_adapter", "create_data_sync",
    "AppointmentRegistry", "CaseRegistry", "DataStatistics",
    "Appointment", "AppointmentStatus", "Case", "CaseStatus",
    "Collection", "StorageAdapter",
    "LocalStorageAdapter", "MemoryStorageAdapter", "RemoteStorageAdapter",
    "CollectionStore", "EventBus",
]
