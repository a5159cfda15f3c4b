"""
Root module wiring one event bus, one collection store, and the registries.

Usage:
    sync = DataSync(LocalStorageAdapter(".booking_sync"))
    sync.initialize()
    sync.subscribe(Collection.APPOINTMENTS, refresh_calendar)
    sync.appointments.add({...})  # refresh_calendar(all appointments)
"""

import logging
from pathlib import Path
from typing import Optional

from booking_sync import sample_data
from booking_sync.config import AppConfig, settings
from booking_sync.registry import AppointmentRegistry, CaseRegistry, DataStatistics
from booking_sync.storage import (
    Collection,
    LocalStorageAdapter,
    MemoryStorageAdapter,
    RemoteStorageAdapter,
    StorageAdapter,
)
from booking_sync.sync import CollectionStore, EventBus
from booking_sync.sync.event_bus import Callback

logger = logging.getLogger(__name__)


class DataSync:
    """Public entry point handed to UI code."""

    def __init__(self, adapter: StorageAdapter, bus: Optional[EventBus] = None) -> None:
        self.adapter = adapter
        self.bus = bus or EventBus()
        self.store = CollectionStore(adapter, self.bus)
        self.appointments = AppointmentRegistry(self.store)
        self.cases = CaseRegistry(self.store, self.appointments)
        self.statistics = DataStatistics(self.cases, self.appointments)

    def initialize(self, seed: bool = True) -> None:
        """Seed each absent collection with sample data.

        Collections that already hold data are left untouched. With
        ``seed=False`` nothing is written.
        """
        if not seed:
            logger.info("Data sync initialized without seeding (%s)", type(self.adapter).__name__)
            return

        seeds = [
            (Collection.CASES, sample_data.sample_cases),
            (Collection.APPOINTMENTS, sample_data.sample_appointments),
            (Collection.BOOKED_SLOTS, sample_data.sample_slots),
        ]
        for collection, factory in seeds:
            if self.store.exists(collection):
                continue
            if not self.store.write(collection, factory()):
                logger.error("Could not seed %s", collection.value)
            else:
                logger.info("Seeded %s with sample data", collection.value)

    def subscribe(self, collection: Collection, callback: Callback) -> None:
        self.bus.subscribe(collection, callback)

    def unsubscribe(self, collection: Collection, callback: Callback) -> None:
        self.bus.unsubscribe(collection, callback)


def build_adapter(config: AppConfig) -> StorageAdapter:
    """Create the storage adapter named by ``config.storage.backend``."""
    backend = config.storage.backend
    if backend == "local":
        return LocalStorageAdapter(Path(config.storage.directory))
    if backend == "memory":
        return MemoryStorageAdapter()
    if backend == "remote":
        return RemoteStorageAdapter(
            config.remote.base_url,
            timeout=config.remote.timeout_sec,
            token=config.remote.token or None,
        )
    raise ValueError(f"Unknown storage backend: {backend!r}")


def create_data_sync(config: Optional[AppConfig] = None, initialize: bool = True) -> DataSync:
    """Build a ready-to-use DataSync from configuration.

    The remote backend is never seeded; its data lives on the server.
    """
    config = config or settings
    sync = DataSync(build_adapter(config))
    if initialize:
        sync.initialize(
            seed=config.storage.seed_sample_data and config.storage.backend != "remote"
        )
    return sync
