"""Shared test fixtures and helpers."""

from typing import Optional

import pytest

from booking_sync.data_sync import DataSync
from booking_sync.schemas import SlotIndex
from booking_sync.storage import Collection, MemoryStorageAdapter
from booking_sync.sync import CollectionStore, EventBus


class FlakyAdapter(MemoryStorageAdapter):
    """Memory adapter whose writes can be switched to fail per collection."""

    def __init__(self) -> None:
        super().__init__()
        self.failing: set[Collection] = set()

    def write(self, collection: Collection, payload: str) -> bool:
        if Collection(collection) in self.failing:
            return False
        return super().write(collection, payload)


class Recorder:
    """Callable subscriber that remembers every payload it was given."""

    def __init__(self) -> None:
        self.calls: list = []

    def __call__(self, payload) -> None:
        self.calls.append(payload)


@pytest.fixture
def adapter():
    return FlakyAdapter()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def store(adapter, bus):
    return CollectionStore(adapter, bus)


@pytest.fixture
def sync(adapter):
    return DataSync(adapter)


def make_case(
    name: str = "Zhang San",
    phone: str = "13800138001",
    status: str = "pending",
    reason: str = "",
) -> dict:
    """Helper to create case input data."""
    return {"name": name, "phone": phone, "status": status, "reason": reason}


def make_appointment(
    name: str = "A",
    phone: str = "111",
    date: str = "2025-09-18",
    time: str = "09:00-10:00",
    display_date: str = "Sep 18 (Thu)",
    status: Optional[str] = None,
) -> dict:
    """Helper to create appointment input data. Status omitted unless given."""
    data = {"name": name, "phone": phone, "date": date, "time": time, "displayDate": display_date}
    if status is not None:
        data["status"] = status
    return data


def expected_slots(sync: DataSync) -> dict[str, set[str]]:
    """Slot index implied by the confirmed appointments."""
    expected: dict[str, set[str]] = {}
    for appointment in sync.appointments.get_all():
        if appointment.is_active:
            expected.setdefault(appointment.date, set()).add(appointment.time)
    return expected


def stored_slots(sync: DataSync) -> dict[str, set[str]]:
    """Stored slot index with empty dates dropped."""
    slots: SlotIndex = sync.appointments.get_booked_slots()
    return {date: set(times) for date, times in slots.items() if times}
