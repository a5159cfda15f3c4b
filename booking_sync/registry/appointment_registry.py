"""
Appointment CRUD with the booked-slot index kept in step.

The slot index is derived data: a time range is listed for a date exactly
when some confirmed appointment holds that (date, time). It is persisted
separately for fast lookup, and only this registry writes it.

Usage:
    registry = AppointmentRegistry(store)
    booked = registry.add({"name": "A", "phone": "111",
                           "date": "2025-09-18", "time": "09:00-10:00"})
    registry.is_slot_booked("2025-09-18", "09:00-10:00")  # True
    registry.cancel(booked.id)
"""

from typing import Any, Mapping, Optional, Union

from booking_sync.errors import (
    BackendUnavailableError,
    DuplicateActiveBookingError,
    InvalidRecordError,
    NotFoundError,
    operation,
)
from booking_sync.logging_context import get_op_logger
from booking_sync.schemas import Appointment, AppointmentStatus, SlotIndex
from booking_sync.storage.base import Collection
from booking_sync.sync.collection_store import CollectionStore
from booking_sync.utils import generate_id, legacy_id

logger = get_op_logger(__name__)

ID_PREFIX = "APT"

AppointmentRef = Union[str, tuple[str, str]]


class AppointmentRegistry:
    """Owns the appointment collection and the derived slot index."""

    def __init__(self, store: CollectionStore) -> None:
        self.store = store

    def _load(self) -> list[Appointment]:
        """Read appointments, giving id-less legacy records a deterministic id in memory.

        Nothing is written here; the ids are persisted by the next mutation.
        """
        appointments: list[Appointment] = self.store.read(Collection.APPOINTMENTS)
        for position, appointment in enumerate(appointments):
            if not appointment.id:
                appointment.id = legacy_id(
                    ID_PREFIX, position, appointment.name, appointment.phone,
                    appointment.date, appointment.time,
                )
        return appointments

    def _save(self, appointments: list[Appointment]) -> None:
        if not self.store.write(Collection.APPOINTMENTS, appointments):
            raise BackendUnavailableError("appointments were not persisted")

    def _resolve(self, appointments: list[Appointment], ref: AppointmentRef) -> Appointment:
        if isinstance(ref, tuple):
            name, phone = ref
            for appointment in appointments:
                if appointment.identity == (name, phone) and appointment.is_active:
                    return appointment
            raise NotFoundError(f"no active appointment for {name} / {phone}")
        for appointment in appointments:
            if appointment.id == ref:
                return appointment
        raise NotFoundError(f"appointment {ref} not found")

    # --- Reads ---

    @operation(default=list)
    def get_all(self) -> list[Appointment]:
        return self._load()

    @operation()
    def get(self, appointment_id: str) -> Optional[Appointment]:
        return self._resolve(self._load(), appointment_id)

    @operation()
    def find_active_by_identity(self, name: str, phone: str) -> Optional[Appointment]:
        """Return the non-cancelled appointment for (name, phone), if any."""
        for appointment in self._load():
            if appointment.identity == (name, phone) and appointment.is_active:
                return appointment
        return None

    # --- Mutations ---

    @operation()
    def add(self, appointment: Union[Appointment, Mapping[str, Any]]) -> Optional[Appointment]:
        """
        Book an appointment and mark its slot as taken.

        The record always gets a freshly generated id, even when the
        input carries one. Fails when the phone number already holds a
        non-cancelled appointment; in that case nothing is written.
        """
        if isinstance(appointment, Appointment):
            appointment = appointment.model_dump(by_alias=True)
        record = Appointment.model_validate(dict(appointment))
        appointments = self._load()

        if any(a.phone == record.phone and a.is_active for a in appointments):
            raise DuplicateActiveBookingError(
                f"phone {record.phone} already has an active appointment"
            )

        record.id = generate_id(ID_PREFIX)
        appointments.append(record)
        self._save(appointments)
        if record.is_active:
            self._add_slot(record.date, record.time)

        logger.info(
            "Appointment %s booked for %s on %s at %s",
            record.id, record.name, record.date, record.time,
        )
        return record

    @operation()
    def cancel(self, ref: AppointmentRef) -> Optional[Appointment]:
        """
        Cancel by id or by (name, phone). The record is kept with
        status ``cancelled``; its slot is freed unless another confirmed
        appointment still holds the same (date, time).
        """
        appointments = self._load()
        if self.store.is_damaged(Collection.APPOINTMENTS):
            raise InvalidRecordError("stored appointments could not all be decoded")
        target = self._resolve(appointments, ref)
        if not target.is_active:
            raise NotFoundError(f"appointment {target.id} is already cancelled")

        still_held = any(
            a is not target and a.is_active and (a.date, a.time) == (target.date, target.time)
            for a in appointments
        )
        if not still_held:
            self._remove_slot(target.date, target.time)

        target.status = AppointmentStatus.CANCELLED
        self._save(appointments)
        logger.info("Appointment %s cancelled for %s", target.id, target.name)
        return target

    # --- Slot index ---

    @operation(default=dict)
    def get_booked_slots(self) -> SlotIndex:
        return self.store.read(Collection.BOOKED_SLOTS)

    @operation(default=list)
    def get_booked_slots_for(self, date: str) -> list[str]:
        return self.store.read(Collection.BOOKED_SLOTS).get(date, [])

    @operation(default=bool)
    def is_slot_booked(self, date: str, time_range: str) -> bool:
        return time_range in self.store.read(Collection.BOOKED_SLOTS).get(date, [])

    @operation(default=dict)
    def reconcile_slots(self) -> SlotIndex:
        """Rebuild the slot index from confirmed appointments.

        Dates already present in the index keep an entry (possibly empty).
        Writes only when the stored index differs. Refuses to run while
        some stored appointments cannot be decoded.
        """
        current: SlotIndex = self.store.read(Collection.BOOKED_SLOTS)
        appointments = self._load()
        if self.store.is_damaged(Collection.APPOINTMENTS):
            raise InvalidRecordError("stored appointments could not all be decoded")
        rebuilt: SlotIndex = {date: [] for date in current}
        for appointment in appointments:
            if appointment.is_active:
                times = rebuilt.setdefault(appointment.date, [])
                if appointment.time not in times:
                    times.append(appointment.time)

        drifted = {d: sorted(t) for d, t in rebuilt.items()} != {
            d: sorted(t) for d, t in current.items()
        }
        if drifted:
            logger.warning("Slot index drifted from appointments, rewriting")
            self._save_slots(rebuilt)
            return rebuilt
        return current

    def _save_slots(self, slots: SlotIndex) -> None:
        if not self.store.write(Collection.BOOKED_SLOTS, slots):
            raise BackendUnavailableError("slot index was not persisted")

    def _add_slot(self, date: str, time_range: str) -> None:
        slots: SlotIndex = self.store.read(Collection.BOOKED_SLOTS)
        times = slots.setdefault(date, [])
        if time_range in times:
            return
        times.append(time_range)
        self._save_slots(slots)
        logger.debug("Slot %s %s booked", date, time_range)

    def _remove_slot(self, date: str, time_range: str) -> None:
        slots: SlotIndex = self.store.read(Collection.BOOKED_SLOTS)
        times = slots.get(date)
        if not times or time_range not in times:
            return
        times.remove(time_range)
        self._save_slots(slots)
        logger.debug("Slot %s %s freed", date, time_range)
