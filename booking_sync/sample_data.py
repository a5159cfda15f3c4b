"""Seed records written by ``DataSync.initialize`` when a collection is empty."""

from booking_sync.schemas import Appointment, Case, CaseStatus, SlotIndex

SAMPLE_CASES: list[dict] = [
    {"id": "CASE-000001", "name": "Zhang San", "phone": "13800138001",
     "status": CaseStatus.APPROVED, "reason": ""},
    {"id": "CASE-000002", "name": "Li Si", "phone": "13900139002",
     "status": CaseStatus.REJECTED,
     "reason": "Incomplete documents, please provide proof of identity"},
    {"id": "CASE-000003", "name": "Wang Wu", "phone": "13700137003",
     "status": CaseStatus.PENDING,
     "reason": "Your application is under review, please wait"},
]

SAMPLE_APPOINTMENTS: list[dict] = [
    {"id": "APT-000001", "name": "Zhang San", "phone": "13800138001",
     "date": "2025-10-16", "time": "10:00-11:00",
     "displayDate": "Oct 16 (Thu)", "status": "confirmed"},
]


def sample_cases() -> list[Case]:
    return [Case.model_validate(c) for c in SAMPLE_CASES]


def sample_appointments() -> list[Appointment]:
    return [Appointment.model_validate(a) for a in SAMPLE_APPOINTMENTS]


def sample_slots() -> SlotIndex:
    """Slot index derived from the sample appointments."""
    slots: SlotIndex = {}
    for appointment in sample_appointments():
        if appointment.is_active:
            slots.setdefault(appointment.date, []).append(appointment.time)
    return slots
