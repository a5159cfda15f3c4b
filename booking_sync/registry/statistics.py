"""Dashboard counters over the case and appointment collections."""

from booking_sync.registry.appointment_registry import AppointmentRegistry
from booking_sync.registry.case_registry import CaseRegistry
from booking_sync.schemas import CaseStatus


class DataStatistics:
    def __init__(self, cases: CaseRegistry, appointments: AppointmentRegistry) -> None:
        self.cases = cases
        self.appointments = appointments

    def total_appointments(self) -> int:
        """All appointments ever booked, cancelled ones included."""
        return len(self.appointments.get_all())

    def active_appointment_count(self) -> int:
        return sum(1 for a in self.appointments.get_all() if a.is_active)

    def _count_cases(self, status: CaseStatus) -> int:
        return sum(1 for c in self.cases.get_all() if c.status == status)

    def approved_case_count(self) -> int:
        return self._count_cases(CaseStatus.APPROVED)

    def pending_case_count(self) -> int:
        return self._count_cases(CaseStatus.PENDING)

    def rejected_case_count(self) -> int:
        return self._count_cases(CaseStatus.REJECTED)
