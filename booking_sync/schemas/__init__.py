from booking_sync.schemas.appointment_schema import Appointment, AppointmentStatus, SlotIndex
from booking_sync.schemas.case_schema import Case, CaseStatus

__all__ = ["Appointment", "AppointmentStatus", "SlotIndex", "Case", "CaseStatus"]
