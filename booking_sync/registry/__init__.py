from booking_sync.registry.appointment_registry import AppointmentRegistry
from booking_sync.registry.case_registry import CaseRegistry
from booking_sync.registry.statistics import DataStatistics

__all__ = ["AppointmentRegistry", "CaseRegistry", "DataStatistics"]
