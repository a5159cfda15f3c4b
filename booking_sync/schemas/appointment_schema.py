"""Appointment record model and the booked-slot index type."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from booking_sync.utils import is_valid_date, is_valid_time_range

# date -> time-range labels currently booked on that date
SlotIndex = dict[str, list[str]]


class AppointmentStatus(str, Enum):
    """Lifecycle status of an appointment."""
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Appointment(BaseModel):
    """
    A booked (date, time range) for one person.

    Stored and published with the ``displayDate`` key; the Python
    attribute is ``display_date``. Cancelled appointments are kept for
    history rather than deleted.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str
    phone: str
    date: str
    time: str
    display_date: str = Field(default="", alias="displayDate")
    status: AppointmentStatus = AppointmentStatus.CONFIRMED

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> Any:
        """Anything other than a known status becomes ``confirmed``."""
        if isinstance(value, AppointmentStatus):
            return value
        if isinstance(value, str) and value in {s.value for s in AppointmentStatus}:
            return value
        return AppointmentStatus.CONFIRMED

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        if not is_valid_date(value):
            raise ValueError(f"date must be YYYY-MM-DD, got {value!r}")
        return value.strip()

    @field_validator("time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        if not is_valid_time_range(value):
            raise ValueError(f"time must be an HH:MM-HH:MM range, got {value!r}")
        return value.strip()

    @property
    def identity(self) -> tuple[str, str]:
        return self.name, self.phone

    @property
    def is_active(self) -> bool:
        return self.status != AppointmentStatus.CANCELLED
