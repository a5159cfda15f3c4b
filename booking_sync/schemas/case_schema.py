"""Case record model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class CaseStatus(str, Enum):
    """Review status of a case."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Case(BaseModel):
    """
    A reviewed application, cross-referenced to appointments by (name, phone).

    Stored cases may be rejected with an empty reason (older data never
    required one); ``CaseRegistry`` only insists on a reason for new
    rejections.
    """
    id: Optional[str] = None
    name: str
    phone: str
    status: CaseStatus = CaseStatus.PENDING
    reason: str = ""

    @property
    def identity(self) -> tuple[str, str]:
        return self.name, self.phone
