"""
Storage adapter interface shared by the local and remote backends.

Registries never branch on which backend is active: a concrete adapter is
injected at construction and only ``read`` / ``write`` are used.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class Collection(str, Enum):
    """The three named record sets, keyed by their local storage names."""
    CASES = "caseDatabase"
    APPOINTMENTS = "appointments"
    BOOKED_SLOTS = "bookedSlots"


class StorageAdapter(ABC):
    """Key-based get/set over the named collections.

    Payloads are serialized JSON text. Failures never raise: a read that
    cannot be served returns ``None`` and a write that was not accepted
    returns ``False``.
    """

    @abstractmethod
    def read(self, collection: Collection) -> Optional[str]:
        """Return the stored payload, or None if absent or unavailable."""

    @abstractmethod
    def write(self, collection: Collection, payload: str) -> bool:
        """Persist the payload. Returns True when the backend acknowledged it."""
