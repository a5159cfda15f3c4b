"""
Case CRUD and search.

Deleting a case cascades: any active appointment with the same
(name, phone) is cancelled first, which also frees its slot.
"""

from typing import Any, Mapping, Optional, Union

from booking_sync.errors import (
    BackendUnavailableError,
    InvalidRecordError,
    NotFoundError,
    operation,
)
from booking_sync.logging_context import get_op_logger
from booking_sync.registry.appointment_registry import AppointmentRegistry
from booking_sync.schemas import Case, CaseStatus
from booking_sync.storage.base import Collection
from booking_sync.sync.collection_store import CollectionStore
from booking_sync.utils import generate_id, legacy_id

logger = get_op_logger(__name__)

ID_PREFIX = "CASE"


class CaseRegistry:
    """Owns the case collection."""

    def __init__(self, store: CollectionStore, appointments: AppointmentRegistry) -> None:
        self.store = store
        self.appointments = appointments

    def _load(self) -> list[Case]:
        """Read cases, giving id-less legacy records a deterministic id in memory.

        Nothing is written here; the ids are persisted by the next mutation.
        """
        cases: list[Case] = self.store.read(Collection.CASES)
        for position, case in enumerate(cases):
            if not case.id:
                case.id = legacy_id(ID_PREFIX, position, case.name, case.phone)
        return cases

    def _save(self, cases: list[Case]) -> None:
        if not self.store.write(Collection.CASES, cases):
            raise BackendUnavailableError("cases were not persisted")

    @staticmethod
    def _require_reason(case: Case) -> None:
        if case.status == CaseStatus.REJECTED and not case.reason.strip():
            raise InvalidRecordError(f"case {case.id} cannot be rejected without a reason")

    @staticmethod
    def _index_of(cases: list[Case], case_id: str) -> int:
        for i, case in enumerate(cases):
            if case.id == case_id:
                return i
        raise NotFoundError(f"case {case_id} not found")

    @operation(default=list)
    def get_all(self) -> list[Case]:
        return self._load()

    @operation()
    def get(self, case_id: str) -> Optional[Case]:
        cases = self._load()
        return cases[self._index_of(cases, case_id)]

    @operation()
    def add(self, case: Union[Case, Mapping[str, Any]]) -> Optional[Case]:
        """Append a case under a freshly generated id. Duplicates are allowed."""
        if isinstance(case, Case):
            case = case.model_dump()
        record = Case.model_validate(dict(case))
        record.id = generate_id(ID_PREFIX)
        self._require_reason(record)
        cases = self._load()
        cases.append(record)
        self._save(cases)
        logger.info("Case %s added for %s", record.id, record.name)
        return record

    @operation()
    def update_status(
        self, case_id: str, new_status: Union[CaseStatus, str], reason: Optional[str] = None
    ) -> Optional[Case]:
        """Set a new status and optionally the reason shown to the applicant.

        ``reason=None`` keeps the current reason; pass ``""`` to clear it,
        e.g. when a rejected case is approved. Rejecting requires a
        non-empty reason, either passed here or already on the case.
        """
        cases = self._load()
        index = self._index_of(cases, case_id)
        current = cases[index]
        updated = Case.model_validate({
            **current.model_dump(),
            "status": new_status,
            "reason": current.reason if reason is None else reason,
        })
        self._require_reason(updated)
        cases[index] = updated
        self._save(cases)
        logger.info("Case %s status %s -> %s", case_id, current.status.value, updated.status.value)
        return updated

    @operation()
    def delete(self, case_id: str) -> Optional[Case]:
        cases = self._load()
        if self.store.is_damaged(Collection.CASES):
            raise InvalidRecordError("stored cases could not all be decoded")
        removed = cases.pop(self._index_of(cases, case_id))

        if removed.name and removed.phone:
            linked = self.appointments.find_active_by_identity(removed.name, removed.phone)
            if linked is not None:
                logger.info("Cascading cancel of appointment %s for case %s", linked.id, case_id)
                self.appointments.cancel(linked.id)

        self._save(cases)
        logger.info("Case %s deleted", case_id)
        return removed

    @operation()
    def find_by_identity(self, name: str, phone: str) -> Optional[Case]:
        for case in self._load():
            if case.identity == (name, phone):
                return case
        return None

    @operation(default=list)
    def search(self, term: Optional[str] = None) -> list[Case]:
        """Case-insensitive substring match on name or phone.

        An empty or missing term returns every case in stored order.
        """
        cases = self._load()
        if not term or not term.strip():
            return cases
        needle = term.strip().lower()
        return [c for c in cases if needle in c.name.lower() or needle in c.phone.lower()]
