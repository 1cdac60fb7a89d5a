from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Sector, ShiftCode
from .model import (
    AllocationProposal,
    AllocationRow,
    ConfirmedAllocation,
    EmployeeAllocationLine,
    ReconciliationRecord,
)


class ReconciliationRepository(Protocol):
    """Persistence of arqueos, their pending proposals and confirmed allocations."""

    def upsert_record(
        self,
        *,
        sector: Sector,
        fecha: date,
        turno: ShiftCode,
        monto_diferencia: float,
        observaciones: str,
    ) -> int:
        """Create or overwrite the record of (sector, fecha, turno). Returns its id."""

        raise NotImplementedError

    def get_record(self, arqueo_id: int) -> Optional[ReconciliationRecord]:
        raise NotImplementedError

    def list_records(self, *, fecha: date) -> Sequence[ReconciliationRecord]:
        raise NotImplementedError

    def replace_proposals(self, arqueo_id: int, proposals: Sequence[AllocationProposal]) -> None:
        raise NotImplementedError

    def list_proposals(self, arqueo_id: int) -> Sequence[AllocationProposal]:
        raise NotImplementedError

    def set_final_amount(self, *, arqueo_id: int, legajo: str, monto_final: float) -> bool:
        raise NotImplementedError

    def confirm_allocations(self, arqueo_id: int, rows: Sequence[AllocationRow]) -> int:
        """Delete the record's confirmed rows, insert `rows`, drop its proposals.

        Scoped to one record. Returns the number of rows inserted.
        """

        raise NotImplementedError

    def list_allocations(self, arqueo_id: int) -> Sequence[ConfirmedAllocation]:
        raise NotImplementedError

    def list_employee_allocations(self, *, legajo: str, start: date, end: date) -> Sequence[EmployeeAllocationLine]:
        raise NotImplementedError
