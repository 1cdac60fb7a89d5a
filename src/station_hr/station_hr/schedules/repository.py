from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ExceptionType, ShiftCode
from .model import ScheduleException


class ScheduleExceptionRepository(Protocol):
    def get_for_employee_and_date(self, *, legajo: str, fecha: date) -> Optional[ScheduleException]:
        raise NotImplementedError

    def get_by_id(self, exception_id: int) -> Optional[ScheduleException]:
        raise NotImplementedError

    def list_range(self, *, start: date, end: date, legajo: Optional[str] = None) -> Sequence[ScheduleException]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        legajo: str,
        fecha: date,
        tipo: ExceptionType,
        puesto_override: Optional[str] = None,
        turno_override: Optional[ShiftCode] = None,
        motivo: Optional[str] = None,
    ) -> int:
        """Create or replace the exception of (legajo, fecha).

        Returns the exception id.
        """

        raise NotImplementedError

    def delete(self, exception_id: int) -> bool:
        raise NotImplementedError
