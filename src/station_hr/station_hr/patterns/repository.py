from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import PatternAssignment, RotationPattern


class PatternRepository(Protocol):
    def get_pattern(self, patron_id: int) -> Optional[RotationPattern]:
        raise NotImplementedError

    def list_patterns(self) -> Sequence[RotationPattern]:
        raise NotImplementedError

    def get_employee_assignment(self, legajo: str) -> Optional[PatternAssignment]:
        raise NotImplementedError

    def get_position_assignment(self, puesto: str) -> Optional[PatternAssignment]:
        raise NotImplementedError

    def set_employee_assignment(self, *, legajo: str, patron_id: int, fecha_inicio: date) -> None:
        raise NotImplementedError

    def clear_employee_assignment(self, legajo: str) -> bool:
        raise NotImplementedError
