from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from ..common.datetime_utils import days_between
from ..core.enums import ScheduleSource, ShiftCode


@dataclass(frozen=True)
class RotationPattern:
    """Patrón rotativo: tabla fija de `ciclo_dias` posiciones indexada por dayIndex.

    Una posición vacía (None) se lee como FRANCO.
    """

    patron_id: int
    nombre: str
    ciclo_dias: int
    days: Tuple[Optional[ShiftCode], ...] = ()

    @classmethod
    def from_details(cls, *, patron_id: int, nombre: str, ciclo_dias: int, details) -> "RotationPattern":
        """Build the lookup table from (dia_index, code) rows; out-of-range rows are dropped."""
        table: list[Optional[ShiftCode]] = [None] * max(int(ciclo_dias), 0)
        for idx, code in details:
            if 0 <= int(idx) < len(table):
                table[int(idx)] = code
        return cls(patron_id=int(patron_id), nombre=nombre, ciclo_dias=int(ciclo_dias), days=tuple(table))

    def day_index(self, anchor: date, target: date) -> int:
        c = self.ciclo_dias
        return ((days_between(anchor, target) % c) + c) % c

    def code_at(self, index: int) -> ShiftCode:
        if 0 <= index < len(self.days):
            return self.days[index] or ShiftCode.FRANCO
        return ShiftCode.FRANCO


@dataclass(frozen=True)
class PatternAssignment:
    """Vínculo empleado-o-puesto -> patrón, anclado en `fecha_inicio`."""

    patron_id: int
    fecha_inicio: date
    source: ScheduleSource
    legajo: Optional[str] = None
    puesto: Optional[str] = None


@dataclass(frozen=True)
class EffectivePattern:
    assignment: PatternAssignment
    pattern: RotationPattern

    @property
    def fuente(self) -> str:
        return "EMPLEADO" if self.assignment.source == ScheduleSource.EMPLOYEE_PATTERN else "PUESTO"
