from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional

from ..common.datetime_utils import minutes_to_hhmm
from ..core.enums import ShiftCode


@dataclass(frozen=True)
class ShiftWindow:
    """Franja horaria de un turno, en minutos desde las 00:00 del día.

    `end_min` puede superar 1440 (turno noche que termina al día siguiente).
    """

    start_min: int
    end_min: int

    @property
    def minutes(self) -> int:
        return self.end_min - self.start_min

    def label(self) -> str:
        return f"{minutes_to_hhmm(self.start_min)}-{minutes_to_hhmm(self.end_min)}"


@dataclass(frozen=True)
class PositionSchedule:
    """Configuración por puesto: franjas propias y patrón del puesto (opcional)."""

    puesto: str
    windows: Dict[ShiftCode, ShiftWindow] = field(default_factory=dict)
    patron_id: Optional[int] = None
    patron_inicio: Optional[date] = None

    def window_for(self, code: ShiftCode) -> Optional[ShiftWindow]:
        return self.windows.get(code)
