from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceInterval:
    """Fichada de un empleado: entrada/salida reales de una jornada.

    `salida` ya viene corrida al día siguiente cuando la jornada cruza la medianoche.
    """

    legajo: str
    fecha: date
    entrada: datetime
    salida: Optional[datetime]
