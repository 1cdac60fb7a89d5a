from __future__ import annotations

from datetime import date, timedelta

from ...attendance.repository import AttendanceRepository
from ...common.datetime_utils import minutes_since, overlap_minutes
from ...core.enums import Sector
from ...employees.repository import EmployeeRepository
from ...shifts.model import ShiftWindow
from ..model import Candidate
from .base import CandidateStrategy


class AttendanceCandidateStrategy(CandidateStrategy):
    """Weight = overlap between actual clock-in/out and the shift window.

    The previous day's intervals are included so a shift that runs past
    midnight still counts against the next morning.
    """

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def find(self, *, fecha: date, sector: Sector, window: ShiftWindow) -> list[Candidate]:
        staff = {e.legajo: e for e in self._employees.list_active() if e.sector == sector}

        minutes_by_legajo: dict[str, int] = {}
        for it in self._attendance.list_intervals(start=fecha - timedelta(days=1), end=fecha):
            if it.legajo not in staff or it.salida is None:
                continue
            minutes = overlap_minutes(
                minutes_since(fecha, it.entrada),
                minutes_since(fecha, it.salida),
                window.start_min,
                window.end_min,
            )
            if minutes > 0:
                minutes_by_legajo[it.legajo] = minutes_by_legajo.get(it.legajo, 0) + minutes

        return [
            Candidate(
                legajo=legajo,
                nombre=staff[legajo].nombre,
                puesto=staff[legajo].puesto,
                minutos=minutes,
            )
            for legajo, minutes in minutes_by_legajo.items()
        ]
