from __future__ import annotations

from datetime import date

from ...common.datetime_utils import overlap_minutes
from ...core.enums import Sector
from ...schedules.resolver import ScheduleResolver
from ...shifts.model import ShiftWindow
from ..model import Candidate
from .base import CandidateStrategy


class ScheduleCandidateStrategy(CandidateStrategy):
    """Weight = overlap between the resolved (scheduled) window and the shift window."""

    def __init__(self, resolver: ScheduleResolver):
        self._resolver = resolver

    def find(self, *, fecha: date, sector: Sector, window: ShiftWindow) -> list[Candidate]:
        out: list[Candidate] = []
        for day in self._resolver.resolve_all(fecha, fecha, sector=sector):
            if not day.has_window:
                continue
            minutes = overlap_minutes(day.start_min, day.end_min, window.start_min, window.end_min)
            if minutes > 0:
                out.append(Candidate(legajo=day.legajo, nombre=day.nombre, puesto=day.puesto, minutos=minutes))
        return out
