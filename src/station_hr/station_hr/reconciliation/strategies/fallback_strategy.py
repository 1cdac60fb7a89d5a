from __future__ import annotations

from datetime import date

from ...core.enums import Sector
from ...shifts.model import ShiftWindow
from ..model import Candidate
from .base import CandidateStrategy


class FallbackCandidateStrategy(CandidateStrategy):
    """First strategy that finds anybody wins."""

    def __init__(self, *strategies: CandidateStrategy):
        self._strategies = strategies

    def find(self, *, fecha: date, sector: Sector, window: ShiftWindow) -> list[Candidate]:
        for strategy in self._strategies:
            found = strategy.find(fecha=fecha, sector=sector, window=window)
            if found:
                return found
        return []
