from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from ...core.enums import Sector
from ...shifts.model import ShiftWindow
from ..model import Candidate


class CandidateStrategy(ABC):
    """Strategy Pattern: decide who worked a sector's shift window and for how long."""

    @abstractmethod
    def find(self, *, fecha: date, sector: Sector, window: ShiftWindow) -> list[Candidate]:
        """Employees with worked minutes > 0 inside `window` on `fecha`."""

        raise NotImplementedError
