from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceInterval


class AttendanceRepository(Protocol):
    def list_intervals(self, *, start: date, end: date) -> Sequence[AttendanceInterval]:
        """Clock-in/out intervals whose work date falls in [start, end]."""

        raise NotImplementedError
