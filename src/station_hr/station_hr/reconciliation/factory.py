from __future__ import annotations

from dataclasses import dataclass

from ..attendance.repository import AttendanceRepository
from ..core.enums import CandidateSource
from ..core.exceptions import ValidationError
from ..employees.repository import EmployeeRepository
from ..schedules.resolver import ScheduleResolver
from .strategies.attendance_strategy import AttendanceCandidateStrategy
from .strategies.base import CandidateStrategy
from .strategies.fallback_strategy import FallbackCandidateStrategy
from .strategies.schedule_strategy import ScheduleCandidateStrategy


@dataclass
class CandidateStrategyFactory:
    """Factory Pattern: choose where allocation candidates come from."""

    resolver: ScheduleResolver
    attendance: AttendanceRepository
    employees: EmployeeRepository

    def for_source(self, source: CandidateSource | str) -> CandidateStrategy:
        try:
            source = CandidateSource(source)
        except ValueError:
            raise ValidationError(f"Fuente de asignación inválida: {source!r}")

        schedule = ScheduleCandidateStrategy(self.resolver)
        if source == CandidateSource.SCHEDULE:
            return schedule

        attendance = AttendanceCandidateStrategy(self.attendance, self.employees)
        if source == CandidateSource.ATTENDANCE:
            return attendance
        return FallbackCandidateStrategy(schedule, attendance)
