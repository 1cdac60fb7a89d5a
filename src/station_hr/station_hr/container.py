from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .core.enums import CandidateSource
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .patterns.mysql_pattern_repository import MySQLPatternRepository
from .patterns.repository import PatternRepository
from .reconciliation.allocator import ReconciliationAllocator
from .reconciliation.factory import CandidateStrategyFactory
from .reconciliation.mysql_reconciliation_repository import MySQLReconciliationRepository
from .reconciliation.repository import ReconciliationRepository
from .schedules.mysql_schedule_repository import MySQLScheduleExceptionRepository
from .schedules.repository import ScheduleExceptionRepository
from .schedules.resolver import ScheduleResolver
from .schedules.service import ScheduleService
from .shifts.mysql_shift_repository import MySQLPositionScheduleRepository
from .shifts.repository import PositionScheduleRepository


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    patterns_repo: PatternRepository
    exceptions_repo: ScheduleExceptionRepository
    positions_repo: PositionScheduleRepository
    attendance_repo: AttendanceRepository
    reconciliation_repo: ReconciliationRepository

    resolver: ScheduleResolver
    schedule_service: ScheduleService
    reconciliation_allocator: ReconciliationAllocator


def wire(
    *,
    employees_repo: EmployeeRepository,
    patterns_repo: PatternRepository,
    exceptions_repo: ScheduleExceptionRepository,
    positions_repo: PositionScheduleRepository,
    attendance_repo: AttendanceRepository,
    reconciliation_repo: ReconciliationRepository,
    allocation_source: CandidateSource | str = CandidateSource.SCHEDULE,
) -> Container:
    """Build services over any repository implementations (MySQL or in-memory)."""
    resolver = ScheduleResolver(employees_repo, patterns_repo, exceptions_repo, positions_repo)
    schedule_service = ScheduleService(resolver, exceptions_repo, patterns_repo, positions_repo)

    strategy = CandidateStrategyFactory(
        resolver=resolver,
        attendance=attendance_repo,
        employees=employees_repo,
    ).for_source(allocation_source)
    reconciliation_allocator = ReconciliationAllocator(reconciliation_repo, strategy)

    return Container(
        employees_repo=employees_repo,
        patterns_repo=patterns_repo,
        exceptions_repo=exceptions_repo,
        positions_repo=positions_repo,
        attendance_repo=attendance_repo,
        reconciliation_repo=reconciliation_repo,
        resolver=resolver,
        schedule_service=schedule_service,
        reconciliation_allocator=reconciliation_allocator,
    )


def build_container(*, db_config: dict, allocation_source: CandidateSource | str = CandidateSource.SCHEDULE) -> Container:
    conn = DatabaseConnection(DBConfig.from_settings(db_config))

    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        patterns_repo=MySQLPatternRepository(conn),
        exceptions_repo=MySQLScheduleExceptionRepository(conn),
        positions_repo=MySQLPositionScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        reconciliation_repo=MySQLReconciliationRepository(conn),
        allocation_source=allocation_source,
    )
