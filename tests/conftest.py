from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional

import pytest

from src.station_hr.station_hr.attendance.model import AttendanceInterval
from src.station_hr.station_hr.container import Container, wire
from src.station_hr.station_hr.core.enums import ExceptionType, ScheduleSource, Sector, ShiftCode
from src.station_hr.station_hr.employees.model import Employee
from src.station_hr.station_hr.patterns.model import PatternAssignment, RotationPattern
from src.station_hr.station_hr.reconciliation.model import (
    AllocationProposal,
    AllocationRow,
    ConfirmedAllocation,
    EmployeeAllocationLine,
    ReconciliationRecord,
)
from src.station_hr.station_hr.schedules.model import ScheduleException
from src.station_hr.station_hr.shifts.model import PositionSchedule


class InMemoryEmployees:
    def __init__(self, employees: list[Employee] | None = None):
        self.employees = list(employees or [])

    def add(self, legajo: str, nombre: str, sector: Sector, puesto: Optional[str] = None, activo: bool = True) -> Employee:
        e = Employee(legajo=legajo, nombre=nombre, sector=sector, puesto=puesto, activo=activo)
        self.employees.append(e)
        return e

    def get_by_legajo(self, legajo: str) -> Optional[Employee]:
        return next((e for e in self.employees if e.legajo == legajo), None)

    def list_active(self):
        return [e for e in self.employees if e.activo]


class InMemoryPositions:
    def __init__(self):
        self.by_puesto: dict[str, PositionSchedule] = {}

    def get_for_position(self, puesto: str) -> Optional[PositionSchedule]:
        return self.by_puesto.get(puesto)

    def list_all(self):
        return [self.by_puesto[k] for k in sorted(self.by_puesto)]

    def upsert(self, schedule: PositionSchedule) -> None:
        self.by_puesto[schedule.puesto] = schedule

    def delete(self, puesto: str) -> bool:
        return self.by_puesto.pop(puesto, None) is not None


class InMemoryPatterns:
    """Position assignments are read from the positions fake, as the MySQL repo reads puesto_horarios."""

    def __init__(self, positions: InMemoryPositions):
        self.positions = positions
        self.patterns: dict[int, RotationPattern] = {}
        self.employee_assignments: dict[str, PatternAssignment] = {}

    def add_pattern(self, patron_id: int, nombre: str, codes: list[Optional[ShiftCode]]) -> RotationPattern:
        pattern = RotationPattern.from_details(
            patron_id=patron_id,
            nombre=nombre,
            ciclo_dias=len(codes),
            details=list(enumerate(codes)),
        )
        self.patterns[patron_id] = pattern
        return pattern

    def get_pattern(self, patron_id: int) -> Optional[RotationPattern]:
        return self.patterns.get(patron_id)

    def list_patterns(self):
        return sorted(self.patterns.values(), key=lambda p: p.nombre)

    def get_employee_assignment(self, legajo: str) -> Optional[PatternAssignment]:
        return self.employee_assignments.get(legajo)

    def get_position_assignment(self, puesto: str) -> Optional[PatternAssignment]:
        p = self.positions.get_for_position(puesto)
        if p is None or not p.patron_id or p.patron_inicio is None:
            return None
        return PatternAssignment(
            patron_id=p.patron_id,
            fecha_inicio=p.patron_inicio,
            source=ScheduleSource.POSITION_PATTERN,
            puesto=puesto,
        )

    def set_employee_assignment(self, *, legajo: str, patron_id: int, fecha_inicio: date) -> None:
        self.employee_assignments[legajo] = PatternAssignment(
            patron_id=patron_id,
            fecha_inicio=fecha_inicio,
            source=ScheduleSource.EMPLOYEE_PATTERN,
            legajo=legajo,
        )

    def clear_employee_assignment(self, legajo: str) -> bool:
        return self.employee_assignments.pop(legajo, None) is not None


class InMemoryExceptions:
    def __init__(self):
        self.by_key: dict[tuple[str, date], ScheduleException] = {}
        self._id = 0

    def get_for_employee_and_date(self, *, legajo: str, fecha: date) -> Optional[ScheduleException]:
        return self.by_key.get((legajo, fecha))

    def get_by_id(self, exception_id: int) -> Optional[ScheduleException]:
        return next((ex for ex in self.by_key.values() if ex.exception_id == exception_id), None)

    def list_range(self, *, start: date, end: date, legajo: Optional[str] = None):
        return [
            ex
            for ex in self.by_key.values()
            if start <= ex.fecha <= end and (legajo is None or ex.legajo == legajo)
        ]

    def upsert(
        self,
        *,
        legajo: str,
        fecha: date,
        tipo: ExceptionType,
        puesto_override: Optional[str] = None,
        turno_override: Optional[ShiftCode] = None,
        motivo: Optional[str] = None,
    ) -> int:
        existing = self.by_key.get((legajo, fecha))
        if existing is not None:
            exception_id = existing.exception_id
        else:
            self._id += 1
            exception_id = self._id
        self.by_key[(legajo, fecha)] = ScheduleException(
            exception_id=exception_id,
            legajo=legajo,
            fecha=fecha,
            tipo=tipo,
            puesto_override=puesto_override,
            turno_override=turno_override,
            motivo=motivo,
        )
        return exception_id

    def delete(self, exception_id: int) -> bool:
        for key, ex in list(self.by_key.items()):
            if ex.exception_id == exception_id:
                del self.by_key[key]
                return True
        return False


class InMemoryAttendance:
    def __init__(self):
        self.intervals: list[AttendanceInterval] = []

    def add(self, legajo: str, entrada: datetime, salida: Optional[datetime]) -> None:
        self.intervals.append(AttendanceInterval(legajo=legajo, fecha=entrada.date(), entrada=entrada, salida=salida))

    def list_intervals(self, *, start: date, end: date):
        return [it for it in self.intervals if start <= it.fecha <= end]


class InMemoryReconciliation:
    def __init__(self):
        self.records: dict[int, ReconciliationRecord] = {}
        self.proposals: dict[int, list[AllocationProposal]] = {}
        self.allocations: dict[int, list[ConfirmedAllocation]] = {}
        self.confirm_calls = 0
        self._id = 0

    def upsert_record(self, *, sector, fecha, turno, monto_diferencia, observaciones) -> int:
        existing = next(
            (r for r in self.records.values() if (r.sector, r.fecha, r.turno) == (sector, fecha, turno)),
            None,
        )
        if existing is not None:
            arqueo_id = existing.arqueo_id
        else:
            self._id += 1
            arqueo_id = self._id
        self.records[arqueo_id] = ReconciliationRecord(
            arqueo_id=arqueo_id,
            sector=sector,
            fecha=fecha,
            turno=turno,
            monto_diferencia=float(monto_diferencia),
            observaciones=observaciones,
            created_at=datetime(2024, 3, 1, 12, 0),
        )
        return arqueo_id

    def get_record(self, arqueo_id: int) -> Optional[ReconciliationRecord]:
        return self.records.get(arqueo_id)

    def list_records(self, *, fecha: date):
        return [r for r in self.records.values() if r.fecha == fecha]

    def replace_proposals(self, arqueo_id: int, proposals) -> None:
        self.proposals[arqueo_id] = list(proposals)

    def list_proposals(self, arqueo_id: int):
        return list(self.proposals.get(arqueo_id, []))

    def set_final_amount(self, *, arqueo_id: int, legajo: str, monto_final: float) -> bool:
        rows = self.proposals.get(arqueo_id, [])
        for i, p in enumerate(rows):
            if p.legajo == legajo:
                rows[i] = replace(p, monto_final=monto_final)
                return True
        return False

    def confirm_allocations(self, arqueo_id: int, rows: list[AllocationRow]) -> int:
        self.confirm_calls += 1
        self.allocations[arqueo_id] = [
            ConfirmedAllocation(
                arqueo_id=arqueo_id,
                legajo=r.legajo,
                nombre=r.nombre,
                puesto=r.puesto,
                minutos=r.minutos,
                monto_propuesto=r.monto_propuesto,
                monto_final=r.monto_final,
            )
            for r in rows
        ]
        self.proposals.pop(arqueo_id, None)
        return len(rows)

    def list_allocations(self, arqueo_id: int):
        return list(self.allocations.get(arqueo_id, []))

    def list_employee_allocations(self, *, legajo: str, start: date, end: date):
        out = []
        for arqueo_id, rows in self.allocations.items():
            record = self.records[arqueo_id]
            if not start <= record.fecha <= end:
                continue
            for a in rows:
                if a.legajo == legajo:
                    out.append(
                        EmployeeAllocationLine(
                            arqueo_id=arqueo_id,
                            fecha=record.fecha,
                            sector=record.sector,
                            turno=record.turno,
                            minutos=a.minutos,
                            monto_final=a.monto_final,
                        )
                    )
        return out


class Repos:
    def __init__(self):
        self.employees = InMemoryEmployees()
        self.positions = InMemoryPositions()
        self.patterns = InMemoryPatterns(self.positions)
        self.exceptions = InMemoryExceptions()
        self.attendance = InMemoryAttendance()
        self.reconciliation = InMemoryReconciliation()

    def container(self, allocation_source: str = "schedule") -> Container:
        return wire(
            employees_repo=self.employees,
            patterns_repo=self.patterns,
            exceptions_repo=self.exceptions,
            positions_repo=self.positions,
            attendance_repo=self.attendance,
            reconciliation_repo=self.reconciliation,
            allocation_source=allocation_source,
        )


@pytest.fixture
def repos() -> Repos:
    return Repos()


@pytest.fixture
def container(repos: Repos) -> Container:
    return repos.container()
