from __future__ import annotations

from datetime import date
from typing import Callable, Dict, Iterator, Optional

from ..common.datetime_utils import iter_dates
from ..common.validators import normalize_legajo
from ..core.enums import ExceptionType, ScheduleSource, Sector, ShiftCode
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..patterns.model import EffectivePattern
from ..patterns.repository import PatternRepository
from ..shifts.model import PositionSchedule
from ..shifts.repository import PositionScheduleRepository
from ..shifts.windows import resolve_window
from .model import ResolvedDay, ScheduleException
from .repository import ScheduleExceptionRepository

PositionLookup = Callable[[Optional[str]], Optional[PositionSchedule]]


class ScheduleResolver:
    """Effective shift per employee per day: exception > employee pattern > position pattern.

    Missing configuration is a valid state and resolves to "no schedule";
    nothing here raises for absent data. Every call reads the repositories
    again, lookups are only shared within one call.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        patterns: PatternRepository,
        exceptions: ScheduleExceptionRepository,
        positions: PositionScheduleRepository,
    ):
        self._employees = employees
        self._patterns = patterns
        self._exceptions = exceptions
        self._positions = positions

    def effective_pattern(self, legajo: str, *, employee: Optional[Employee] = None) -> Optional[EffectivePattern]:
        legajo = normalize_legajo(legajo)
        if employee is None:
            employee = self._employees.get_by_legajo(legajo)

        candidates = [self._patterns.get_employee_assignment(legajo)]
        if employee is not None and employee.puesto:
            candidates.append(self._patterns.get_position_assignment(employee.puesto))

        for assignment in candidates:
            if assignment is None:
                continue
            pattern = self._patterns.get_pattern(assignment.patron_id)
            if pattern is None or pattern.ciclo_dias <= 0:
                continue
            return EffectivePattern(assignment=assignment, pattern=pattern)
        return None

    def _position_lookup(self) -> PositionLookup:
        cache: Dict[str, Optional[PositionSchedule]] = {}

        def lookup(puesto: Optional[str]) -> Optional[PositionSchedule]:
            if not puesto:
                return None
            if puesto not in cache:
                cache[puesto] = self._positions.get_for_position(puesto)
            return cache[puesto]

        return lookup

    def resolve_day(self, legajo: str, fecha: date) -> ResolvedDay:
        legajo = normalize_legajo(legajo)
        employee = self._employees.get_by_legajo(legajo)
        return _resolve(
            legajo=legajo,
            fecha=fecha,
            employee=employee,
            exception=self._exceptions.get_for_employee_and_date(legajo=legajo, fecha=fecha),
            effective=self.effective_pattern(legajo, employee=employee),
            positions=self._position_lookup(),
        )

    def resolve_range(self, legajo: str, start: date, end: date) -> "ResolvedRange":
        return ResolvedRange(self, normalize_legajo(legajo), start, end)

    def resolve_all(self, start: date, end: date, *, sector: Optional[Sector] = None) -> Iterator[ResolvedDay]:
        """Resolve every active employee (optionally of one sector) over [start, end].

        Ordered by date, then by the registry's employee order.
        """
        employees = [e for e in self._employees.list_active() if sector is None or e.sector == sector]
        exceptions = {(ex.legajo, ex.fecha): ex for ex in self._exceptions.list_range(start=start, end=end)}
        effective = {e.legajo: self.effective_pattern(e.legajo, employee=e) for e in employees}
        positions = self._position_lookup()

        for fecha in iter_dates(start, end):
            for e in employees:
                yield _resolve(
                    legajo=e.legajo,
                    fecha=fecha,
                    employee=e,
                    exception=exceptions.get((e.legajo, fecha)),
                    effective=effective[e.legajo],
                    positions=positions,
                )

    def iter_range(self, legajo: str, start: date, end: date) -> Iterator[ResolvedDay]:
        employee = self._employees.get_by_legajo(legajo)
        effective = self.effective_pattern(legajo, employee=employee)
        exceptions = {ex.fecha: ex for ex in self._exceptions.list_range(start=start, end=end, legajo=legajo)}
        positions = self._position_lookup()

        for fecha in iter_dates(start, end):
            yield _resolve(
                legajo=legajo,
                fecha=fecha,
                employee=employee,
                exception=exceptions.get(fecha),
                effective=effective,
                positions=positions,
            )


class ResolvedRange:
    """Lazy, restartable sequence of ResolvedDay, one per day in [start, end].

    Each iteration reads the repositories again.
    """

    def __init__(self, resolver: ScheduleResolver, legajo: str, start: date, end: date):
        self._resolver = resolver
        self.legajo = legajo
        self.start = start
        self.end = end

    def __iter__(self) -> Iterator[ResolvedDay]:
        return self._resolver.iter_range(self.legajo, self.start, self.end)

    def __len__(self) -> int:
        return max((self.end - self.start).days + 1, 0)


def _pattern_code(effective: Optional[EffectivePattern], fecha: date) -> tuple[Optional[ShiftCode], ScheduleSource]:
    if effective is None:
        return None, ScheduleSource.NONE
    pattern = effective.pattern
    index = pattern.day_index(effective.assignment.fecha_inicio, fecha)
    return pattern.code_at(index), effective.assignment.source


def _apply_exception(
    ex: ScheduleException,
    *,
    base_puesto: Optional[str],
    base_code: Optional[ShiftCode],
) -> tuple[Optional[str], Optional[ShiftCode]]:
    puesto = ex.puesto_override or base_puesto
    if ex.tipo.is_absence:
        return puesto, ShiftCode.AUSENCIA
    if ex.tipo == ExceptionType.FRANCO_EXTRA:
        return puesto, ex.turno_override or ShiftCode.FRANCO
    return puesto, ex.turno_override or base_code


def _resolve(
    *,
    legajo: str,
    fecha: date,
    employee: Optional[Employee],
    exception: Optional[ScheduleException],
    effective: Optional[EffectivePattern],
    positions: PositionLookup,
) -> ResolvedDay:
    sector = employee.sector if employee else None
    puesto = employee.puesto if employee else None
    code, source = _pattern_code(effective, fecha)
    pattern_code = code

    if exception is not None:
        puesto, code = _apply_exception(exception, base_puesto=puesto, base_code=code)
        source = ScheduleSource.EXCEPTION

    window = resolve_window(code, sector=sector, position=positions(puesto))
    return ResolvedDay(
        fecha=fecha,
        legajo=legajo,
        sector=sector,
        puesto=puesto,
        turno=code,
        start_min=window.start_min if window else None,
        end_min=window.end_min if window else None,
        source=source,
        exception=exception,
        nombre=employee.nombre if employee else "",
        pattern_turno=pattern_code,
    )
