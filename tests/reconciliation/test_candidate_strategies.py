from datetime import date, datetime

import pytest

from src.station_hr.station_hr.core.enums import CandidateSource, Sector, ShiftCode
from src.station_hr.station_hr.core.exceptions import ValidationError
from src.station_hr.station_hr.reconciliation.factory import CandidateStrategyFactory
from src.station_hr.station_hr.reconciliation.model import ShiftEntry
from src.station_hr.station_hr.reconciliation.strategies.attendance_strategy import AttendanceCandidateStrategy
from src.station_hr.station_hr.reconciliation.strategies.fallback_strategy import FallbackCandidateStrategy
from src.station_hr.station_hr.reconciliation.strategies.schedule_strategy import ScheduleCandidateStrategy
from src.station_hr.station_hr.shifts.model import PositionSchedule, ShiftWindow
from src.station_hr.station_hr.shifts.windows import sector_window

M, T, N, F = ShiftCode.MANIANA, ShiftCode.TARDE, ShiftCode.NOCHE, ShiftCode.FRANCO
FECHA = date(2024, 3, 1)


def _staff(repos):
    repos.patterns.add_pattern(1, "Siempre mañana", [M])
    repos.patterns.add_pattern(2, "Siempre noche", [N])
    repos.patterns.add_pattern(3, "Franco", [F])
    repos.employees.add("101", "Gómez, Ana", Sector.PLAYA, "PLAYERO/A")
    repos.employees.add("102", "Pérez, Luis", Sector.PLAYA, "REFUERZO")
    repos.employees.add("103", "Sosa, Marta", Sector.PLAYA, "PLAYERO/A")
    repos.employees.add("104", "Ruiz, Pablo", Sector.PLAYA, "PLAYERO/A")
    repos.employees.add("201", "Díaz, Carla", Sector.SHOP, "CAJERO/A")
    repos.positions.upsert(PositionSchedule(puesto="PLAYERO/A", patron_id=1, patron_inicio=FECHA))
    repos.positions.upsert(PositionSchedule(puesto="CAJERO/A", patron_id=1, patron_inicio=FECHA))
    repos.positions.upsert(
        PositionSchedule(
            puesto="REFUERZO",
            windows={M: ShiftWindow(start_min=9 * 60, end_min=13 * 60)},
            patron_id=1,
            patron_inicio=FECHA,
        )
    )
    repos.patterns.set_employee_assignment(legajo="103", patron_id=2, fecha_inicio=FECHA)
    repos.patterns.set_employee_assignment(legajo="104", patron_id=3, fecha_inicio=FECHA)


def test_schedule_strategy_weights_by_scheduled_overlap(repos):
    _staff(repos)
    strategy = ScheduleCandidateStrategy(repos.container().resolver)

    found = strategy.find(fecha=FECHA, sector=Sector.PLAYA, window=sector_window(Sector.PLAYA, M))

    assert {c.legajo: c.minutos for c in found} == {"101": 480, "102": 240}


def test_schedule_strategy_night_shift(repos):
    _staff(repos)
    strategy = ScheduleCandidateStrategy(repos.container().resolver)

    found = strategy.find(fecha=FECHA, sector=Sector.PLAYA, window=sector_window(Sector.PLAYA, N))

    assert [(c.legajo, c.minutos) for c in found] == [("103", 480)]


def test_schedule_driven_allocation_end_to_end(repos):
    _staff(repos)
    allocator = repos.container("schedule").reconciliation_allocator

    result = allocator.save_and_calculate(
        fecha=FECHA, sector="playa", entries=[ShiftEntry(turno=M, monto_diferencia=1500)]
    )

    assert {p.legajo: p.monto_propuesto for p in result.propuestas} == {
        "101": pytest.approx(1000.0),
        "102": pytest.approx(500.0),
    }


def test_attendance_night_interval_counts_fully(repos):
    _staff(repos)
    repos.attendance.add("103", datetime(2024, 3, 1, 22, 0), datetime(2024, 3, 2, 4, 30))
    strategy = AttendanceCandidateStrategy(repos.attendance, repos.employees)

    found = strategy.find(fecha=FECHA, sector=Sector.PLAYA, window=sector_window(Sector.PLAYA, N))

    assert [(c.legajo, c.minutos) for c in found] == [("103", 390)]


def test_attendance_includes_previous_night_and_sums_intervals(repos):
    _staff(repos)
    repos.attendance.add("101", datetime(2024, 2, 29, 22, 0), datetime(2024, 3, 1, 6, 0))
    repos.attendance.add("101", datetime(2024, 3, 1, 10, 0), datetime(2024, 3, 1, 12, 0))
    repos.attendance.add("102", datetime(2024, 3, 1, 5, 0), None)
    repos.attendance.add("201", datetime(2024, 3, 1, 6, 0), datetime(2024, 3, 1, 14, 0))
    strategy = AttendanceCandidateStrategy(repos.attendance, repos.employees)

    found = strategy.find(fecha=FECHA, sector=Sector.PLAYA, window=sector_window(Sector.PLAYA, M))

    assert [(c.legajo, c.minutos) for c in found] == [("101", 60 + 120)]


def test_fallback_uses_attendance_when_nobody_is_scheduled(repos):
    repos.employees.add("101", "Gómez, Ana", Sector.PLAYA, "PLAYERO/A")
    repos.attendance.add("101", datetime(2024, 3, 1, 13, 0), datetime(2024, 3, 1, 21, 0))
    strategy = CandidateStrategyFactory(
        resolver=repos.container().resolver,
        attendance=repos.attendance,
        employees=repos.employees,
    ).for_source("schedule_then_attendance")

    found = strategy.find(fecha=FECHA, sector=Sector.PLAYA, window=sector_window(Sector.PLAYA, T))

    assert isinstance(strategy, FallbackCandidateStrategy)
    assert [(c.legajo, c.minutos) for c in found] == [("101", 480)]


def test_factory_by_source(repos):
    factory = CandidateStrategyFactory(
        resolver=repos.container().resolver,
        attendance=repos.attendance,
        employees=repos.employees,
    )

    assert isinstance(factory.for_source(CandidateSource.SCHEDULE), ScheduleCandidateStrategy)
    assert isinstance(factory.for_source("attendance"), AttendanceCandidateStrategy)
    with pytest.raises(ValidationError):
        factory.for_source("planilla")
