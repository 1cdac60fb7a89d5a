from datetime import date, timedelta

from src.station_hr.station_hr.core.enums import ExceptionType, ScheduleSource, Sector, ShiftCode
from src.station_hr.station_hr.schedules.resolver import ScheduleResolver
from src.station_hr.station_hr.shifts.model import PositionSchedule, ShiftWindow

M, T, N, F = ShiftCode.MANIANA, ShiftCode.TARDE, ShiftCode.NOCHE, ShiftCode.FRANCO
ANCHOR = date(2024, 3, 1)


def _setup(repos) -> ScheduleResolver:
    repos.patterns.add_pattern(1, "Rotativo", [M, T, N, F])
    repos.employees.add("101", "Gómez, Ana", Sector.PLAYA, "PLAYERO/A")
    repos.employees.add("102", "Pérez, Luis", Sector.PLAYA, "PLAYERO/A")
    repos.employees.add("201", "Díaz, Carla", Sector.SHOP, "CAJERO/A")
    repos.positions.upsert(PositionSchedule(puesto="PLAYERO/A", patron_id=1, patron_inicio=ANCHOR))
    return repos.container().resolver


def test_position_pattern_with_sector_default_window(repos):
    resolver = _setup(repos)

    day = resolver.resolve_day("101", ANCHOR)

    assert day.turno == M
    assert day.source == ScheduleSource.POSITION_PATTERN
    assert (day.start_min, day.end_min) == (5 * 60, 13 * 60)
    assert day.horario == "05:00-13:00"


def test_employee_pattern_overrides_position_pattern(repos):
    resolver = _setup(repos)
    repos.patterns.set_employee_assignment(legajo="102", patron_id=1, fecha_inicio=ANCHOR + timedelta(days=2))

    day = resolver.resolve_day("102", ANCHOR + timedelta(days=2))

    assert day.turno == M
    assert day.source == ScheduleSource.EMPLOYEE_PATTERN


def test_pattern_is_cyclic_in_both_directions(repos):
    resolver = _setup(repos)

    for offset in range(4):
        base = resolver.resolve_day("101", ANCHOR + timedelta(days=offset)).turno
        for k in range(-5, 6):
            other = resolver.resolve_day("101", ANCHOR + timedelta(days=offset + 4 * k)).turno
            assert other == base


def test_day_before_anchor_wraps_to_end_of_cycle(repos):
    resolver = _setup(repos)

    assert resolver.resolve_day("101", ANCHOR - timedelta(days=1)).turno == F
    assert resolver.resolve_day("101", ANCHOR - timedelta(days=2)).turno == N


def test_exception_beats_any_pattern(repos):
    resolver = _setup(repos)
    repos.patterns.set_employee_assignment(legajo="101", patron_id=1, fecha_inicio=ANCHOR)
    repos.exceptions.upsert(legajo="101", fecha=ANCHOR, tipo=ExceptionType.CAMBIO, turno_override=N)

    day = resolver.resolve_day("101", ANCHOR)

    assert day.source == ScheduleSource.EXCEPTION
    assert day.turno == N
    assert day.pattern_turno == M
    assert (day.start_min, day.end_min) == (21 * 60, 29 * 60)
    assert day.horario == "21:00-05:00"


def test_absence_exception_has_no_window(repos):
    resolver = _setup(repos)
    repos.exceptions.upsert(legajo="101", fecha=ANCHOR, tipo=ExceptionType.VACACIONES, turno_override=T)

    day = resolver.resolve_day("101", ANCHOR)

    assert day.turno == ShiftCode.AUSENCIA
    assert not day.has_window
    assert day.horario == ""


def test_extra_day_off_defaults_to_franco_unless_overridden(repos):
    resolver = _setup(repos)
    repos.exceptions.upsert(legajo="101", fecha=ANCHOR, tipo=ExceptionType.FRANCO_EXTRA)
    repos.exceptions.upsert(legajo="102", fecha=ANCHOR, tipo=ExceptionType.FRANCO_EXTRA, turno_override=T)

    assert resolver.resolve_day("101", ANCHOR).turno == F
    assert resolver.resolve_day("102", ANCHOR).turno == T


def test_change_falls_back_to_pattern_for_blank_fields(repos):
    resolver = _setup(repos)
    repos.exceptions.upsert(legajo="101", fecha=ANCHOR + timedelta(days=1), tipo=ExceptionType.CAMBIO, puesto_override="CAJERO/A")

    day = resolver.resolve_day("101", ANCHOR + timedelta(days=1))

    assert day.turno == T
    assert day.puesto == "CAJERO/A"
    assert day.sector == Sector.PLAYA


def test_no_pattern_resolves_to_no_schedule(repos):
    resolver = _setup(repos)

    day = resolver.resolve_day("201", ANCHOR)
    assert day.turno is None
    assert day.source == ScheduleSource.NONE
    assert not day.has_window

    ghost = resolver.resolve_day("999", ANCHOR)
    assert ghost.source == ScheduleSource.NONE
    assert ghost.sector is None


def test_missing_pattern_row_reads_as_franco(repos):
    resolver = _setup(repos)
    repos.patterns.add_pattern(2, "Corto", [M, None])
    repos.patterns.set_employee_assignment(legajo="201", patron_id=2, fecha_inicio=ANCHOR)

    assert resolver.resolve_day("201", ANCHOR).turno == M
    assert resolver.resolve_day("201", ANCHOR + timedelta(days=1)).turno == F


def test_shop_has_no_night_window(repos):
    resolver = _setup(repos)
    repos.exceptions.upsert(legajo="201", fecha=ANCHOR, tipo=ExceptionType.CAMBIO, turno_override=N)

    day = resolver.resolve_day("201", ANCHOR)

    assert day.turno == N
    assert not day.has_window


def test_position_windows_take_precedence_over_sector_defaults(repos):
    resolver = _setup(repos)
    repos.positions.upsert(
        PositionSchedule(
            puesto="CAJERO/A",
            windows={M: ShiftWindow(start_min=7 * 60, end_min=15 * 60)},
            patron_id=1,
            patron_inicio=ANCHOR,
        )
    )

    morning = resolver.resolve_day("201", ANCHOR)
    afternoon = resolver.resolve_day("201", ANCHOR + timedelta(days=1))

    assert (morning.start_min, morning.end_min) == (7 * 60, 15 * 60)
    assert (afternoon.start_min, afternoon.end_min) == (14 * 60, 22 * 60)


def test_legajo_is_normalized(repos):
    resolver = _setup(repos)

    assert resolver.resolve_day("0101", ANCHOR).legajo == "101"
    assert resolver.resolve_day("0101", ANCHOR).turno == M


def test_resolved_range_is_lazy_and_restartable(repos):
    resolver = _setup(repos)
    week = resolver.resolve_range("101", ANCHOR, ANCHOR + timedelta(days=6))

    first = [d.turno for d in week]
    second = [d.turno for d in week]
    assert len(week) == 7
    assert first == second == [M, T, N, F, M, T, N]

    repos.exceptions.upsert(legajo="101", fecha=ANCHOR, tipo=ExceptionType.ENFERMEDAD)
    assert next(iter(week)).turno == ShiftCode.AUSENCIA


def test_resolve_all_orders_by_date_then_employee_and_filters_sector(repos):
    resolver = _setup(repos)

    rows = list(resolver.resolve_all(ANCHOR, ANCHOR + timedelta(days=1), sector=Sector.PLAYA))

    assert [(d.fecha, d.legajo) for d in rows] == [
        (ANCHOR, "101"),
        (ANCHOR, "102"),
        (ANCHOR + timedelta(days=1), "101"),
        (ANCHOR + timedelta(days=1), "102"),
    ]
    assert all(d.nombre for d in rows)
