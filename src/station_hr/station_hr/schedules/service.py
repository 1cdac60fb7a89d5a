from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import parse_month, parse_time_range
from ..common.validators import (
    normalize_legajo,
    parse_shift_code,
    require_exception_type,
    require_legajo,
    require_non_empty,
)
from ..core.constants import CRITICAL_POSITIONS, SECTOR_SHIFTS
from ..core.enums import Sector, ShiftCode
from ..core.exceptions import NotFoundError, ValidationError
from ..patterns.model import EffectivePattern, RotationPattern
from ..patterns.repository import PatternRepository
from ..shifts.model import PositionSchedule, ShiftWindow
from ..shifts.repository import PositionScheduleRepository
from .model import CoverageWarning, ResolvedDay
from .repository import ScheduleExceptionRepository
from .resolver import ResolvedRange, ScheduleResolver

logger = logging.getLogger(__name__)


def _norm_puesto(value: Optional[str]) -> str:
    return (value or "").strip().upper()


class ScheduleService:
    """Calendar operations on top of the resolver: views, exceptions, pattern and position config."""

    def __init__(
        self,
        resolver: ScheduleResolver,
        exceptions: ScheduleExceptionRepository,
        patterns: PatternRepository,
        positions: PositionScheduleRepository,
    ):
        self._resolver = resolver
        self._exceptions = exceptions
        self._patterns = patterns
        self._positions = positions

    # --- views ---

    def employee_calendar(self, *, legajo: str, start: date, end: date) -> ResolvedRange:
        legajo = require_legajo(legajo)
        if end < start:
            raise ValidationError("La fecha hasta debe ser >= desde")
        return self._resolver.resolve_range(legajo, start, end)

    def month_grid(self, *, month: str, sector: Optional[Sector] = None) -> list[ResolvedDay]:
        first, last = parse_month(month)
        return list(self._resolver.resolve_all(first, last, sector=sector))

    def coverage_warnings(self, *, start: date, end: date, sector: Optional[Sector] = None) -> list[CoverageWarning]:
        if end < start:
            raise ValidationError("La fecha hasta debe ser >= desde")

        by_date: dict[date, list[ResolvedDay]] = defaultdict(list)
        for day in self._resolver.resolve_all(start, end, sector=sector):
            by_date[day.fecha].append(day)

        out: list[CoverageWarning] = []
        for fecha in sorted(by_date):
            out.extend(self._warnings_for_day(fecha, by_date[fecha], sector))
        return out

    @staticmethod
    def _warnings_for_day(fecha: date, days: Iterable[ResolvedDay], sector: Optional[Sector]) -> list[CoverageWarning]:
        days = list(days)
        out: list[CoverageWarning] = []
        for puesto, puesto_sector in CRITICAL_POSITIONS.items():
            if sector is not None and puesto_sector != sector:
                continue
            for code in SECTOR_SHIFTS[puesto_sector]:
                absent = [
                    d.legajo
                    for d in days
                    if _norm_puesto(d.puesto) == puesto and d.pattern_turno == code and d.turno == ShiftCode.AUSENCIA
                ]
                if not absent:
                    continue
                covered = any(_norm_puesto(d.puesto) == puesto and d.turno == code for d in days)
                if not covered:
                    out.append(
                        CoverageWarning(fecha=fecha, sector=puesto_sector, puesto=puesto, turno=code, ausentes=tuple(absent))
                    )
        return out

    # --- exceptions ---

    def save_exception(
        self,
        *,
        legajo: str,
        fecha: date,
        tipo: str,
        puesto_override: Optional[str] = None,
        turno_override: Optional[str] = None,
        motivo: Optional[str] = None,
    ) -> int:
        legajo = require_legajo(legajo)
        if fecha is None:
            raise ValidationError("Fecha es obligatoria")
        tipo_enum = require_exception_type(tipo)

        code: Optional[ShiftCode] = None
        if turno_override and str(turno_override).strip():
            code = parse_shift_code(turno_override)
            if code is None:
                raise ValidationError(f"Turno inválido: {turno_override!r}")
        if tipo_enum.is_absence:
            # An absence has no shift.
            code = None

        exception_id = self._exceptions.upsert(
            legajo=legajo,
            fecha=fecha,
            tipo=tipo_enum,
            puesto_override=(puesto_override or "").strip() or None,
            turno_override=code,
            motivo=(motivo or "").strip() or None,
        )
        logger.info("Exception saved legajo=%s fecha=%s tipo=%s id=%s", legajo, fecha, tipo_enum.value, exception_id)
        return exception_id

    def delete_exception(self, exception_id: int) -> None:
        if not self._exceptions.delete(int(exception_id)):
            raise NotFoundError(f"Excepción {exception_id} inexistente")
        logger.info("Exception deleted id=%s", exception_id)

    # --- patterns ---

    def list_patterns(self) -> list[RotationPattern]:
        return list(self._patterns.list_patterns())

    def effective_pattern(self, legajo: str) -> Optional[EffectivePattern]:
        return self._resolver.effective_pattern(require_legajo(legajo))

    def set_employee_pattern(self, *, legajo: str, patron_id: int, fecha_inicio: date) -> None:
        legajo = require_legajo(legajo)
        if not patron_id or int(patron_id) <= 0:
            raise ValidationError("Patrón es obligatorio")
        if fecha_inicio is None:
            raise ValidationError("Fecha de inicio es obligatoria")
        if self._patterns.get_pattern(int(patron_id)) is None:
            raise NotFoundError(f"Patrón {patron_id} inexistente")

        self._patterns.set_employee_assignment(legajo=legajo, patron_id=int(patron_id), fecha_inicio=fecha_inicio)
        logger.info("Pattern override legajo=%s patron=%s desde=%s", legajo, patron_id, fecha_inicio)

    def clear_employee_pattern(self, legajo: str) -> None:
        if not self._patterns.clear_employee_assignment(normalize_legajo(legajo)):
            raise NotFoundError(f"El legajo {legajo} no tiene patrón propio")

    # --- position schedule configuration ---

    def list_position_schedules(self) -> list[PositionSchedule]:
        return list(self._positions.list_all())

    def save_position_schedule(
        self,
        *,
        puesto: str,
        manana: Optional[str] = None,
        tarde: Optional[str] = None,
        noche: Optional[str] = None,
        patron_id: Optional[int] = None,
        patron_inicio: Optional[date] = None,
    ) -> PositionSchedule:
        puesto = require_non_empty(puesto, "Puesto")

        windows = {}
        for code, text in ((ShiftCode.MANIANA, manana), (ShiftCode.TARDE, tarde), (ShiftCode.NOCHE, noche)):
            bounds = parse_time_range(text)
            if bounds:
                windows[code] = ShiftWindow(start_min=bounds[0], end_min=bounds[1])

        if patron_id:
            if patron_inicio is None:
                raise ValidationError("Fecha de inicio del patrón es obligatoria")
            if self._patterns.get_pattern(int(patron_id)) is None:
                raise NotFoundError(f"Patrón {patron_id} inexistente")

        schedule = PositionSchedule(
            puesto=puesto,
            windows=windows,
            patron_id=int(patron_id) if patron_id else None,
            patron_inicio=patron_inicio if patron_id else None,
        )
        self._positions.upsert(schedule)
        logger.info("Position schedule saved puesto=%s", puesto)
        return schedule

    def delete_position_schedule(self, puesto: str) -> None:
        if not self._positions.delete(puesto):
            raise NotFoundError(f"Sin configuración para el puesto {puesto!r}")
