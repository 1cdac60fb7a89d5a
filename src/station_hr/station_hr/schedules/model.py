from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import minutes_to_hhmm
from ..core.enums import ExceptionType, ScheduleSource, Sector, ShiftCode


@dataclass(frozen=True)
class ScheduleException:
    """Excepción de calendario para (legajo, fecha); siempre pisa al patrón."""

    exception_id: int
    legajo: str
    fecha: date
    tipo: ExceptionType
    puesto_override: Optional[str] = None
    turno_override: Optional[ShiftCode] = None
    motivo: Optional[str] = None


@dataclass(frozen=True)
class ResolvedDay:
    """Turno efectivo de un empleado en un día (derivado, nunca persistido).

    `start_min`/`end_min` son minutos desde las 00:00 de `fecha`; el turno
    noche termina en un valor >= 1440.
    """

    fecha: date
    legajo: str
    sector: Optional[Sector]
    puesto: Optional[str]
    turno: Optional[ShiftCode]
    start_min: Optional[int]
    end_min: Optional[int]
    source: ScheduleSource
    exception: Optional[ScheduleException] = None
    nombre: str = ""
    pattern_turno: Optional[ShiftCode] = None

    @property
    def has_window(self) -> bool:
        return self.start_min is not None and self.end_min is not None

    @property
    def horario(self) -> str:
        if not self.has_window:
            return ""
        return f"{minutes_to_hhmm(self.start_min)}-{minutes_to_hhmm(self.end_min)}"

    def to_dict(self) -> dict:
        ex = self.exception
        return {
            "fecha": self.fecha.strftime("%Y-%m-%d"),
            "legajo": self.legajo,
            "nombre": self.nombre,
            "sector": self.sector.value if self.sector else None,
            "puesto": self.puesto or "",
            "turno": self.turno.value if self.turno else None,
            "turno_patron": self.pattern_turno.value if self.pattern_turno else None,
            "hora_inicio_min": self.start_min,
            "hora_fin_min": self.end_min,
            "horario": self.horario,
            "fuente": self.source.value,
            "excepcion_id": ex.exception_id if ex else None,
            "excepcion": (
                {
                    "id": ex.exception_id,
                    "tipo": ex.tipo.value,
                    "puesto_override": ex.puesto_override,
                    "turno_override": ex.turno_override.value if ex.turno_override else None,
                    "motivo": ex.motivo,
                }
                if ex
                else None
            ),
        }


@dataclass(frozen=True)
class CoverageWarning:
    """Puesto crítico sin cobertura en un turno."""

    fecha: date
    sector: Sector
    puesto: str
    turno: ShiftCode
    ausentes: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "fecha": self.fecha.strftime("%Y-%m-%d"),
            "sector": self.sector.value,
            "puesto": self.puesto,
            "turno": self.turno.value,
            "ausentes": list(self.ausentes),
        }
