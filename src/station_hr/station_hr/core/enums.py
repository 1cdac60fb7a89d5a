from __future__ import annotations

from enum import Enum


class Sector(str, Enum):
    """Sectores del negocio: playa (forecourt) y shop."""

    PLAYA = "playa"
    SHOP = "shop"


class ShiftCode(str, Enum):
    """Código de turno efectivo de un día."""

    MANIANA = "MANIANA"
    TARDE = "TARDE"
    NOCHE = "NOCHE"
    FRANCO = "FRANCO"
    AUSENCIA = "AUSENCIA"

    @property
    def is_working(self) -> bool:
        return self in {ShiftCode.MANIANA, ShiftCode.TARDE, ShiftCode.NOCHE}


class ExceptionType(str, Enum):
    """Tipo de excepción de calendario."""

    CAMBIO = "CAMBIO"
    VACACIONES = "VACACIONES"
    LICENCIA = "LICENCIA"
    ENFERMEDAD = "ENFERMEDAD"
    PERMISO = "PERMISO"
    FRANCO_EXTRA = "FRANCO_EXTRA"

    @property
    def is_absence(self) -> bool:
        return self in {
            ExceptionType.VACACIONES,
            ExceptionType.LICENCIA,
            ExceptionType.ENFERMEDAD,
            ExceptionType.PERMISO,
        }


class ScheduleSource(str, Enum):
    """De dónde sale el turno resuelto de un día."""

    EXCEPTION = "exception"
    EMPLOYEE_PATTERN = "employee-override-pattern"
    POSITION_PATTERN = "position-pattern"
    NONE = "none"


class CandidateSource(str, Enum):
    """Fuente de empleados para repartir un arqueo."""

    SCHEDULE = "schedule"
    ATTENDANCE = "attendance"
    SCHEDULE_THEN_ATTENDANCE = "schedule_then_attendance"


class ProposalState(str, Enum):
    NONE = "NONE"
    PROPOSED = "PROPOSED"
    EDITED = "EDITED"
    CONFIRMED = "CONFIRMED"
