from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.constants import BALANCE_TOLERANCE
from ..core.enums import Sector, ShiftCode

# Float noise allowance on top of the tolerance; keeps |diff| == 0.01 balanced.
_EPSILON = 1e-9


@dataclass(frozen=True)
class ShiftEntry:
    """Monto de diferencia de caja y observaciones cargados para un turno."""

    turno: ShiftCode
    monto_diferencia: float = 0.0
    observaciones: str = ""

    @property
    def is_trivial(self) -> bool:
        return abs(self.monto_diferencia) == 0 and not (self.observaciones or "").strip()


@dataclass(frozen=True)
class ReconciliationRecord:
    """Arqueo: un registro por sector+fecha+turno."""

    arqueo_id: int
    sector: Sector
    fecha: date
    turno: ShiftCode
    monto_diferencia: float
    observaciones: str = ""
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.arqueo_id,
            "sector": self.sector.value,
            "fecha": self.fecha.strftime("%Y-%m-%d"),
            "turno": self.turno.value,
            "monto_diferencia": self.monto_diferencia,
            "observaciones": self.observaciones or "",
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M:%S") if self.created_at else None,
        }


@dataclass(frozen=True)
class Candidate:
    """Empleado que trabajó (total o parcialmente) la franja de un turno."""

    legajo: str
    nombre: str
    puesto: Optional[str]
    minutos: int


@dataclass(frozen=True)
class AllocationProposal:
    """Fila de propuesta; `monto_final` None significa "sin editar" (vale el propuesto)."""

    arqueo_id: int
    legajo: str
    nombre: str
    puesto: Optional[str]
    minutos: int
    monto_propuesto: float
    monto_final: Optional[float] = None

    @property
    def edited(self) -> bool:
        return self.monto_final is not None

    @property
    def final_amount(self) -> float:
        return self.monto_final if self.monto_final is not None else self.monto_propuesto

    def to_row(self) -> "AllocationRow":
        return AllocationRow(
            legajo=self.legajo,
            nombre=self.nombre,
            puesto=self.puesto,
            minutos=self.minutos,
            monto_propuesto=self.monto_propuesto,
            monto_final=self.final_amount,
        )

    def to_dict(self, record: Optional[ReconciliationRecord] = None) -> dict:
        d = {
            "arqueo_id": self.arqueo_id,
            "legajo": self.legajo,
            "nombre": self.nombre,
            "puesto": self.puesto or "",
            "minutos": self.minutos,
            "monto_propuesto": self.monto_propuesto,
            "monto_final": self.final_amount,
            "editado": self.edited,
        }
        if record is not None:
            d["sector"] = record.sector.value
            d["turno"] = record.turno.value
        return d


@dataclass(frozen=True)
class AllocationRow:
    """Fila final enviada a confirmar."""

    legajo: str
    nombre: str = ""
    puesto: Optional[str] = None
    minutos: int = 0
    monto_propuesto: float = 0.0
    monto_final: float = 0.0


@dataclass(frozen=True)
class ConfirmedAllocation:
    arqueo_id: int
    legajo: str
    nombre: str
    puesto: Optional[str]
    minutos: int
    monto_propuesto: float
    monto_final: float

    def to_dict(self) -> dict:
        return {
            "arqueo_id": self.arqueo_id,
            "legajo": self.legajo,
            "nombre": self.nombre,
            "puesto": self.puesto or "",
            "minutos": self.minutos,
            "monto_propuesto": self.monto_propuesto,
            "monto_final": self.monto_final,
        }


@dataclass(frozen=True)
class BalanceCheck:
    """Control objetivo vs asignado de un grupo sector+turno.

    `difference` = asignado - objetivo (positivo: sobre-asignado).
    """

    arqueo_id: int
    sector: Sector
    turno: ShiftCode
    objetivo: float
    asignado: float

    @property
    def difference(self) -> float:
        return self.asignado - self.objetivo

    @property
    def balanced(self) -> bool:
        return abs(self.difference) <= BALANCE_TOLERANCE + _EPSILON

    def to_dict(self) -> dict:
        return {
            "arqueo_id": self.arqueo_id,
            "sector": self.sector.value,
            "turno": self.turno.value,
            "objetivo": round(self.objetivo, 2),
            "asignado": round(self.asignado, 2),
            "diferencia": round(self.difference, 2),
            "cuadra": self.balanced,
        }


@dataclass(frozen=True)
class CalculationResult:
    arqueos: list[ReconciliationRecord] = field(default_factory=list)
    propuestas: list[AllocationProposal] = field(default_factory=list)
    avisos: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReconciliationDay:
    fecha: date
    arqueos: list[ReconciliationRecord]
    propuestas: list[AllocationProposal]
    asignaciones: list[ConfirmedAllocation]


@dataclass(frozen=True)
class EmployeeAllocationLine:
    arqueo_id: int
    fecha: date
    sector: Sector
    turno: ShiftCode
    minutos: int
    monto_final: float

    def to_dict(self) -> dict:
        return {
            "arqueo_id": self.arqueo_id,
            "fecha": self.fecha.strftime("%Y-%m-%d"),
            "sector": self.sector.value,
            "turno": self.turno.value,
            "minutos": self.minutos,
            "monto_final": self.monto_final,
        }


@dataclass(frozen=True)
class ShiftTotal:
    """Objetivo de un turno sumando playa y shop."""

    turno: ShiftCode
    playa: float = 0.0
    shop: float = 0.0

    @property
    def total(self) -> float:
        return self.playa + self.shop

    def to_dict(self) -> dict:
        return {
            "turno": self.turno.value,
            "playa": round(self.playa, 2),
            "shop": round(self.shop, 2),
            "total": round(self.total, 2),
        }
