from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Sector


@dataclass(frozen=True)
class Employee:
    """Entidad de dominio: Empleado (solo lectura desde el padrón externo).

    `legajo` ya viene normalizado (ver common.validators.normalize_legajo).
    """

    legajo: str
    nombre: str
    sector: Optional[Sector]
    puesto: Optional[str]
    activo: bool = True
