from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import normalize_legajo, parse_sector
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_model(r: dict) -> Employee:
        return Employee(
            legajo=normalize_legajo(r["legajo"]),
            nombre=r.get("nombre") or "",
            sector=parse_sector(r.get("sector")),
            puesto=(r.get("puesto") or "").strip() or None,
            activo=bool(r.get("activo", True)),
        )

    def get_by_legajo(self, legajo: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT legajo, nombre, sector, puesto, activo
                FROM empleados
                WHERE legajo=%s
                """,
                (normalize_legajo(legajo),),
            )
            r = fetchone(cur)
            return self._to_model(r) if r else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT legajo, nombre, sector, puesto, activo
                FROM empleados
                WHERE activo=1
                ORDER BY CAST(legajo AS UNSIGNED), legajo
                """
            )
            return [self._to_model(r) for r in fetchall(cur)]
