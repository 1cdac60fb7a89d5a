from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.validators import normalize_legajo, parse_shift_code
from ..core.enums import ScheduleSource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PatternAssignment, RotationPattern
from .repository import PatternRepository


class MySQLPatternRepository(PatternRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_details(self, cur, patron_ids: Sequence[int]) -> dict[int, list[tuple[int, object]]]:
        if not patron_ids:
            return {}
        placeholders = ",".join(["%s"] * len(patron_ids))
        cur.execute(
            f"""
            SELECT patron_id, dia_index, turno
            FROM calendario_patron_detalle
            WHERE patron_id IN ({placeholders})
            """,
            tuple(patron_ids),
        )
        out: dict[int, list[tuple[int, object]]] = {}
        for r in fetchall(cur):
            out.setdefault(int(r["patron_id"]), []).append((int(r["dia_index"]), parse_shift_code(r.get("turno"))))
        return out

    def get_pattern(self, patron_id: int) -> Optional[RotationPattern]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, nombre, ciclo_dias FROM calendario_patrones WHERE id=%s",
                (int(patron_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            details = self._load_details(cur, [int(r["id"])])
            return RotationPattern.from_details(
                patron_id=int(r["id"]),
                nombre=r["nombre"],
                ciclo_dias=int(r["ciclo_dias"]),
                details=details.get(int(r["id"]), []),
            )

    def list_patterns(self) -> Sequence[RotationPattern]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, nombre, ciclo_dias FROM calendario_patrones ORDER BY nombre")
            rows = fetchall(cur)
            details = self._load_details(cur, [int(r["id"]) for r in rows])
            return [
                RotationPattern.from_details(
                    patron_id=int(r["id"]),
                    nombre=r["nombre"],
                    ciclo_dias=int(r["ciclo_dias"]),
                    details=details.get(int(r["id"]), []),
                )
                for r in rows
            ]

    def get_employee_assignment(self, legajo: str) -> Optional[PatternAssignment]:
        legajo = normalize_legajo(legajo)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT legajo, patron_id, fecha_inicio
                FROM calendario_empleado_patron
                WHERE legajo=%s
                """,
                (legajo,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return PatternAssignment(
                patron_id=int(r["patron_id"]),
                fecha_inicio=r["fecha_inicio"],
                source=ScheduleSource.EMPLOYEE_PATTERN,
                legajo=legajo,
            )

    def get_position_assignment(self, puesto: str) -> Optional[PatternAssignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT puesto, patron_id, patron_inicio
                FROM puesto_horarios
                WHERE puesto=%s AND patron_id IS NOT NULL AND patron_inicio IS NOT NULL
                """,
                (puesto,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return PatternAssignment(
                patron_id=int(r["patron_id"]),
                fecha_inicio=r["patron_inicio"],
                source=ScheduleSource.POSITION_PATTERN,
                puesto=r["puesto"],
            )

    def set_employee_assignment(self, *, legajo: str, patron_id: int, fecha_inicio: date) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO calendario_empleado_patron(legajo, patron_id, fecha_inicio)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE patron_id=VALUES(patron_id), fecha_inicio=VALUES(fecha_inicio)
                """,
                (normalize_legajo(legajo), int(patron_id), fecha_inicio),
            )

    def clear_employee_assignment(self, legajo: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM calendario_empleado_patron WHERE legajo=%s", (normalize_legajo(legajo),))
            return cur.rowcount > 0
