from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.validators import normalize_legajo, parse_shift_code
from ..core.enums import ExceptionType, ShiftCode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ScheduleException
from .repository import ScheduleExceptionRepository


class MySQLScheduleExceptionRepository(ScheduleExceptionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_model(r: dict) -> ScheduleException:
        return ScheduleException(
            exception_id=int(r["id"]),
            legajo=normalize_legajo(r["legajo"]),
            fecha=r["fecha"],
            tipo=ExceptionType(r["tipo"]),
            puesto_override=r.get("puesto_override") or None,
            turno_override=parse_shift_code(r.get("turno_override")),
            motivo=r.get("motivo"),
        )

    def get_for_employee_and_date(self, *, legajo: str, fecha: date) -> Optional[ScheduleException]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, legajo, fecha, tipo, puesto_override, turno_override, motivo
                FROM calendario_excepciones
                WHERE legajo=%s AND fecha=%s
                """,
                (normalize_legajo(legajo), fecha),
            )
            r = fetchone(cur)
            return self._to_model(r) if r else None

    def get_by_id(self, exception_id: int) -> Optional[ScheduleException]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, legajo, fecha, tipo, puesto_override, turno_override, motivo
                FROM calendario_excepciones
                WHERE id=%s
                """,
                (int(exception_id),),
            )
            r = fetchone(cur)
            return self._to_model(r) if r else None

    def list_range(self, *, start: date, end: date, legajo: Optional[str] = None) -> Sequence[ScheduleException]:
        clauses = ["fecha BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if legajo is not None:
            clauses.append("legajo=%s")
            params.append(normalize_legajo(legajo))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, legajo, fecha, tipo, puesto_override, turno_override, motivo
                FROM calendario_excepciones
                WHERE {where}
                ORDER BY fecha ASC, legajo ASC
                """,
                tuple(params),
            )
            return [self._to_model(r) for r in fetchall(cur)]

    def upsert(
        self,
        *,
        legajo: str,
        fecha: date,
        tipo: ExceptionType,
        puesto_override: Optional[str] = None,
        turno_override: Optional[ShiftCode] = None,
        motivo: Optional[str] = None,
    ) -> int:
        legajo = normalize_legajo(legajo)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO calendario_excepciones(legajo, fecha, tipo, puesto_override, turno_override, motivo)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    tipo=VALUES(tipo), puesto_override=VALUES(puesto_override),
                    turno_override=VALUES(turno_override), motivo=VALUES(motivo)
                """,
                (
                    legajo,
                    fecha,
                    tipo.value,
                    puesto_override,
                    turno_override.value if turno_override else None,
                    motivo,
                ),
            )

            # If it was an update, lastrowid can be 0; fetch id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute("SELECT id FROM calendario_excepciones WHERE legajo=%s AND fecha=%s", (legajo, fecha))
            r = fetchone(cur)
            return int(r["id"]) if r else 0

    def delete(self, exception_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM calendario_excepciones WHERE id=%s", (int(exception_id),))
            return cur.rowcount > 0
