from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence

from ..common.validators import normalize_legajo
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, time_to_minutes
from .model import AttendanceInterval
from .repository import AttendanceRepository


def _at(fecha: date, value) -> Optional[datetime]:
    minutes = time_to_minutes(value)
    if minutes is None:
        return None
    return datetime.combine(fecha, time()) + timedelta(minutes=minutes)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_intervals(self, *, start: date, end: date) -> Sequence[AttendanceInterval]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT legajo, fecha, hora_entrada, hora_salida
                FROM asistencias
                WHERE fecha BETWEEN %s AND %s AND hora_entrada IS NOT NULL
                ORDER BY fecha ASC, legajo ASC
                """,
                (start, end),
            )
            out: list[AttendanceInterval] = []
            for r in fetchall(cur):
                entrada = _at(r["fecha"], r["hora_entrada"])
                salida = _at(r["fecha"], r.get("hora_salida"))
                if salida is not None and salida <= entrada:
                    salida += timedelta(days=1)
                out.append(
                    AttendanceInterval(
                        legajo=normalize_legajo(r["legajo"]),
                        fecha=r["fecha"],
                        entrada=entrada,
                        salida=salida,
                    )
                )
            return out
