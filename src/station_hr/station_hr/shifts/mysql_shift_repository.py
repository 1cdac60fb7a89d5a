from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import normalize_window
from ..core.enums import ShiftCode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, time_to_minutes
from .model import PositionSchedule, ShiftWindow
from .repository import PositionScheduleRepository

_COLUMNS = {
    ShiftCode.MANIANA: ("manana_start", "manana_end"),
    ShiftCode.TARDE: ("tarde_start", "tarde_end"),
    ShiftCode.NOCHE: ("noche_start", "noche_end"),
}


class MySQLPositionScheduleRepository(PositionScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_model(r: dict) -> PositionSchedule:
        windows = {}
        for code, (start_col, end_col) in _COLUMNS.items():
            bounds = normalize_window(time_to_minutes(r.get(start_col)), time_to_minutes(r.get(end_col)))
            if bounds:
                windows[code] = ShiftWindow(start_min=bounds[0], end_min=bounds[1])
        return PositionSchedule(
            puesto=r["puesto"],
            windows=windows,
            patron_id=int(r["patron_id"]) if r.get("patron_id") else None,
            patron_inicio=r.get("patron_inicio"),
        )

    def get_for_position(self, puesto: str) -> Optional[PositionSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT puesto, manana_start, manana_end, tarde_start, tarde_end,
                       noche_start, noche_end, patron_id, patron_inicio
                FROM puesto_horarios
                WHERE puesto=%s
                """,
                (puesto,),
            )
            r = fetchone(cur)
            return self._to_model(r) if r else None

    def list_all(self) -> Sequence[PositionSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT puesto, manana_start, manana_end, tarde_start, tarde_end,
                       noche_start, noche_end, patron_id, patron_inicio
                FROM puesto_horarios
                ORDER BY puesto
                """
            )
            return [self._to_model(r) for r in fetchall(cur)]

    def upsert(self, schedule: PositionSchedule) -> None:
        params: list[object] = [schedule.puesto]
        for code in (ShiftCode.MANIANA, ShiftCode.TARDE, ShiftCode.NOCHE):
            w = schedule.window_for(code)
            params.append(w.start_min if w else None)
            params.append(w.end_min if w else None)
        params.extend([schedule.patron_id, schedule.patron_inicio])

        with db_cursor(self._conn_factory) as (_, cur):
            # Windows are stored as minutes; TIME columns accept SEC_TO_TIME values past 24:00.
            cur.execute(
                """
                INSERT INTO puesto_horarios(
                    puesto, manana_start, manana_end, tarde_start, tarde_end,
                    noche_start, noche_end, patron_id, patron_inicio)
                VALUES(%s,
                    SEC_TO_TIME(%s*60), SEC_TO_TIME(%s*60),
                    SEC_TO_TIME(%s*60), SEC_TO_TIME(%s*60),
                    SEC_TO_TIME(%s*60), SEC_TO_TIME(%s*60),
                    %s, %s)
                ON DUPLICATE KEY UPDATE
                    manana_start=VALUES(manana_start), manana_end=VALUES(manana_end),
                    tarde_start=VALUES(tarde_start), tarde_end=VALUES(tarde_end),
                    noche_start=VALUES(noche_start), noche_end=VALUES(noche_end),
                    patron_id=VALUES(patron_id), patron_inicio=VALUES(patron_inicio)
                """,
                tuple(params),
            )

    def delete(self, puesto: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM puesto_horarios WHERE puesto=%s", (puesto,))
            return cur.rowcount > 0
