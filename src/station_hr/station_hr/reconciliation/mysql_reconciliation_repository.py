from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.validators import normalize_legajo
from ..core.enums import Sector, ShiftCode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import (
    AllocationProposal,
    AllocationRow,
    ConfirmedAllocation,
    EmployeeAllocationLine,
    ReconciliationRecord,
)
from .repository import ReconciliationRepository


def _to_record(r: dict) -> ReconciliationRecord:
    return ReconciliationRecord(
        arqueo_id=int(r["id"]),
        sector=Sector(r["sector"]),
        fecha=r["fecha"],
        turno=ShiftCode(r["turno"]),
        monto_diferencia=float(r.get("monto_diferencia") or 0),
        observaciones=r.get("observaciones") or "",
        created_at=r.get("created_at"),
    )


class MySQLReconciliationRepository(ReconciliationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert_record(
        self,
        *,
        sector: Sector,
        fecha: date,
        turno: ShiftCode,
        monto_diferencia: float,
        observaciones: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO arqueos(sector, fecha, turno, monto_diferencia, observaciones)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    monto_diferencia=VALUES(monto_diferencia), observaciones=VALUES(observaciones)
                """,
                (sector.value, fecha, turno.value, float(monto_diferencia), observaciones or ""),
            )

            # If it was an update, lastrowid can be 0; fetch id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT id FROM arqueos WHERE sector=%s AND fecha=%s AND turno=%s",
                (sector.value, fecha, turno.value),
            )
            r = fetchone(cur)
            return int(r["id"]) if r else 0

    def get_record(self, arqueo_id: int) -> Optional[ReconciliationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, sector, fecha, turno, monto_diferencia, observaciones, created_at
                FROM arqueos
                WHERE id=%s
                """,
                (int(arqueo_id),),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_records(self, *, fecha: date) -> Sequence[ReconciliationRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, sector, fecha, turno, monto_diferencia, observaciones, created_at
                FROM arqueos
                WHERE fecha=%s
                ORDER BY id ASC
                """,
                (fecha,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def replace_proposals(self, arqueo_id: int, proposals: Sequence[AllocationProposal]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM arqueo_propuestas WHERE arqueo_id=%s", (int(arqueo_id),))
            for p in proposals:
                cur.execute(
                    """
                    INSERT INTO arqueo_propuestas(arqueo_id, legajo, nombre, puesto, minutos, monto_propuesto, monto_final)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (int(arqueo_id), p.legajo, p.nombre, p.puesto, int(p.minutos), p.monto_propuesto, p.monto_final),
                )

    def list_proposals(self, arqueo_id: int) -> Sequence[AllocationProposal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT arqueo_id, legajo, nombre, puesto, minutos, monto_propuesto, monto_final
                FROM arqueo_propuestas
                WHERE arqueo_id=%s
                ORDER BY id ASC
                """,
                (int(arqueo_id),),
            )
            return [
                AllocationProposal(
                    arqueo_id=int(r["arqueo_id"]),
                    legajo=normalize_legajo(r["legajo"]),
                    nombre=r.get("nombre") or "",
                    puesto=r.get("puesto"),
                    minutos=int(r.get("minutos") or 0),
                    monto_propuesto=float(r.get("monto_propuesto") or 0),
                    monto_final=float(r["monto_final"]) if r.get("monto_final") is not None else None,
                )
                for r in fetchall(cur)
            ]

    def set_final_amount(self, *, arqueo_id: int, legajo: str, monto_final: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE arqueo_propuestas SET monto_final=%s WHERE arqueo_id=%s AND legajo=%s",
                (float(monto_final), int(arqueo_id), normalize_legajo(legajo)),
            )
            return cur.rowcount > 0

    def confirm_allocations(self, arqueo_id: int, rows: Sequence[AllocationRow]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM arqueo_asignaciones WHERE arqueo_id=%s", (int(arqueo_id),))
            for row in rows:
                cur.execute(
                    """
                    INSERT INTO arqueo_asignaciones(arqueo_id, legajo, nombre, puesto, minutos, monto_propuesto, monto_final)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(arqueo_id),
                        normalize_legajo(row.legajo),
                        row.nombre,
                        row.puesto,
                        int(row.minutos),
                        float(row.monto_propuesto),
                        float(row.monto_final),
                    ),
                )
            cur.execute("DELETE FROM arqueo_propuestas WHERE arqueo_id=%s", (int(arqueo_id),))
            return len(rows)

    def list_allocations(self, arqueo_id: int) -> Sequence[ConfirmedAllocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT arqueo_id, legajo, nombre, puesto, minutos, monto_propuesto, monto_final
                FROM arqueo_asignaciones
                WHERE arqueo_id=%s
                ORDER BY id ASC
                """,
                (int(arqueo_id),),
            )
            return [
                ConfirmedAllocation(
                    arqueo_id=int(r["arqueo_id"]),
                    legajo=normalize_legajo(r["legajo"]),
                    nombre=r.get("nombre") or "",
                    puesto=r.get("puesto"),
                    minutos=int(r.get("minutos") or 0),
                    monto_propuesto=float(r.get("monto_propuesto") or 0),
                    monto_final=float(r.get("monto_final") or 0),
                )
                for r in fetchall(cur)
            ]

    def list_employee_allocations(self, *, legajo: str, start: date, end: date) -> Sequence[EmployeeAllocationLine]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.id AS arqueo_id, a.fecha, a.sector, a.turno, s.minutos, s.monto_final
                FROM arqueo_asignaciones s
                JOIN arqueos a ON a.id = s.arqueo_id
                WHERE s.legajo=%s AND a.fecha BETWEEN %s AND %s
                ORDER BY a.fecha ASC, a.id ASC
                """,
                (normalize_legajo(legajo), start, end),
            )
            return [
                EmployeeAllocationLine(
                    arqueo_id=int(r["arqueo_id"]),
                    fecha=r["fecha"],
                    sector=Sector(r["sector"]),
                    turno=ShiftCode(r["turno"]),
                    minutos=int(r.get("minutos") or 0),
                    monto_final=float(r.get("monto_final") or 0),
                )
                for r in fetchall(cur)
            ]
