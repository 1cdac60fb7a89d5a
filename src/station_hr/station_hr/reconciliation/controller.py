from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, json_endpoint
from ..common.money import parse_money, round2
from ..common.validators import require_int, require_mapping, require_shift_code
from ..container import Container
from ..core.exceptions import ValidationError
from .allocator import records_by_id
from .model import AllocationRow, ShiftEntry


def _entries_from(data: dict) -> list[ShiftEntry]:
    turnos = data.get("turnos") or []
    if not isinstance(turnos, list):
        raise ValidationError("turnos debe ser una lista")
    return [
        ShiftEntry(
            turno=require_shift_code(t.get("turno")),
            monto_diferencia=parse_money(t.get("monto_diferencia")),
            observaciones=str(t.get("observaciones") or ""),
        )
        for t in (require_mapping(item, "Cada turno") for item in turnos)
    ]


def _rows_from(raw) -> list[AllocationRow]:
    if not isinstance(raw, list):
        raise ValidationError("asignaciones debe ser una lista")
    return [
        AllocationRow(
            legajo=str(r.get("legajo") or "").strip(),
            nombre=str(r.get("nombre") or ""),
            puesto=r.get("puesto") or None,
            minutos=require_int(r.get("minutos") or 0, "Minutos"),
            monto_propuesto=parse_money(r.get("monto_propuesto")),
            monto_final=parse_money(r.get("monto_final")),
        )
        for r in (require_mapping(item, "Cada asignación") for item in raw)
    ]


def register(app: Flask, container: Container) -> None:
    allocator = container.reconciliation_allocator

    @app.post("/api/arqueos/guardar-y-calcular", endpoint="arqueos_calcular")
    @json_endpoint
    def arqueos_calcular():
        data = json_body()
        result = allocator.save_and_calculate(
            fecha=data.get("fecha"),
            sector=data.get("sector"),
            entries=_entries_from(data),
        )
        by_id = records_by_id(result.arqueos)
        return {
            "arqueos": [r.to_dict() for r in result.arqueos],
            "propuestas": [p.to_dict(by_id.get(p.arqueo_id)) for p in result.propuestas],
            "avisos": result.avisos,
        }

    @app.get("/api/arqueos", endpoint="arqueos_del_dia")
    @json_endpoint
    def arqueos_del_dia():
        fecha = parse_iso_date(request.args.get("fecha") or date.today().strftime("%Y-%m-%d"))
        day = allocator.load_for_date(fecha)
        by_id = records_by_id(day.arqueos)
        return {
            "fecha": fecha.strftime("%Y-%m-%d"),
            "arqueos": [r.to_dict() for r in day.arqueos],
            "propuestas": [p.to_dict(by_id.get(p.arqueo_id)) for p in day.propuestas],
            "asignaciones": [a.to_dict() for a in day.asignaciones],
            "control": [b.to_dict() for b in allocator.check_balance_for_date(fecha)],
            "totales": [t.to_dict() for t in allocator.shift_totals(fecha)],
        }

    @app.post("/api/arqueos/<int:arqueo_id>/propuestas/<legajo>", endpoint="arqueos_editar_propuesta")
    @json_endpoint
    def arqueos_editar_propuesta(arqueo_id: int, legajo: str):
        proposal = allocator.edit_proposal(arqueo_id, legajo, json_body().get("monto_final"))
        return {"propuesta": proposal.to_dict()}

    @app.get("/api/arqueos/<int:arqueo_id>/balance", endpoint="arqueos_balance")
    @json_endpoint
    def arqueos_balance(arqueo_id: int):
        return {
            "balance": allocator.check_balance(arqueo_id).to_dict(),
            "estado": allocator.proposal_state(arqueo_id).value,
        }

    @app.post("/api/arqueos/confirmar", endpoint="arqueos_confirmar")
    @json_endpoint
    def arqueos_confirmar():
        data = json_body()
        rows = _rows_from(data["asignaciones"]) if data.get("asignaciones") is not None else None
        return {"guardadas": allocator.confirm(require_int(data.get("arqueo_id"), "arqueo_id"), rows)}

    @app.get("/api/arqueos/empleado", endpoint="arqueos_empleado")
    @json_endpoint
    def arqueos_empleado():
        lines, total = allocator.employee_month_allocations(
            request.args.get("legajo"),
            request.args.get("mes") or date.today().strftime("%Y-%m"),
        )
        return {"items": [line.to_dict() for line in lines], "total": round2(total)}
