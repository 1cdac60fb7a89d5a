from __future__ import annotations

from datetime import date, timedelta

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, json_endpoint
from ..common.validators import parse_sector, require_int
from ..core.constants import DEFAULT_RANGE_DAYS
from ..container import Container
from ..shifts.model import PositionSchedule


def _position_to_dict(p: PositionSchedule) -> dict:
    return {
        "puesto": p.puesto,
        "horarios": {code.value: w.label() for code, w in p.windows.items()},
        "patron_id": p.patron_id,
        "patron_inicio": p.patron_inicio.strftime("%Y-%m-%d") if p.patron_inicio else None,
    }


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    def _range_args() -> tuple[date, date]:
        start = parse_iso_date(request.args.get("desde") or date.today().strftime("%Y-%m-%d"), "Desde")
        end_s = request.args.get("hasta")
        end = parse_iso_date(end_s, "Hasta") if end_s else start + timedelta(days=DEFAULT_RANGE_DAYS - 1)
        return start, end

    # --- calendar views ---

    @app.get("/api/calendario/resuelto", endpoint="calendario_resuelto")
    @json_endpoint
    def calendario_resuelto():
        start, end = _range_args()
        days = service.employee_calendar(legajo=request.args.get("legajo"), start=start, end=end)
        return {"dias": [d.to_dict() for d in days]}

    @app.get("/api/calendario/resuelto-mes", endpoint="calendario_resuelto_mes")
    @json_endpoint
    def calendario_resuelto_mes():
        sector = parse_sector(request.args.get("sector"))
        items = service.month_grid(month=request.args.get("mes") or date.today().strftime("%Y-%m"), sector=sector)
        return {"items": [d.to_dict() for d in items]}

    @app.get("/api/calendario/avisos", endpoint="calendario_avisos")
    @json_endpoint
    def calendario_avisos():
        start, end = _range_args()
        items = service.coverage_warnings(start=start, end=end, sector=parse_sector(request.args.get("sector")))
        return {"items": [w.to_dict() for w in items]}

    # --- exceptions ---

    @app.post("/api/calendario/excepciones", endpoint="calendario_excepcion_guardar")
    @json_endpoint
    def calendario_excepcion_guardar():
        data = json_body()
        exception_id = service.save_exception(
            legajo=data.get("legajo"),
            fecha=parse_iso_date(data.get("fecha")),
            tipo=data.get("tipo"),
            puesto_override=data.get("puesto_override"),
            turno_override=data.get("turno_override"),
            motivo=data.get("motivo"),
        )
        return {"id": exception_id}

    @app.delete("/api/calendario/excepciones/<int:exception_id>", endpoint="calendario_excepcion_borrar")
    @json_endpoint
    def calendario_excepcion_borrar(exception_id: int):
        service.delete_exception(exception_id)
        return {}

    # --- patterns ---

    @app.get("/api/patrones", endpoint="patrones")
    @json_endpoint
    def patrones():
        return {
            "items": [
                {"id": p.patron_id, "nombre": p.nombre, "ciclo_dias": p.ciclo_dias}
                for p in service.list_patterns()
            ]
        }

    @app.get("/api/empleados/<legajo>/patron-efectivo", endpoint="patron_efectivo")
    @json_endpoint
    def patron_efectivo(legajo: str):
        effective = service.effective_pattern(legajo)
        if effective is None:
            return {"patron": None}
        return {
            "patron": {
                "id": effective.pattern.patron_id,
                "nombre": effective.pattern.nombre,
                "ciclo_dias": effective.pattern.ciclo_dias,
                "fecha_inicio": effective.assignment.fecha_inicio.strftime("%Y-%m-%d"),
                "fuente": effective.fuente,
            }
        }

    @app.put("/api/empleados/<legajo>/patron", endpoint="patron_empleado_guardar")
    @json_endpoint
    def patron_empleado_guardar(legajo: str):
        data = json_body()
        service.set_employee_pattern(
            legajo=legajo,
            patron_id=require_int(data.get("patron_id"), "Patrón"),
            fecha_inicio=parse_iso_date(data.get("fecha_inicio"), "Fecha de inicio"),
        )
        return {}

    @app.delete("/api/empleados/<legajo>/patron", endpoint="patron_empleado_borrar")
    @json_endpoint
    def patron_empleado_borrar(legajo: str):
        service.clear_employee_pattern(legajo)
        return {}

    # --- position schedules ---

    @app.get("/api/puestos", endpoint="puestos")
    @json_endpoint
    def puestos():
        return {"items": [_position_to_dict(p) for p in service.list_position_schedules()]}

    @app.post("/api/puestos", endpoint="puestos_guardar")
    @json_endpoint
    def puestos_guardar():
        data = json_body()
        patron_inicio = data.get("patron_inicio")
        schedule = service.save_position_schedule(
            puesto=data.get("puesto"),
            manana=data.get("manana"),
            tarde=data.get("tarde"),
            noche=data.get("noche"),
            patron_id=require_int(data["patron_id"], "Patrón") if data.get("patron_id") else None,
            patron_inicio=parse_iso_date(patron_inicio, "Inicio del patrón") if patron_inicio else None,
        )
        return {"puesto": _position_to_dict(schedule)}

    @app.delete("/api/puestos/<path:puesto>", endpoint="puestos_borrar")
    @json_endpoint
    def puestos_borrar(puesto: str):
        service.delete_position_schedule(puesto)
        return {}
