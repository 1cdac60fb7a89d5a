from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, parse_month
from ..common.money import parse_money
from ..common.validators import require_legajo, require_sector
from ..core.constants import SECTOR_SHIFTS
from ..core.enums import ProposalState, Sector, ShiftCode
from ..core.exceptions import NotFoundError, ReconciliationImbalance, ValidationError
from ..shifts.windows import sector_window
from .model import (
    AllocationProposal,
    AllocationRow,
    BalanceCheck,
    CalculationResult,
    EmployeeAllocationLine,
    ReconciliationDay,
    ReconciliationRecord,
    ShiftEntry,
    ShiftTotal,
)
from .repository import ReconciliationRepository
from .strategies.base import CandidateStrategy

logger = logging.getLogger(__name__)

_SECTOR_ORDER = {Sector.PLAYA: 0, Sector.SHOP: 1}
_SHIFT_ORDER = {ShiftCode.MANIANA: 0, ShiftCode.TARDE: 1, ShiftCode.NOCHE: 2}


def commit_final_amount(proposal: AllocationProposal, raw_text) -> AllocationProposal:
    """Return `proposal` with the final amount parsed from user text (bad text reads as 0)."""
    return replace(proposal, monto_final=parse_money(raw_text))


def _record_order(record: ReconciliationRecord) -> tuple[int, int]:
    return _SECTOR_ORDER.get(record.sector, 9), _SHIFT_ORDER.get(record.turno, 9)


class ReconciliationAllocator:
    """Arqueos: split each shift's cash difference among the employees who worked it.

    Proposed amounts are proportional to minutes worked inside the shift
    window and kept at full precision; no remainder redistribution is done,
    leftover cents are fixed by editing before confirming.
    """

    def __init__(self, records: ReconciliationRepository, strategy: CandidateStrategy):
        self._records = records
        self._strategy = strategy

    # --- calculate ---

    def save_and_calculate(self, *, fecha, sector, entries: Iterable[ShiftEntry]) -> CalculationResult:
        fecha = parse_iso_date(fecha)
        sector = require_sector(sector)
        entries = list(entries)

        allowed = SECTOR_SHIFTS[sector]
        seen: set[ShiftCode] = set()
        for entry in entries:
            if entry.turno not in allowed:
                raise ValidationError(f"Turno {entry.turno.value} no aplica al sector {sector.value}")
            if entry.turno in seen:
                raise ValidationError(f"Turno {entry.turno.value} repetido")
            seen.add(entry.turno)

        records: list[ReconciliationRecord] = []
        proposals: list[AllocationProposal] = []
        avisos: list[str] = []

        for entry in entries:
            if entry.is_trivial:
                logger.debug("Arqueo %s %s %s sin datos, se omite", sector.value, fecha, entry.turno.value)
                continue

            arqueo_id = self._records.upsert_record(
                sector=sector,
                fecha=fecha,
                turno=entry.turno,
                monto_diferencia=entry.monto_diferencia,
                observaciones=(entry.observaciones or "").strip(),
            )
            record = self._records.get_record(arqueo_id)
            if record is None:
                raise NotFoundError(f"Arqueo {arqueo_id} no encontrado luego de guardar")
            records.append(record)
            logger.info("Arqueo %s guardado: %s %s %s = %.2f", arqueo_id, sector.value, fecha, entry.turno.value, record.monto_diferencia)

            rows = self._propose(record)
            if not rows and abs(record.monto_diferencia) > 0:
                aviso = (
                    f"{sector.value} {entry.turno.value} {fecha:%Y-%m-%d}: "
                    f"no se encontraron empleados para repartir {record.monto_diferencia:.2f}"
                )
                logger.warning(aviso)
                avisos.append(aviso)

            self._records.replace_proposals(arqueo_id, rows)
            proposals.extend(rows)

        return CalculationResult(arqueos=records, propuestas=proposals, avisos=avisos)

    def _propose(self, record: ReconciliationRecord) -> list[AllocationProposal]:
        window = sector_window(record.sector, record.turno)
        if window is None:
            return []

        candidates = self._strategy.find(fecha=record.fecha, sector=record.sector, window=window)
        candidates = [c for c in candidates if c.minutos > 0]
        total_minutes = sum(c.minutos for c in candidates)
        if total_minutes <= 0:
            return []

        return [
            AllocationProposal(
                arqueo_id=record.arqueo_id,
                legajo=c.legajo,
                nombre=c.nombre,
                puesto=c.puesto,
                minutos=c.minutos,
                monto_propuesto=record.monto_diferencia * c.minutos / total_minutes,
            )
            for c in sorted(candidates, key=lambda c: (-c.minutos, c.legajo))
        ]

    # --- edit ---

    def _require_record(self, arqueo_id: int) -> ReconciliationRecord:
        record = self._records.get_record(int(arqueo_id))
        if record is None:
            raise NotFoundError(f"Arqueo {arqueo_id} no encontrado")
        return record

    def edit_proposal(self, arqueo_id: int, legajo: str, raw_text) -> AllocationProposal:
        record = self._require_record(arqueo_id)
        legajo = require_legajo(legajo)

        current = next((p for p in self._records.list_proposals(record.arqueo_id) if p.legajo == legajo), None)
        if current is None:
            raise NotFoundError(f"No hay propuesta para el legajo {legajo} en el arqueo {record.arqueo_id}")

        edited = commit_final_amount(current, raw_text)
        self._records.set_final_amount(arqueo_id=record.arqueo_id, legajo=legajo, monto_final=edited.monto_final)
        return edited

    # --- balance / confirm ---

    def _pending_rows(self, record: ReconciliationRecord) -> list[AllocationRow]:
        proposals = self._records.list_proposals(record.arqueo_id)
        if proposals:
            return [p.to_row() for p in proposals]
        return [
            AllocationRow(
                legajo=a.legajo,
                nombre=a.nombre,
                puesto=a.puesto,
                minutos=a.minutos,
                monto_propuesto=a.monto_propuesto,
                monto_final=a.monto_final,
            )
            for a in self._records.list_allocations(record.arqueo_id)
        ]

    @staticmethod
    def _balance(record: ReconciliationRecord, rows: Iterable[AllocationRow]) -> BalanceCheck:
        return BalanceCheck(
            arqueo_id=record.arqueo_id,
            sector=record.sector,
            turno=record.turno,
            objetivo=record.monto_diferencia,
            asignado=sum(float(r.monto_final) for r in rows),
        )

    def check_balance(self, arqueo_id: int) -> BalanceCheck:
        """Objective vs allocated for the record: pending proposals, or the confirmed rows once cleared."""
        record = self._require_record(arqueo_id)
        return self._balance(record, self._pending_rows(record))

    def check_balance_for_date(self, fecha) -> list[BalanceCheck]:
        fecha = parse_iso_date(fecha)
        records = sorted(self._records.list_records(fecha=fecha), key=_record_order)
        return [self._balance(r, self._pending_rows(r)) for r in records]

    def confirm(self, arqueo_id: int, rows: Optional[Sequence[AllocationRow]] = None) -> int:
        """Replace the record's confirmed allocations with `rows` (default: its pending proposals).

        Only this record is written; confirming several records is one call each.
        """
        record = self._require_record(arqueo_id)
        rows = list(rows) if rows is not None else self._pending_rows(record)

        for row in rows:
            if not (row.legajo or "").strip():
                raise ValidationError("Cada asignación requiere legajo")

        balance = self._balance(record, rows)
        if not balance.balanced:
            logger.info(
                "Arqueo %s no cuadra: objetivo %.2f asignado %.2f (dif %+.2f)",
                record.arqueo_id,
                balance.objetivo,
                balance.asignado,
                balance.difference,
            )
            raise ReconciliationImbalance(
                f"El arqueo {record.arqueo_id} no cuadra: diferencia {balance.difference:+.2f}",
                groups=[balance],
            )

        count = self._records.confirm_allocations(record.arqueo_id, rows)
        logger.info("Arqueo %s confirmado: %s asignaciones", record.arqueo_id, count)
        return count

    def proposal_state(self, arqueo_id: int) -> ProposalState:
        record = self._require_record(arqueo_id)
        proposals = self._records.list_proposals(record.arqueo_id)
        if proposals:
            return ProposalState.EDITED if any(p.edited for p in proposals) else ProposalState.PROPOSED
        if self._records.list_allocations(record.arqueo_id):
            return ProposalState.CONFIRMED
        return ProposalState.NONE

    # --- views ---

    def load_for_date(self, fecha) -> ReconciliationDay:
        fecha = parse_iso_date(fecha)
        records = sorted(self._records.list_records(fecha=fecha), key=_record_order)

        proposals: list[AllocationProposal] = []
        allocations = []
        for r in records:
            proposals.extend(self._records.list_proposals(r.arqueo_id))
            allocations.extend(self._records.list_allocations(r.arqueo_id))
        return ReconciliationDay(fecha=fecha, arqueos=records, propuestas=proposals, asignaciones=allocations)

    def shift_totals(self, fecha) -> list[ShiftTotal]:
        fecha = parse_iso_date(fecha)
        totals = {code: {Sector.PLAYA: 0.0, Sector.SHOP: 0.0} for code in _SHIFT_ORDER}
        for r in self._records.list_records(fecha=fecha):
            if r.turno in totals:
                totals[r.turno][r.sector] += r.monto_diferencia
        return [ShiftTotal(turno=code, playa=v[Sector.PLAYA], shop=v[Sector.SHOP]) for code, v in totals.items()]

    def employee_month_allocations(self, legajo: str, month: str) -> tuple[list[EmployeeAllocationLine], float]:
        legajo = require_legajo(legajo)
        first, last = parse_month(month)
        lines = sorted(
            self._records.list_employee_allocations(legajo=legajo, start=first, end=last),
            key=lambda line: (line.fecha, _SECTOR_ORDER.get(line.sector, 9), _SHIFT_ORDER.get(line.turno, 9)),
        )
        return lines, sum(line.monto_final for line in lines)


def records_by_id(records: Iterable[ReconciliationRecord]) -> dict[int, ReconciliationRecord]:
    return {r.arqueo_id: r for r in records}
