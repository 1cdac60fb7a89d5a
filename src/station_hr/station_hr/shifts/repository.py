from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PositionSchedule


class PositionScheduleRepository(Protocol):
    def get_for_position(self, puesto: str) -> Optional[PositionSchedule]:
        raise NotImplementedError

    def list_all(self) -> Sequence[PositionSchedule]:
        raise NotImplementedError

    def upsert(self, schedule: PositionSchedule) -> None:
        raise NotImplementedError

    def delete(self, puesto: str) -> bool:
        raise NotImplementedError
