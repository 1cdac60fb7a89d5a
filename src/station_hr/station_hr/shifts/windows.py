from __future__ import annotations

from typing import Optional

from ..core.constants import SECTOR_DEFAULT_WINDOWS
from ..core.enums import Sector, ShiftCode
from .model import PositionSchedule, ShiftWindow


def sector_window(sector: Optional[Sector], code: Optional[ShiftCode]) -> Optional[ShiftWindow]:
    """Default window of a shift for a sector (shop has no night shift)."""
    if sector is None or code is None:
        return None
    bounds = SECTOR_DEFAULT_WINDOWS.get(sector, {}).get(code)
    if not bounds:
        return None
    return ShiftWindow(start_min=bounds[0], end_min=bounds[1])


def resolve_window(
    code: Optional[ShiftCode],
    *,
    sector: Optional[Sector],
    position: Optional[PositionSchedule],
) -> Optional[ShiftWindow]:
    """Position configuration first, sector defaults otherwise.

    FRANCO, AUSENCIA and "no schedule" have no window.
    """
    if code is None or not code.is_working:
        return None
    if position is not None:
        window = position.window_for(code)
        if window is not None:
            return window
    return sector_window(sector, code)
