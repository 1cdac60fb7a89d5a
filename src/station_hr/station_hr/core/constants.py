"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Sector, ShiftCode

MINUTES_PER_DAY = 1440

# Allocated vs objective amount, per sector+shift group.
BALANCE_TOLERANCE = 0.01

# Sector default windows as (start, end) minutes from midnight; end may exceed 1440.
SECTOR_DEFAULT_WINDOWS = {
    Sector.PLAYA: {
        ShiftCode.MANIANA: (5 * 60, 13 * 60),
        ShiftCode.TARDE: (13 * 60, 21 * 60),
        ShiftCode.NOCHE: (21 * 60, 29 * 60),
    },
    Sector.SHOP: {
        ShiftCode.MANIANA: (6 * 60, 14 * 60),
        ShiftCode.TARDE: (14 * 60, 22 * 60),
    },
}

# Shifts that carry a cash reconciliation, in display order.
SECTOR_SHIFTS = {
    Sector.PLAYA: (ShiftCode.MANIANA, ShiftCode.TARDE, ShiftCode.NOCHE),
    Sector.SHOP: (ShiftCode.MANIANA, ShiftCode.TARDE),
}

# Positions that must always be covered; an uncovered slot raises a warning.
CRITICAL_POSITIONS = {
    "PLAYERO/A": Sector.PLAYA,
    "CAJERO/A": Sector.SHOP,
}

DEFAULT_RANGE_DAYS = 14
