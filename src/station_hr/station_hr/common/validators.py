from __future__ import annotations

import re
from typing import Optional

from ..core.enums import ExceptionType, Sector, ShiftCode
from ..core.exceptions import ValidationError

_NUMERIC_LEGAJO = re.compile(r"^\d+(\.0+)?$")

_SECTOR_ALIASES = {
    "playa": Sector.PLAYA,
    "shop": Sector.SHOP,
    "mini": Sector.SHOP,
}

_SHIFT_ALIASES = {
    "m": ShiftCode.MANIANA,
    "mañana": ShiftCode.MANIANA,
    "manana": ShiftCode.MANIANA,
    "maniana": ShiftCode.MANIANA,
    "t": ShiftCode.TARDE,
    "tarde": ShiftCode.TARDE,
    "n": ShiftCode.NOCHE,
    "noche": ShiftCode.NOCHE,
    "franco": ShiftCode.FRANCO,
    "ausencia": ShiftCode.AUSENCIA,
}


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} es obligatorio")
    return str(value).strip()


def normalize_legajo(value) -> str:
    """Legajo as a stable key: "0012", 12 and "12.0" all become "12"."""
    if value is None:
        return ""
    s = str(value).strip()
    if _NUMERIC_LEGAJO.match(s):
        return str(int(s.split(".")[0]))
    return s


def require_legajo(value) -> str:
    legajo = normalize_legajo(value)
    if not legajo:
        raise ValidationError("Legajo es obligatorio")
    return legajo


def parse_sector(value) -> Optional[Sector]:
    if isinstance(value, Sector):
        return value
    s = str(value or "").strip().lower()
    if not s:
        return None
    if s in _SECTOR_ALIASES:
        return _SECTOR_ALIASES[s]
    if "playa" in s:
        return Sector.PLAYA
    if "shop" in s or "mini" in s:
        return Sector.SHOP
    return None


def require_sector(value) -> Sector:
    sector = parse_sector(value)
    if sector is None:
        raise ValidationError(f"Sector inválido: {value!r}")
    return sector


def parse_shift_code(value) -> Optional[ShiftCode]:
    if isinstance(value, ShiftCode):
        return value
    s = str(value or "").strip()
    if not s:
        return None
    try:
        return ShiftCode(s.upper())
    except ValueError:
        return _SHIFT_ALIASES.get(s.lower())


def require_shift_code(value) -> ShiftCode:
    code = parse_shift_code(value)
    if code is None:
        raise ValidationError(f"Turno inválido: {value!r}")
    return code


def require_exception_type(value) -> ExceptionType:
    s = str(value or "").strip().upper()
    if not s:
        raise ValidationError("Tipo de excepción es obligatorio")
    try:
        return ExceptionType(s)
    except ValueError:
        raise ValidationError(f"Tipo de excepción inválido: {value!r}")


def require_int(value, field_name: str) -> int:
    """Integer from JSON/form input ("12", 12, 12.0); anything else is a ValidationError."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} inválido: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    s = str(value if value is not None else "").strip()
    if not s:
        raise ValidationError(f"{field_name} es obligatorio")
    try:
        return int(s)
    except ValueError:
        raise ValidationError(f"{field_name} inválido: {value!r}")


def require_mapping(value, field_name: str) -> dict:
    if not isinstance(value, dict):
        raise ValidationError(f"{field_name} debe ser un objeto")
    return value
