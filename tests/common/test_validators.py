import pytest

from src.station_hr.station_hr.common.validators import (
    normalize_legajo,
    parse_sector,
    parse_shift_code,
    require_exception_type,
    require_int,
    require_legajo,
    require_mapping,
)
from src.station_hr.station_hr.core.enums import ExceptionType, Sector, ShiftCode
from src.station_hr.station_hr.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("0012", "12"),
        ("12.0", "12"),
        (12, "12"),
        (" A-7 ", "A-7"),
        (None, ""),
        ("0012345678901234567890", "12345678901234567890"),
        ("12345678901234567890.00", "12345678901234567890"),
    ],
)
def test_normalize_legajo(raw, expected):
    assert normalize_legajo(raw) == expected


def test_require_legajo_rejects_blank():
    with pytest.raises(ValidationError):
        require_legajo("  ")


def test_sector_aliases():
    assert parse_sector("PLAYA") == Sector.PLAYA
    assert parse_sector("mini") == Sector.SHOP
    assert parse_sector("MINI") == Sector.SHOP
    assert parse_sector("oficina") is None


def test_shift_aliases():
    assert parse_shift_code("mañana") == ShiftCode.MANIANA
    assert parse_shift_code("M") == ShiftCode.MANIANA
    assert parse_shift_code("t") == ShiftCode.TARDE
    assert parse_shift_code("NOCHE") == ShiftCode.NOCHE
    assert parse_shift_code("") is None


def test_exception_type():
    assert require_exception_type("vacaciones") == ExceptionType.VACACIONES
    for raw in ("FERIADO", "", "  ", None):
        with pytest.raises(ValidationError):
            require_exception_type(raw)


@pytest.mark.parametrize("raw, expected", [("12", 12), (" 7 ", 7), (3, 3), (4.0, 4)])
def test_require_int(raw, expected):
    assert require_int(raw, "patron_id") == expected


@pytest.mark.parametrize("raw", ["abc", "1.5", 2.5, "", None, True, [1]])
def test_require_int_rejects(raw):
    with pytest.raises(ValidationError):
        require_int(raw, "patron_id")


def test_require_mapping():
    assert require_mapping({"turno": "M"}, "turno") == {"turno": "M"}
    with pytest.raises(ValidationError):
        require_mapping("MANIANA", "turno")
