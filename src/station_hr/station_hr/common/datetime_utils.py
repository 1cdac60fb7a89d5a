from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Optional, Tuple

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "Fecha") -> date:
    """Parse YYYY-MM-DD string into date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    v = (value or "").strip()
    if not v:
        raise ValidationError(f"{field_name} es obligatoria")
    try:
        return datetime.strptime(v[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} inválida (YYYY-MM-DD): {value!r}")


def parse_month(value: str) -> Tuple[date, date]:
    """Parse YYYY-MM into (first day, last day) of that month."""
    v = (value or "").strip()
    try:
        first = datetime.strptime(v, "%Y-%m").date()
    except ValueError:
        raise ValidationError(f"Mes inválido (YYYY-MM): {value!r}")
    last_day = calendar.monthrange(first.year, first.month)[1]
    return first, first.replace(day=last_day)


def _utc_calendar_date(value) -> date:
    # Aware datetimes are compared on their UTC calendar date.
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def days_between(a, b) -> int:
    """Whole calendar days from `a` to `b` (negative when `b` is before `a`)."""
    return _utc_calendar_date(b).toordinal() - _utc_calendar_date(a).toordinal()


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every calendar day in [start, end]."""
    for offset in range(days_between(start, end) + 1):
        yield start + timedelta(days=offset)


def hhmm_to_minutes(value: Optional[str]) -> Optional[int]:
    v = (value or "").strip()
    if not v:
        return None
    parts = v.split(":")
    try:
        hours = int(parts[0])
        minutes = int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        raise ValidationError(f"Hora inválida (HH:MM): {value!r}")
    if hours < 0 or not 0 <= minutes < 60:
        raise ValidationError(f"Hora inválida (HH:MM): {value!r}")
    return hours * 60 + minutes


def minutes_to_hhmm(minutes: Optional[int]) -> str:
    """Format minutes from midnight; values past 24:00 wrap to the next day's clock."""
    if minutes is None:
        return ""
    minutes = int(minutes) % MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_time_range(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse "HH:MM-HH:MM" into (start, end) minutes.

    An end not after the start belongs to the next day (end + 1440).
    """
    v = (value or "").strip()
    if not v:
        return None
    if "-" not in v:
        raise ValidationError(f"Horario inválido (HH:MM-HH:MM): {value!r}")
    start_s, end_s = (p.strip() for p in v.split("-", 1))
    return normalize_window(hhmm_to_minutes(start_s), hhmm_to_minutes(end_s))


def normalize_window(start: Optional[int], end: Optional[int]) -> Optional[Tuple[int, int]]:
    if start is None or end is None:
        return None
    if end <= start:
        end += MINUTES_PER_DAY
    return int(start), int(end)


def minutes_since(day: date, moment: datetime) -> int:
    """Minutes from `day` 00:00 to `moment` (negative before, >= 1440 on later days)."""
    base = datetime.combine(day, time())
    if moment.tzinfo is not None:
        moment = moment.replace(tzinfo=None)
    return int((moment - base).total_seconds() // 60)


def overlap_minutes(a_start: int, a_end: int, b_start: int, b_end: int) -> int:
    """Length of the intersection of [a_start, a_end) and [b_start, b_end)."""
    return max(0, min(a_end, b_end) - max(a_start, b_start))
