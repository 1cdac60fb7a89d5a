"""Monetary text parsing and formatting.

Amounts typed by users come in two notations:

- es-AR: "1.234,56" (dots group thousands, comma is the decimal point)
- plain: "1234.56" or "1.234.567.89" (the last dot is the decimal point)

Parsing never raises: malformed text is read as 0 so that a data-entry
screen keeps working, and the totals shown next to it expose the mistake.
"""

from __future__ import annotations

import math
import re

_NOT_NUMERIC = re.compile(r"[^\d.,-]")


def parse_money(value) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0

    s = _NOT_NUMERIC.sub("", str(value).strip())

    if "," in s:
        s = s.replace(".", "").replace(",", ".", 1)
    elif s.count(".") > 1:
        head, _, dec = s.rpartition(".")
        s = head.replace(".", "") + "." + dec

    try:
        n = float(s)
    except ValueError:
        return 0.0
    return n if math.isfinite(n) else 0.0


def round2(value: float) -> float:
    return round(float(value or 0), 2)


def format_money(value) -> str:
    """Format as es-AR with two decimals: 1234.5 -> "1.234,50"."""
    text = f"{float(value or 0):,.2f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")
