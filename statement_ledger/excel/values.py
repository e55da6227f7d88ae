from __future__ import annotations

import math
import numbers
from datetime import date, datetime, timedelta
from typing import Any

"""Cell value parsers.

Every parser here is total: malformed input resolves to a fallback value
(0 for amounts, "" for dates) and nothing is raised. Statements are exported
with Spanish locale formatting ("1.234,56") and dates either as text or as
1900-system serial numbers.
"""

__all__ = [
    "cell_text",
    "format_currency",
    "parse_amount",
    "parse_date",
    "serial_to_date",
]

DATE_FORMAT = "%d/%m/%Y"

SECONDS_PER_DAY = 86400
# 1900 系シリアル値: 60 は存在しない 1900-02-29 (Lotus 互換バグ)
_LEAP_BUG_SERIAL = 60
_EPOCH_BEFORE_BUG = date(1899, 12, 31)
_EPOCH_AFTER_BUG = date(1899, 12, 30)


def _is_number(cell: Any) -> bool:
    return isinstance(cell, numbers.Real) and not isinstance(cell, bool)


def parse_amount(cell: Any) -> float:
    """Parse a monetary cell.

    - None → 0
    - number → used as-is (NaN/inf → 0)
    - text → every "." removed (thousands), first "," → "." (decimal), parsed;
      unparseable → 0

    >>> parse_amount("1.234,56")
    1234.56
    >>> parse_amount(None)
    0.0
    """
    if cell is None:
        return 0.0
    if _is_number(cell):
        value = float(cell)
        return value if math.isfinite(value) else 0.0
    text = str(cell).replace(".", "").replace(",", ".", 1)
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def serial_to_date(serial: float) -> tuple[int, int, int] | None:
    """Decode a 1900-system spreadsheet serial into (year, month, day).

    Serial 0 decodes to the placeholder day 0 of January 1900 and serial 60
    to the non-existent 29 February 1900, as spreadsheet applications do.
    Time fractions that round up to a full day roll over to the next date.
    Returns None for negative or out-of-range serials.
    """
    if not math.isfinite(serial) or serial < 0:
        return None
    day = int(math.floor(serial))
    if round((serial - day) * SECONDS_PER_DAY) >= SECONDS_PER_DAY:
        day += 1
    if day == 0:
        return (1900, 1, 0)
    if day == _LEAP_BUG_SERIAL:
        return (1900, 2, 29)
    epoch = _EPOCH_BEFORE_BUG if day < _LEAP_BUG_SERIAL else _EPOCH_AFTER_BUG
    try:
        d = epoch + timedelta(days=day)
    except OverflowError:
        return None
    return (d.year, d.month, d.day)


def parse_date(cell: Any) -> str:
    """Convert a date cell to a DD/MM/YYYY string.

    Serial numbers and datetime cells are formatted; text passes through
    unchanged; None and undecodable serials give "".
    """
    if cell is None:
        return ""
    if isinstance(cell, (datetime, date)):
        return cell.strftime(DATE_FORMAT)
    if _is_number(cell):
        parts = serial_to_date(float(cell))
        if parts is None:
            return ""
        year, month, day = parts
        return f"{day:02d}/{month:02d}/{year:04d}"
    return str(cell)


def cell_text(cell: Any) -> str:
    """Display text of a raw cell ("" for None, no trailing ".0" on integral floats)."""
    if cell is None:
        return ""
    if isinstance(cell, float) and math.isfinite(cell) and cell.is_integer():
        return str(int(cell))
    return str(cell)


def format_currency(amount: float, symbol: str = "$") -> str:
    return f"{symbol}{amount:.2f}"
