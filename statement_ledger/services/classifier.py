from __future__ import annotations

from ..excel.values import cell_text
from ..models.config_models import DEFAULT_LAYOUT, StatementLayout
from ..models.transaction import RawRow

"""Row classification: which raw rows are real transactions."""

__all__ = [
    "cell_at",
    "is_valid_data_row",
]


def cell_at(row: RawRow, index: int):
    """Cell at a fixed position, None when the row is too short."""
    return row[index] if 0 <= index < len(row) else None


def is_valid_data_row(row: RawRow | None, layout: StatementLayout = DEFAULT_LAYOUT) -> bool:
    """True iff the row is long enough, has a description and is not a balance row.

    Header, footer and running-balance ("SALDO ...") rows are dropped this
    way; rejection is expected filtering, not an error.
    """
    if not row or len(row) < layout.min_row_length:
        return False
    desc = cell_text(cell_at(row, layout.description_column)).strip()
    return bool(desc) and layout.balance_marker.upper() not in desc.upper()
